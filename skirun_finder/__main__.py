import sys

from skirun_finder.cli import main

sys.exit(main())
