import sys

from treesummary.cli import main

sys.exit(main())
