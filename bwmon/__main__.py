import sys

from bwmon.cli import main

sys.exit(main())
