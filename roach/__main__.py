import sys

from roach.cli import main

sys.exit(main())
