import sys

from pylinsolve.cli import main

sys.exit(main())
