import sys

from pytreatreg.cli import main

sys.exit(main())
