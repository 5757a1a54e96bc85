import sys

from rustnarrator.cli import main

sys.exit(main())
