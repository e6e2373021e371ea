import sys

from nomonic.cli import main

sys.exit(main())
