import sys

from bracketeer.cli import main

sys.exit(main())
