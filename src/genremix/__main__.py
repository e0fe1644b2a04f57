import sys

from genremix.cli import main

sys.exit(main())
