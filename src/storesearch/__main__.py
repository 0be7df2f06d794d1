import sys

from storesearch.cli import main

sys.exit(main())
