import sys

from termhisto.cli import main

sys.exit(main())
