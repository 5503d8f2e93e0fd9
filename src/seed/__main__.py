import sys

from src.seed.cli import main

sys.exit(main())
