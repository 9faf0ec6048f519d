"""Allow running the shell with ``python -m opshell``."""

import sys

from .cli import main

sys.exit(main())
