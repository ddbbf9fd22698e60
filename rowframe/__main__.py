"""Allow ``python -m rowframe``."""

import sys

from .cli import main

sys.exit(main())
