"""Allow ``python -m docpager``."""

import sys

from .cli import main

sys.exit(main())
