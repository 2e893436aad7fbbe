"""Allow ``python -m spectable``."""

import sys

from spectable.cli import main

sys.exit(main())
