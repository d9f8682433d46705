"""Allow ``python -m pathscan``."""

import sys

from pathscan.main import main

sys.exit(main())
