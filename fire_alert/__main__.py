"""Allow ``python -m fire_alert``."""

import sys

from .cli.main import main

sys.exit(main())
