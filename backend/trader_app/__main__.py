"""Allow ``python -m trader_app``."""

import sys

from trader_app.main import main

sys.exit(main())
