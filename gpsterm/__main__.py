"""Allow ``python -m gpsterm``."""

from gpsterm.cli import main

raise SystemExit(main())
