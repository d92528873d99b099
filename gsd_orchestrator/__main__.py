"""Run with ``python -m gsd_orchestrator``."""

import sys

from gsd_orchestrator.cli import main

if __name__ == "__main__":
    sys.exit(main())
