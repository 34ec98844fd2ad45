"""Main entry point for running kuadrat_pkg as a module.

This allows running Kuadrat with:
    python -m kuadrat_pkg
    python -m kuadrat_pkg 1 0 -16
    python -m kuadrat_pkg -u -f fixtures.txt

This is equivalent to running:
    python -m kuadrat_pkg.cli
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
