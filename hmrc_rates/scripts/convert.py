"""CLI entry point for converting amounts into pounds."""

from __future__ import annotations

import sys

from hmrc_rates.cli import main

if __name__ == "__main__":  # pragma: no cover - thin wrapper
    sys.exit(main())
