"""Location of the HMRC monthly XML files shipped with the package."""

from __future__ import annotations

from pathlib import Path
from typing import Final

__all__ = ["DEFAULT_DATA_DIR"]

# Resolved from this file so the directory is found from site-packages too.
DEFAULT_DATA_DIR: Final[Path] = Path(__file__).resolve().parent
