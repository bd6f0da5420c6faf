"""Vercel serverless entrypoint for the birthday board."""

from __future__ import annotations

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# The function's working directory is not guaranteed to be the project root.
os.environ.setdefault("ASSETS_DIR", str(ROOT / "assets"))
os.environ.setdefault("PHOTOS_DIR", str(ROOT / "photos"))
os.environ.setdefault("ROSTER_CSV_PATH", str(ROOT / "birthdays.csv"))

from birthday_board.api.asgi import app  # noqa: E402

__all__ = ["app"]
