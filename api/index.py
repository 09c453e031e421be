"""Serverless function entrypoint; the platform imports ``app`` from here."""

import sys
from pathlib import Path

_SRC_DIR = Path(__file__).resolve().parent.parent / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from photo_studio.api.asgi import app  # noqa: E402

__all__ = ["app"]
