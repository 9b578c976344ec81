"""Pytest configuration and test helpers."""

from __future__ import annotations

import sys
from pathlib import Path


# Make the ``cinephile`` package importable without an editable install; it
# sits at the project root next to this tests directory.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
