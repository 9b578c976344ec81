"""Distribution-named alias exposing the main FastAPI app."""

from __future__ import annotations

from cinephile.main import app, create_app

__all__ = ["app", "create_app"]
