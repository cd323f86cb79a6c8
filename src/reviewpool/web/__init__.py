"""HTTP API for Reviewpool."""

from __future__ import annotations

from reviewpool.web.app import create_app

__all__ = ["create_app"]
