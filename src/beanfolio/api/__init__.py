"""HTTP API for exports and ledger saves."""

from .app import create_app

__all__ = ["create_app"]
