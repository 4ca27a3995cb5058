"""Web front end serving the analyzer page and JSON endpoint."""

from .app import create_app, run_server

__all__ = ["create_app", "run_server"]
