"""Command-line interface module for the DOM analyzer.

This module provides the ``dom-analyzer`` command for analyzing markup files,
listing parser backends and serving the web page.
"""

from .main import main

__all__ = ["main"]
