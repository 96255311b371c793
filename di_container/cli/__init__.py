"""Command line interface for di-container."""

from .app import app, main

__all__ = ["app", "main"]
