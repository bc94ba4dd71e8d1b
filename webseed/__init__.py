"""Minimal FastAPI web application seed: pages, API routes and templates."""

__version__ = "0.1.0"
