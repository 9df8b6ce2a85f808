# src/fxconvert/adapters/http/__init__.py
"""
HTTP Adapter - JSON API

This package contains the FastAPI application, its response schemas and
the translation of domain errors into HTTP responses.
"""

from fxconvert.adapters.http.api import create_app

__all__ = ["create_app"]
