# src/fxconvert/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (upstream feed)
- Persistence (Redis)
- Scheduler (recurring updates)
- HTTP (JSON API)
"""

__all__ = []
