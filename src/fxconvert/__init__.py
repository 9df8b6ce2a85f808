# src/fxconvert/__init__.py
"""
fxconvert - Daily Exchange Rates and Currency Conversion API

An HTTP service that mirrors the ECB daily reference rates into Redis on a
cron schedule and answers latest-rate and conversion queries with exact
decimal arithmetic.
"""

__version__ = "0.2.0"
