"""Pytest configuration shared across all test modules.

Environment variables are pinned here, before any test module imports
settings, so local .env files and shell variables cannot change behaviour.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ["RATE_LIMIT_ENABLED"] = "true"
os.environ["RATE_LIMIT_BACKEND"] = "memory"
os.environ["RATE_LIMIT_MAX_REQUESTS"] = "5"
os.environ["RATE_LIMIT_WINDOW_SECONDS"] = "60"
os.environ["RATE_LIMIT_TRUSTED_PROXY_DEPTH"] = "0"
os.environ.setdefault("LOG_LEVEL", "WARNING")
