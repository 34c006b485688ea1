#!/usr/bin/env python3
# orbit/config/__init__.py
from __future__ import annotations

"""
Package for shell configuration.

Provides:
- Configuration loader with file and environment variable overrides (`config`).
"""


from .config import AppConfig, DEFAULTS, ENV_PREFIX, load_config

__all__ = [
    "AppConfig",
    "DEFAULTS",
    "ENV_PREFIX",
    "load_config",
]
