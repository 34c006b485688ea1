#!/usr/bin/env python3
# orbit/plugins/__init__.py
from __future__ import annotations

"""
Sample plugins shipped with the shell.

Submodules register on import; boot imports the ones listed in
PLUGIN_MODULES (both by default):
- orbit.plugins.fs:   `fs ls|cat|mkdir|copy`
- orbit.plugins.echo: `echo <words...>` (default command only)
"""
