#!/usr/bin/env python3
# orbit/__init__.py
from __future__ import annotations
"""
Orbit: an interactive plugin shell.

Raw lines are resolved to a plugin command, parsed against declarative
option metadata and completed interactively before dispatch.

Only the metadata API is re-exported here; the interface and boot
packages are imported explicitly by callers.
"""

__version__ = "0.1.0"

from orbit.commands import (  # noqa: F401
    REGISTRY,
    CommandMetadata,
    OptionMetadata,
    PluginMetadata,
    command,
    plugin,
    register_plugin,
)
