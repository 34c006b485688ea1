#!/usr/bin/env python3
# orbit/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: Startup pipeline with Linux-style [ OK ] / [FAILED] lines.
- BootState: Dataclass containing logger, config, registry, shell, parser and line editor.
"""


from .boot import BootState, boot_sequence

__all__ = ["boot_sequence", "BootState"]
