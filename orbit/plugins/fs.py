#!/usr/bin/env python3
# orbit/plugins/fs.py
from __future__ import annotations

"""
Filesystem plugin: list, read, create and copy files relative to the CWD.

Loaded through PLUGIN_MODULES; importing the module registers `fs`.
"""

import shutil
from datetime import datetime
from pathlib import Path

from orbit.commands import PatternKind, argument, command, flag, option, plugin, register_plugin
from orbit.ui import format_table


# -------------------------- helpers --------------------------

def _fmt_size(n: int) -> str:
    units = ["B", "KB", "MB", "GB", "TB"]
    i = 0
    f = float(n)
    while f >= 1024 and i < len(units) - 1:
        f /= 1024.0
        i += 1
    return f"{f:.1f} {units[i]}"


# -------------------------- commands --------------------------

@command(
    argument("path", path=True, default="."),
    flag("all", short="a", description="Include dotfiles."),
    example="fs ls src -a",
)
def ls(path, show_all) -> str:
    """List directory contents; a file path lists its parent."""
    target = Path(path)
    if not target.exists():
        return f"Not found: {target}"
    show_dir = target if target.is_dir() else target.parent

    rows = []
    for entry in sorted(show_dir.iterdir(), key=lambda x: (not x.is_dir(), x.name.lower())):
        if entry.name.startswith(".") and not show_all:
            continue
        stat = entry.stat()
        rows.append([
            entry.name,
            "<DIR>" if entry.is_dir() else "FILE",
            "" if entry.is_dir() else _fmt_size(stat.st_size),
            datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M"),
        ])
    if not rows:
        return f"{show_dir} is empty."
    return format_table(rows, headers=["Name", "Type", "Size", "Modified"])


@command(
    argument("path", path=True, required=True),
    option("lines", short="n", pattern=PatternKind.INTEGER, description="Only the first N lines."),
    example="fs cat notes.txt -n 20",
)
def cat(path, lines) -> str:
    """Print file contents."""
    target = Path(path)
    if not target.is_file():
        return f"File not found: {target}"
    text = target.read_text(encoding="utf-8", errors="replace")
    if lines is not None:
        # an unvalidated correction may still be junk
        try:
            text = "\n".join(text.splitlines()[:max(int(lines), 0)])
        except ValueError:
            return f"Not a line count: {lines}"
    return text


@command(
    argument("path", path=True, required=True),
    flag("parents", short="p", description="Create missing parent directories."),
    example="fs mkdir build/out -p",
)
def mkdir(path, parents) -> str:
    """Create a directory."""
    target = Path(path)
    target.mkdir(parents=bool(parents), exist_ok=bool(parents))
    return f"Created {target}"


@command(
    argument("src", path=True, required=True),
    argument("dst", path=True, required=True),
    flag("force", short="f", description="Overwrite an existing destination."),
    example="fs copy a.txt b.txt --force",
)
def copy(src, dst, force) -> str:
    """Copy a file."""
    source, dest = Path(src), Path(dst)
    if not source.is_file():
        return f"File not found: {source}"
    if dest.is_dir():
        dest = dest / source.name
    if dest.exists() and not force:
        return f"{dest} exists; use --force to overwrite."
    shutil.copy2(source, dest)
    return f"Copied {source} -> {dest}"


FS_PLUGIN = register_plugin(
    plugin("fs", ls, cat, mkdir, copy, description="Work with files in the current directory.")
)
