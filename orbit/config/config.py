#!/usr/bin/env python3
# orbit/config/config.py
from __future__ import annotations

"""
Shell configuration.

Sources, later ones winning:
  1) DEFAULTS below
  2) `orbit.toml` in the working directory (top level or an [orbit] table)
  3) `.env` in the working directory (KEY=VALUE lines)
  4) Environment variables prefixed with ORBIT_ (e.g. ORBIT_LOG_LEVEL)

Each recognised key has a coercer in _FIELDS; a bad value raises ValueError
naming the key. Unknown keys are kept in AppConfig.extra.
"""

import os
import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

ENV_PREFIX = "ORBIT_"
TOML_FILE = "orbit.toml"
DOTENV_FILE = ".env"

DEFAULTS: dict[str, Any] = {
    "LOG_LEVEL": None,
    "LOG_FILE_PATH": None,
    "HISTORY_FILE_PATH": "~/.orbit_history",
    "PROMPT": None,
    "ENABLE_COMPLETION": True,
    "PLUGIN_MODULES": "orbit.plugins.fs,orbit.plugins.echo",
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_MODULE_RE = re.compile(r"[A-Za-z_]\w*(\.[A-Za-z_]\w*)*")
_DOTENV_RE = re.compile(r"([A-Za-z_]\w*)\s*=\s*(.*)")


@dataclass(frozen=True)
class AppConfig:
    log_level: str | None
    log_file_path: Path | None
    history_file_path: Path
    prompt: str | None
    enable_completion: bool
    plugin_modules: tuple[str, ...]

    # Keys nobody asked for, kept for plugins and debugging
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- sources ----------

def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"{path.name}: {exc}") from exc

    table = data.get("orbit", data)
    out: dict[str, Any] = {}
    for key, value in table.items():
        if isinstance(value, Mapping):
            # [plugin] modules = [...] -> PLUGIN_MODULES
            for sub_key, sub_value in value.items():
                out[f"{key}_{sub_key}".upper()] = sub_value
        else:
            out[key.upper()] = value
    return out


def _read_dotenv(path: Path) -> dict[str, str]:
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        return {}

    out: dict[str, str] = {}
    for line in lines:
        line = line.strip()
        if line.startswith("#"):
            continue
        m = _DOTENV_RE.fullmatch(line)
        if m is None:
            continue
        value = m.group(2).strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        out[m.group(1).upper()] = value
    return out


def _read_environ(environ: Mapping[str, str]) -> dict[str, str]:
    return {
        key[len(ENV_PREFIX):]: value
        for key, value in environ.items()
        if key.startswith(ENV_PREFIX) and key[len(ENV_PREFIX):]
    }


# ---------- coercion ----------

def _blank(val: Any) -> bool:
    return val is None or str(val).strip().lower() in ("", "none")


def _to_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    text = str(val).strip().lower()
    if text in ("1", "true", "yes", "y", "on"):
        return True
    if text in ("0", "false", "no", "n", "off"):
        return False
    raise ValueError(f"expected a boolean, got {val!r}")


def _to_level(val: Any) -> str | None:
    if _blank(val):
        return None
    level = str(val).strip().upper()
    if level not in _LOG_LEVELS:
        raise ValueError(f"expected one of {list(_LOG_LEVELS)}, got {val!r}")
    return level


def _to_path(val: Any) -> Path:
    return Path(os.path.expandvars(str(val))).expanduser().resolve()


def _to_opt_path(val: Any) -> Path | None:
    return None if _blank(val) else _to_path(val)


def _to_opt_str(val: Any) -> str | None:
    return None if _blank(val) else str(val)


def _to_modules(val: Any) -> tuple[str, ...]:
    if _blank(val):
        return ()
    items = val if isinstance(val, (list, tuple)) else str(val).split(",")
    modules = tuple(name for name in (str(item).strip() for item in items) if name)
    for name in modules:
        if not _MODULE_RE.fullmatch(name):
            raise ValueError(f"invalid module name {name!r}")
    return modules


# key -> (AppConfig attribute, coercer)
_FIELDS: dict[str, tuple[str, Callable[[Any], Any]]] = {
    "LOG_LEVEL": ("log_level", _to_level),
    "LOG_FILE_PATH": ("log_file_path", _to_opt_path),
    "HISTORY_FILE_PATH": ("history_file_path", _to_path),
    "PROMPT": ("prompt", _to_opt_str),
    "ENABLE_COMPLETION": ("enable_completion", _to_bool),
    "PLUGIN_MODULES": ("plugin_modules", _to_modules),
}


# ---------- public API ----------

def load_config(base: Path | None = None, environ: Mapping[str, str] | None = None) -> AppConfig:
    """
    Merge every source over DEFAULTS and build an AppConfig.

    `base` is the directory searched for files (defaults to CWD) and
    `environ` replaces os.environ, mainly for tests. Nothing is written.
    """
    directory = base or Path.cwd()
    merged: dict[str, Any] = dict(DEFAULTS)
    merged.update(_read_toml(directory / TOML_FILE))
    merged.update(_read_dotenv(directory / DOTENV_FILE))
    merged.update(_read_environ(os.environ if environ is None else environ))

    kwargs: dict[str, Any] = {}
    for key, (attr, coerce) in _FIELDS.items():
        try:
            kwargs[attr] = coerce(merged[key])
        except ValueError as exc:
            raise ValueError(f"{key}: {exc}") from exc

    extra = {k: v for k, v in merged.items() if k not in _FIELDS}
    return AppConfig(**kwargs, extra=extra)
