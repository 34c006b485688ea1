#!/usr/bin/env python3
# orbit/boot/boot.py
from __future__ import annotations
"""
Boot sequence for the Orbit shell.

Steps print Linux-style [  OK  ] / [FAILED] lines and the resulting
objects are collected in BootState for the REPL.
"""

import importlib
import logging
import platform
from dataclasses import dataclass
from typing import Any, Callable

from orbit.commands import REGISTRY, PluginRegistry
from orbit.config import AppConfig, load_config
from orbit.interface import (
    BaseCLI,
    ExecutionParser,
    PromptToolkitShell,
    Shell,
    make_cli,
)
from orbit.ui import colorize, enable_windows_vt, init_logger, print_line, set_terminal_title


@dataclass(slots=True)
class BootState:
    logger: logging.Logger
    config: AppConfig
    registry: PluginRegistry
    shell: Shell
    parser: ExecutionParser
    cli: BaseCLI


def _step(label: str, fn: Callable[[], Any]) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
        )
        raise
    print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def _import_plugin_modules(modules: tuple[str, ...]) -> int:
    """Import configured modules; each registers its plugins on import."""
    for module_name in modules:
        importlib.import_module(module_name)
    return len(modules)


def boot_sequence(registry: PluginRegistry = REGISTRY) -> BootState:
    # ---------- console + env ----------
    _step("Enable ANSI sequences", enable_windows_vt)
    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
    )

    # ---------- config ----------
    config = _step("Load configuration", load_config)

    # ---------- logging ----------
    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "orbit",
            level=config.log_level or logging.INFO,
            logfile=str(config.log_file_path) if config.log_file_path else None,
        ),
    )

    # ---------- plugins ----------
    _step(f"Import plugin modules ({len(config.plugin_modules)})",
          lambda: _import_plugin_modules(config.plugin_modules))
    plugin_count = _step("Collect plugin metadata", lambda: len(registry.all()))

    # ---------- shell ----------
    shell = _step("Open interactive shell", PromptToolkitShell)
    parser = _step("Prepare command resolution", lambda: ExecutionParser(registry, shell))
    cli = _step(
        "Prepare line editor",
        lambda: make_cli(
            registry,
            history_path=config.history_file_path,
            prompt_text=config.prompt,
            enable_completion=config.enable_completion,
        ),
    )

    set_terminal_title(f"orbit • {plugin_count} plugins")
    _step("Boot complete", lambda: None)
    logger.debug("booted with %d plugin(s)", plugin_count)

    return BootState(
        logger=logger,
        config=config,
        registry=registry,
        shell=shell,
        parser=parser,
        cli=cli,
    )
