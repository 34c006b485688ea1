#!/usr/bin/env python3
# orbit/__main__.py
from __future__ import annotations

"""Entry point: `python -m orbit` boots the shell and runs the REPL."""

from orbit.boot import boot_sequence
from orbit.interface import HELP_TEXT, handle_line
from orbit.ui import print_line


def main() -> int:
    state = boot_sequence()
    print_line(HELP_TEXT)

    with state.cli as cli:
        while True:
            try:
                line = cli.get_line()
            except KeyboardInterrupt:
                continue
            except EOFError:
                break

            try:
                output = handle_line(line, state.parser)
            except SystemExit:
                break
            except (KeyboardInterrupt, EOFError):
                # Prompt cancelled while completing parameters
                print_line("^C")
                continue

            if output:
                print_line(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
