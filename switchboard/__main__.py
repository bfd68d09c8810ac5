#!/usr/bin/env python3
# switchboard/__main__.py
from __future__ import annotations
"""
Console entry point: `python -m switchboard [--config FILE]`.
"""

import argparse
from functools import partial

from switchboard.boot import boot_sequence
from switchboard.interface import ConsoleSender, make_cli, run_console, suggest


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="switchboard",
                                     description="Interactive console for a root command.")
    parser.add_argument("-c", "--config", help="TOML, JSON or INI configuration file")
    parser.add_argument("--no-completion", action="store_true",
                        help="read plain lines without completion or history")
    args = parser.parse_args(argv)

    state = boot_sequence(args.config)
    sender = ConsoleSender(
        permissions=tuple(state.config.load_str_list("console.permissions", ["*"])),
        locale=state.config.load_str("console.locale") or None,
    )
    suggester = None if args.no_completion else partial(suggest, state.dispatcher, sender)
    run_console(state.dispatcher, sender, make_cli(suggester, prompt=f"/{state.dispatcher.name} > "))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
