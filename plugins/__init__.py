# plugins/__init__.py
"""
Bundled sub-commands, discovered at boot by `switchboard.interface.loader`.

Each module (or `<group>/entrypoint.py`) exports `SUBCOMMANDS`.
"""
