# plugins/system/__init__.py
from __future__ import annotations

"""
System command group:
- echo / whoami for checking what the console sees
- roll, a dice roller with configurable limits
- reload of configuration and message catalogs
"""
