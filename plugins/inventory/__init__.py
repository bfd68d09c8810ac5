# plugins/inventory/__init__.py
from __future__ import annotations

"""
Inventory command group: sub-commands that need a physical actor holding an item.
"""
