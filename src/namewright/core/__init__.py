"""Core functionality for namewright.

- RenamerRegistry / default_registry: the renamer strategies available.
- get_filename / get_destination: ask the renamers in priority order.
"""

from namewright.core.dispatch import (
    RenamerRegistry,
    default_registry,
    get_destination,
    get_filename,
    remove_filename,
)

__all__ = [
    "RenamerRegistry",
    "default_registry",
    "get_destination",
    "get_filename",
    "remove_filename",
]
