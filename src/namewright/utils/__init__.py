"""Utility modules for namewright."""

from namewright.utils.config import RenamerSettings, load_settings, resolve_setting
from namewright.utils.sanitize import replace_invalid_folder_name_characters

__all__ = [
    "RenamerSettings",
    "load_settings",
    "resolve_setting",
    "replace_invalid_folder_name_characters",
]
