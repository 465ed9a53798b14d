"""Renamer strategies and the rename script language."""

from namewright.rules.base import Renamer
from namewright.rules.legacy import LegacyRenamer, build_context, run_script
from namewright.rules.placement import PlacementResolver

__all__ = [
    "Renamer",
    "LegacyRenamer",
    "PlacementResolver",
    "build_context",
    "run_script",
]
