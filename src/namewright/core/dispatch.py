"""Renamer dispatch.

Holds the registry of renamer strategies and asks them, in priority order,
for a filename or a destination. A strategy that answers None defers to the
next one. A strategy that raises either aborts the request or, when
``defer_on_error`` is set, is logged and skipped.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import Callable, Dict, List, Optional

from namewright.models.requests import Destination, PlacementRequest, RenameRequest
from namewright.rules.base import Renamer
from namewright.rules.legacy import LegacyRenamer
from namewright.utils.config import RenamerSettings

logger = logging.getLogger(__name__)

RenamerFactory = Callable[[RenamerSettings], Renamer]


@dataclass(frozen=True)
class RegisteredRenamer:
    renamer_id: str
    factory: RenamerFactory
    description: str = ""


class RenamerRegistry:
    """Renamer strategies available to the dispatcher, keyed by id."""

    def __init__(self) -> None:
        self._renamers: Dict[str, RegisteredRenamer] = {}

    def __contains__(self, renamer_id: object) -> bool:
        return renamer_id in self._renamers

    def __len__(self) -> int:
        return len(self._renamers)

    def register(
        self, renamer_id: str, factory: RenamerFactory, description: str = ""
    ) -> bool:
        """Add a renamer. Returns False (and keeps the first) for a duplicate id."""
        if renamer_id in self._renamers:
            logger.warning(
                "Duplicate renamer id %r ignored (already registered as %r)",
                renamer_id,
                self._renamers[renamer_id].factory,
            )
            return False
        logger.info("Added renamer: %s - %s", renamer_id, description)
        self._renamers[renamer_id] = RegisteredRenamer(renamer_id, factory, description)
        return True

    def entries(self) -> List[RegisteredRenamer]:
        return list(self._renamers.values())

    def sorted_renamers(
        self, script_type: Optional[str], settings: RenamerSettings
    ) -> List[Renamer]:
        """Instantiate the enabled renamers in the order they should be asked.

        When *script_type* names a renamer only that renamer is eligible.
        Otherwise renamers are ordered by configured priority, then by id.
        """
        eligible = [
            entry
            for entry in self._renamers.values()
            if (not script_type or entry.renamer_id == script_type)
            and settings.enabled_renamers.get(entry.renamer_id, True)
        ]

        def order(entry: RegisteredRenamer) -> tuple[int, float, str]:
            priority = settings.renamer_priorities.get(entry.renamer_id)
            return (
                0 if entry.renamer_id == script_type else 1,
                float("inf") if priority is None else priority,
                entry.renamer_id,
            )

        return [entry.factory(settings) for entry in sorted(eligible, key=order)]


def default_registry() -> RenamerRegistry:
    """Registry holding the built-in renamers."""
    registry = RenamerRegistry()
    registry.register(
        LegacyRenamer.renamer_id,
        lambda settings: LegacyRenamer(settings),
        LegacyRenamer.description,
    )
    return registry


def remove_filename(relative_path: str, dest_path: str) -> str:
    """Drop a trailing ``/<filename>`` of *relative_path* from *dest_path*.

    >>> remove_filename("Show/ep01.mkv", "Show/ep01.mkv")
    'Show'
    """
    name = os.sep + PurePath(relative_path).name
    last = dest_path.rfind(os.sep)
    if last < 0 or last >= len(dest_path) - 1:
        return dest_path
    if dest_path[last:] == name:
        return dest_path[:last]
    return dest_path


def get_filename(
    request: RenameRequest,
    registry: Optional[RenamerRegistry] = None,
    settings: Optional[RenamerSettings] = None,
) -> str:
    """Ask each renamer for a new filename.

    Returns:
        The first non-empty answer, or the current filename when every
        renamer deferred.

    Raises:
        RenameError: If a renamer raises and ``defer_on_error`` is off.
    """
    registry = registry or default_registry()
    settings = settings or RenamerSettings()
    current = request.file.path.name
    script_type = request.script.renamer_type if request.script else None

    for renamer in registry.sorted_renamers(script_type, settings):
        try:
            result = renamer.get_filename(request)
        except Exception as e:
            if not settings.defer_on_error:
                raise
            logger.warning(
                'Renamer %s raised while renaming, deferring to next renamer. '
                'Filename: "%s" Error: "%s"',
                renamer.renamer_id,
                current,
                e,
            )
            continue
        if result:
            return result

    return current


def get_destination(
    request: PlacementRequest,
    registry: Optional[RenamerRegistry] = None,
    settings: Optional[RenamerSettings] = None,
) -> Optional[Destination]:
    """Ask each renamer for a destination.

    Answers with an empty sub-path, or whose root folder is not one of the
    request's folders, are skipped. The sub-path has any trailing copy of the
    file's own name removed.

    Returns:
        The first usable destination, or None.

    Raises:
        RenameError: If a renamer raises and ``defer_on_error`` is off.
    """
    registry = registry or default_registry()
    settings = settings or RenamerSettings()
    script_type = request.script.renamer_type if request.script else None
    known_folders = {folder.path for folder in request.folders}

    for renamer in registry.sorted_renamers(script_type, settings):
        try:
            destination = renamer.get_destination(request)
        except Exception as e:
            if not settings.defer_on_error:
                raise
            logger.warning(
                'Renamer %s raised while moving, deferring to next renamer. '
                'Path: "%s" Error: "%s"',
                renamer.renamer_id,
                request.location.absolute_path,
                e,
            )
            continue

        if destination is None or not destination.subfolder:
            continue
        if destination.folder.path not in known_folders:
            logger.error(
                "Renamer %s returned unknown destination folder %s",
                renamer.renamer_id,
                destination.folder.path,
            )
            continue

        subfolder = destination.subfolder
        if os.altsep:
            subfolder = subfolder.replace(os.altsep, os.sep)
        subfolder = remove_filename(request.location.relative_path, subfolder)
        return destination.model_copy(update={"subfolder": subfolder})

    return None
