"""Destination placement for files being organized.

A file is placed next to the most recently aired sibling episode of the same
series that already lives in the library. When no sibling offers a usable
folder, the file goes to the default drop destination under a folder named
after the series.

Design:
- Root folders are passed in with each request; nothing is read from global
  state, so the result depends only on the request and the probe.
- Filesystem queries go through :class:`~namewright.fs.probe.FileSystemProbe`.
  A failing free-space query makes that folder unusable instead of aborting
  the search.
- Free space is only checked when the target is on another filesystem than
  the file, since a same-filesystem move needs no extra room.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

from namewright.errors import DestinationError, ProbeError
from namewright.fs.probe import FileSystemProbe
from namewright.models.core import FileLocation, FileView, FolderView, SeriesEpisode, SeriesView
from namewright.models.requests import Destination, PlacementCandidate, PlacementRequest
from namewright.utils.sanitize import replace_invalid_folder_name_characters

logger = logging.getLogger(__name__)

NO_XREFS = "No xrefs"
SERIES_NOT_FOUND = "Series not Found"
UNRESOLVABLE = "Unable to resolve a destination"


def _air_date_key(entry: SeriesEpisode) -> tuple[bool, datetime]:
    air_date = entry.episode.air_date
    return air_date is not None, air_date or datetime.min


def _same_directory(first: Path, second: Path) -> bool:
    return os.path.normcase(os.path.normpath(first)).lower() == (
        os.path.normcase(os.path.normpath(second)).lower()
    )


def placeable_location(video: FileView) -> Optional[FileLocation]:
    """First on-disk location of *video* if it only lives in excluded folders."""
    if not video.locations:
        return None
    if not all(location.folder.is_excluded for location in video.locations):
        return None
    return video.locations[0]


class PlacementResolver:
    """Pick a destination folder for a file from its sibling episodes."""

    def __init__(
        self,
        probe: Optional[FileSystemProbe] = None,
        *,
        skip_disk_space_checks: bool = False,
    ) -> None:
        self.probe = probe or FileSystemProbe()
        self.skip_disk_space_checks = skip_disk_space_checks

    def has_space_for(self, request: PlacementRequest, folder_path: Path) -> bool:
        """Return True if *folder_path* can receive the file being placed."""
        if self.skip_disk_space_checks:
            return True
        if self.probe.same_filesystem(request.location.absolute_path, folder_path):
            return True
        try:
            available = self.probe.free_space(folder_path)
        except ProbeError as e:
            logger.error(str(e))
            available = 0
        return available >= request.file.size

    def default_destination(self, request: PlacementRequest) -> Optional[FolderView]:
        """First drop destination (not also a drop source) that can take the file."""
        for folder in request.folders:
            if not folder.is_drop_destination or folder.is_drop_source:
                continue
            if not self.probe.exists(folder.path):
                continue
            if not self.has_space_for(request, folder.path):
                logger.debug("Not enough free space in %s", folder.path)
                continue
            return folder
        return None

    def linked_series(self, request: PlacementRequest) -> SeriesView:
        """Series the file is cross-referenced to.

        Raises:
            DestinationError: If the file has no cross references or the
                series is missing.
        """
        xrefs = [xref for xref in request.file.cross_references if xref is not None]
        if not xrefs:
            raise DestinationError(NO_XREFS)
        series = xrefs[0].series
        if series is None:
            raise DestinationError(SERIES_NOT_FOUND)
        return series

    def iter_candidates(
        self, request: PlacementRequest, series: SeriesView
    ) -> Iterator[PlacementCandidate]:
        """Sibling file locations, most recently aired episode first.

        Crossover episodes (linked to more than one series), the file itself
        and files with a location outside the excluded folders are skipped.
        """
        own_hash = request.file.ed2k.lower()
        for entry in sorted(series.episodes, key=_air_date_key, reverse=True):
            if entry.is_crossover:
                logger.debug("Skipping crossover episode %s", entry.episode.id)
                continue
            for video in entry.videos:
                if video.ed2k.lower() == own_hash:
                    continue
                location = placeable_location(video)
                if location is None:
                    continue
                yield PlacementCandidate(
                    location=location,
                    folder=location.folder,
                    subfolder=location.subfolder,
                )

    def is_usable(self, request: PlacementRequest, candidate: PlacementCandidate) -> bool:
        target = candidate.folder.path / candidate.subfolder
        if not self.probe.exists(target):
            return False
        if not self.has_space_for(request, candidate.folder.path):
            logger.debug("Not enough free space in %s", candidate.folder.path)
            return False
        # Never "move" a file into the folder it is already in.
        if _same_directory(target, request.location.absolute_path.parent):
            return False
        return True

    def resolve(self, request: PlacementRequest) -> Destination:
        """Choose the destination for the file in *request*.

        Raises:
            DestinationError: With the reason ``"No xrefs"``,
                ``"Series not Found"`` or ``"Unable to resolve a destination"``.
        """
        default = self.default_destination(request)
        series = self.linked_series(request)

        for candidate in self.iter_candidates(request, series):
            if self.is_usable(request, candidate):
                return Destination(folder=candidate.folder, subfolder=candidate.subfolder)

        if default is None:
            raise DestinationError(UNRESOLVABLE)
        return Destination(
            folder=default,
            subfolder=replace_invalid_folder_name_characters(series.preferred_title),
        )
