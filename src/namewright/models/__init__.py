"""Domain models for the namewright application."""

from namewright.models.core import (
    AudioStream,
    CatalogFileView,
    CrossReference,
    EpisodeType,
    EpisodeView,
    FileLocation,
    FileSource,
    FileView,
    FolderView,
    MediaInfo,
    ReleaseGroup,
    SeriesEpisode,
    SeriesView,
    ShowType,
    ShowView,
    Title,
    TitleLanguage,
    TitleType,
    VideoStream,
)
from namewright.models.requests import (
    Destination,
    PlacementCandidate,
    PlacementRequest,
    RenameContext,
    RenameRequest,
)
from namewright.models.script import LEGACY_RENAMER_ID, RenameScript

__all__ = [
    "AudioStream",
    "CatalogFileView",
    "CrossReference",
    "Destination",
    "EpisodeType",
    "EpisodeView",
    "FileLocation",
    "FileSource",
    "FileView",
    "FolderView",
    "LEGACY_RENAMER_ID",
    "MediaInfo",
    "PlacementCandidate",
    "PlacementRequest",
    "ReleaseGroup",
    "RenameContext",
    "RenameRequest",
    "RenameScript",
    "SeriesEpisode",
    "SeriesView",
    "ShowType",
    "ShowView",
    "Title",
    "TitleLanguage",
    "TitleType",
    "VideoStream",
]
