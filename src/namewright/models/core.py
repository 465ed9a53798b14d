"""Core domain models for namewright.

This module defines the read-only snapshots the rename engine works on.
- FileView, CatalogFileView, EpisodeView and ShowView describe one physical
  file and the catalog metadata linked to it.
- FolderView and FileLocation describe the root folders a library is spread
  across and where a file lives inside them.
- SeriesView, SeriesEpisode and CrossReference carry the sibling-episode
  graph used by destination placement.

Design:
- Every model is frozen. The engine only reads these snapshots and never
  writes back to the metadata store that produced them.
- Enums mirror the catalog vocabulary and are ``str`` enums so that JSON
  snapshots round-trip without custom encoders.
"""

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EpisodeType(str, Enum):
    """Kind of a catalog episode."""

    NORMAL = "normal"
    SPECIAL = "special"
    CREDITS = "credits"
    TRAILER = "trailer"
    PARODY = "parody"
    OTHER = "other"
    UNKNOWN = "unknown"

    @property
    def code(self) -> str:
        """Single-letter code used by the ``H`` test."""
        return _EPISODE_TYPE_CODES[self]

    @property
    def prefix(self) -> str:
        """Prefix put in front of episode numbers (empty for normal episodes)."""
        if self in (EpisodeType.NORMAL, EpisodeType.UNKNOWN):
            return ""
        return self.code

    @property
    def sort_order(self) -> int:
        """Catalog ordering: normal episodes first, then credits, specials..."""
        return _EPISODE_TYPE_ORDER[self]


_EPISODE_TYPE_CODES = {
    EpisodeType.NORMAL: "E",
    EpisodeType.SPECIAL: "S",
    EpisodeType.CREDITS: "C",
    EpisodeType.TRAILER: "T",
    EpisodeType.PARODY: "P",
    EpisodeType.OTHER: "O",
    EpisodeType.UNKNOWN: "U",
}

_EPISODE_TYPE_ORDER = {
    EpisodeType.UNKNOWN: 0,
    EpisodeType.NORMAL: 1,
    EpisodeType.CREDITS: 2,
    EpisodeType.SPECIAL: 3,
    EpisodeType.TRAILER: 4,
    EpisodeType.PARODY: 5,
    EpisodeType.OTHER: 6,
}


class ShowType(str, Enum):
    """Kind of a show. Values are the raw strings scripts compare against."""

    TV_SERIES = "TV Series"
    OVA = "OVA"
    MOVIE = "Movie"
    TV_SPECIAL = "TV Special"
    WEB = "Web"
    OTHER = "Other"
    UNKNOWN = ""


class FileSource(str, Enum):
    """Medium a release was sourced from."""

    UNKNOWN = "Unknown"
    OTHER = "Other"
    TV = "TV"
    DVD = "DVD"
    BLURAY = "BluRay"
    WEB = "Web"
    VHS = "VHS"
    VCD = "VCD"
    LASERDISC = "LaserDisc"
    CAMERA = "Camera"


class TitleType(str, Enum):
    """Classification of a localized title."""

    NONE = "none"
    MAIN = "main"
    OFFICIAL = "official"
    SHORT = "short"
    SYNONYM = "syn"
    TITLE_CARD = "card"
    KANJI_READING = "kana"


class TitleLanguage(str, Enum):
    """Language tags the rename tokens pick titles by.

    Title.language is a free-form tag; these are the ones the engine knows.
    """

    ENGLISH = "en"
    ROMAJI = "x-jat"
    JAPANESE = "ja"


class Title(BaseModel):
    """A localized title of a show or an episode."""

    model_config = ConfigDict(frozen=True)

    language: str
    """Language tag, e.g. ``en`` or ``x-jat``."""

    type: TitleType = TitleType.MAIN
    """Whether the title is the main, an official or another variant."""

    value: str


def pick_title(
    titles: List[Title], language: str, *, preferred_only: bool = True
) -> Optional[str]:
    """Return the first title in *language*.

    Args:
        titles: Titles to search.
        language: Language tag to match.
        preferred_only: Only consider main and official titles.

    Returns:
        The title text, or None when no title matches.
    """
    for title in titles:
        if title.language != language:
            continue
        if preferred_only and title.type not in (TitleType.MAIN, TitleType.OFFICIAL):
            continue
        return title.value
    return None


class VideoStream(BaseModel):
    """Decoded properties of one video stream."""

    model_config = ConfigDict(frozen=True)

    width: int = 0
    height: int = 0
    bit_depth: int = 0
    codec_id: Optional[str] = None


class AudioStream(BaseModel):
    """Decoded properties of one audio stream."""

    model_config = ConfigDict(frozen=True)

    codec_id: Optional[str] = None
    language: Optional[str] = None


class MediaInfo(BaseModel):
    """Stream information read from the file container."""

    model_config = ConfigDict(frozen=True)

    video_streams: List[VideoStream] = Field(default_factory=list)
    audio_streams: List[AudioStream] = Field(default_factory=list)
    subtitle_languages: List[str] = Field(default_factory=list)

    @property
    def video_stream(self) -> Optional[VideoStream]:
        """First video stream, if any."""
        return self.video_streams[0] if self.video_streams else None


class ReleaseGroup(BaseModel):
    """Release group that published a catalog file."""

    model_config = ConfigDict(frozen=True)

    id: int = 0
    """Group id; 0 means the group is unknown."""

    name: Optional[str] = None
    short_name: Optional[str] = None


class CatalogFileView(BaseModel):
    """Catalog record of a file. Only present for catalog-linked files."""

    model_config = ConfigDict(frozen=True)

    file_id: int
    release_group: ReleaseGroup = Field(default_factory=ReleaseGroup)
    file_version: int = Field(default=1, ge=0)
    """Version of the release; bumped on every re-release."""

    source: FileSource = FileSource.UNKNOWN
    is_censored: Optional[bool] = None
    is_deprecated: bool = False
    comment: Optional[str] = None
    original_filename: Optional[str] = None
    """Filename the release group published the file under."""

    audio_languages: List[str] = Field(default_factory=list)
    subtitle_languages: List[str] = Field(default_factory=list)


class EpisodeView(BaseModel):
    """One catalog episode linked to a file."""

    model_config = ConfigDict(frozen=True)

    id: int
    show_id: int
    type: EpisodeType = EpisodeType.NORMAL
    number: int = Field(default=1, ge=0)
    air_date: Optional[datetime] = None
    titles: List[Title] = Field(default_factory=list)


class ShowView(BaseModel):
    """Catalog show that owns the file's episodes."""

    model_config = ConfigDict(frozen=True)

    id: int
    type: ShowType = ShowType.UNKNOWN
    air_date: Optional[datetime] = None
    titles: List[Title] = Field(default_factory=list)
    episode_count_normal: int = 0
    episode_count_special: int = 0

    @property
    def air_year(self) -> int:
        """Year the show started airing, 0 when unknown."""
        return self.air_date.year if self.air_date else 0

    def episode_count_for(self, episode_type: EpisodeType) -> int:
        """Episode count used to size zero padding for *episode_type*."""
        if episode_type == EpisodeType.NORMAL:
            return self.episode_count_normal
        if episode_type == EpisodeType.SPECIAL:
            return self.episode_count_special
        return 1


class FolderView(BaseModel):
    """A root folder files are imported into or placed in."""

    model_config = ConfigDict(frozen=True)

    id: int
    path: Path
    is_drop_source: bool = False
    is_drop_destination: bool = False
    is_watched: bool = False
    is_excluded: bool = False
    """Files in this folder are never used as placement targets."""


class FileLocation(BaseModel):
    """Where one copy of a file lives inside a root folder."""

    model_config = ConfigDict(frozen=True)

    folder: FolderView
    relative_path: str

    @property
    def absolute_path(self) -> Path:
        return self.folder.path / self.relative_path

    @property
    def subfolder(self) -> str:
        """Directory part of the relative path ("" for files at the root)."""
        parent = Path(self.relative_path).parent
        return "" if str(parent) == "." else str(parent)


class FileView(BaseModel):
    """Read-only projection of one physical file."""

    model_config = ConfigDict(frozen=True)

    file_id: int = 0
    path: Path
    """Absolute path of the file's current location."""

    ed2k: str
    """Content hash; tokens expose lower and upper case forms."""

    crc32: Optional[str] = None
    size: int = Field(default=0, ge=0)
    media: Optional[MediaInfo] = None
    catalog_file: Optional[CatalogFileView] = None
    locations: List[FileLocation] = Field(default_factory=list)
    cross_references: List["CrossReference"] = Field(default_factory=list)

    @property
    def video_stream(self) -> Optional[VideoStream]:
        return self.media.video_stream if self.media else None

    @property
    def video_resolution(self) -> str:
        """Resolution as ``WxH``, empty when the file has no decoded video."""
        stream = self.video_stream
        if stream is None or not stream.width or not stream.height:
            return ""
        return f"{stream.width}x{stream.height}"

    @property
    def audio_languages(self) -> List[str]:
        if self.media is None:
            return []
        return [s.language for s in self.media.audio_streams if s.language]

    @property
    def subtitle_languages(self) -> List[str]:
        return list(self.media.subtitle_languages) if self.media else []

    @property
    def is_manually_linked(self) -> bool:
        """Files without a catalog record were linked to episodes by hand."""
        return self.catalog_file is None

    @model_validator(mode="after")
    def validate_path(self) -> "FileView":
        """Ensure the path is absolute.

        Raises:
            ValueError: If the path is not absolute.
        """
        if not self.path.is_absolute():
            raise ValueError(f"Path must be absolute: {self.path}")
        return self


class SeriesEpisode(BaseModel):
    """An episode of a series together with every file linked to it."""

    model_config = ConfigDict(frozen=True)

    episode: EpisodeView
    series_ids: List[int] = Field(default_factory=list)
    """Ids of every series this episode is cross-referenced to."""

    videos: List[FileView] = Field(default_factory=list)

    @property
    def is_crossover(self) -> bool:
        return len(set(self.series_ids)) > 1


class SeriesView(BaseModel):
    """A library series and all of its episodes."""

    model_config = ConfigDict(frozen=True)

    id: int
    preferred_title: str
    episodes: List[SeriesEpisode] = Field(default_factory=list)


class CrossReference(BaseModel):
    """Link between a file and one episode of a series."""

    model_config = ConfigDict(frozen=True)

    episode_id: int = 0
    series: Optional[SeriesView] = None


FileView.model_rebuild()
SeriesEpisode.model_rebuild()
SeriesView.model_rebuild()
CrossReference.model_rebuild()
