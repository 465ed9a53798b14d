"""Builders for the read-only models the rename engine consumes.

Every builder returns a fully populated default that individual tests narrow
down with keyword overrides.
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from namewright.errors import ProbeError
from namewright.fs.probe import FileSystemProbe
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
    TitleType,
    VideoStream,
)
from namewright.models.requests import RenameContext


def abs_path(path_str: str) -> Path:
    r"""Create a platform-independent absolute path.

    On Windows, converts '/tmp/file.txt' to 'C:\\tmp\\file.txt'.
    """
    if os.name == "nt" and path_str.startswith("/"):
        return Path("C:" + path_str.replace("/", "\\"))
    return Path(path_str)


def make_show(**overrides: Any) -> ShowView:
    values: Dict[str, Any] = {
        "id": 42,
        "type": ShowType.TV_SERIES,
        "air_date": datetime(2019, 4, 6),
        "titles": [
            Title(language="en", type=TitleType.MAIN, value="Sample Show"),
            Title(language="x-jat", type=TitleType.MAIN, value="Sanpuru Shou"),
            Title(language="ja", type=TitleType.OFFICIAL, value="サンプル"),
        ],
        "episode_count_normal": 12,
        "episode_count_special": 2,
    }
    values.update(overrides)
    return ShowView(**values)


def make_episode(**overrides: Any) -> EpisodeView:
    values: Dict[str, Any] = {
        "id": 1001,
        "show_id": 42,
        "type": EpisodeType.NORMAL,
        "number": 5,
        "air_date": datetime(2019, 5, 4),
        "titles": [
            Title(language="en", value="The Fifth Episode"),
            Title(language="x-jat", value="Dai Go Wa"),
        ],
    }
    values.update(overrides)
    return EpisodeView(**values)


def make_catalog(**overrides: Any) -> CatalogFileView:
    values: Dict[str, Any] = {
        "file_id": 7,
        "release_group": ReleaseGroup(id=3, name="Good Group", short_name="GG"),
        "file_version": 2,
        "source": FileSource.BLURAY,
        "is_censored": False,
        "is_deprecated": False,
        "original_filename": "[GG] Sample Show - 05.mkv",
        "audio_languages": ["japanese"],
        "subtitle_languages": ["english"],
    }
    values.update(overrides)
    return CatalogFileView(**values)


def make_media(**overrides: Any) -> MediaInfo:
    values: Dict[str, Any] = {
        "video_streams": [
            VideoStream(width=1920, height=1080, bit_depth=10, codec_id="HEVC")
        ],
        "audio_streams": [AudioStream(codec_id="AAC", language="ja")],
        "subtitle_languages": ["en"],
    }
    values.update(overrides)
    return MediaInfo(**values)


_DEFAULT = object()


def make_file(
    path: str = "/library/Sample Show/file.mkv",
    catalog: Any = _DEFAULT,
    media: Any = _DEFAULT,
    **overrides: Any,
) -> FileView:
    values: Dict[str, Any] = {
        "file_id": 55,
        "path": abs_path(path),
        "ed2k": "ABCDEF0123456789ABCDEF0123456789",
        "crc32": "1A2B3C4D",
        "size": 1000,
        "media": make_media() if media is _DEFAULT else media,
        "catalog_file": make_catalog() if catalog is _DEFAULT else catalog,
    }
    values.update(overrides)
    return FileView(**values)


def make_context(
    file: Optional[FileView] = None,
    episodes: Optional[List[EpisodeView]] = None,
    show: Any = None,
) -> RenameContext:
    return RenameContext(
        file=file or make_file(),
        episodes=episodes or [make_episode()],
        show=show or make_show(),
    )


def make_folder(folder_id: int = 1, path: str = "/library", **overrides: Any) -> FolderView:
    return FolderView(id=folder_id, path=abs_path(path), **overrides)


def make_video(
    ed2k: str, locations: List[FileLocation], path: Optional[str] = None
) -> FileView:
    """A sibling file stored at *locations*."""
    first = locations[0].absolute_path if locations else abs_path("/elsewhere/x.mkv")
    return FileView(path=abs_path(path) if path else first, ed2k=ed2k, locations=locations)


def make_series(
    episodes: List[SeriesEpisode], title: str = "Sample Show", series_id: int = 42
) -> SeriesView:
    return SeriesView(id=series_id, preferred_title=title, episodes=episodes)


def link_series(file: FileView, series: Optional[SeriesView]) -> FileView:
    """Return *file* cross-referenced to *series*."""
    return file.model_copy(
        update={"cross_references": [CrossReference(episode_id=1001, series=series)]}
    )


class FakeProbe(FileSystemProbe):
    """In-memory stand-in for FileSystemProbe.

    Args:
        existing: Directories that exist.
        free: Free bytes per root folder; missing folders report plenty.
        filesystems: Filesystem label per path prefix; unlabeled paths share
            one filesystem.
        failing: Folders whose free-space query raises.
    """

    def __init__(
        self,
        existing: Optional[List[Path]] = None,
        free: Optional[Dict[Path, int]] = None,
        filesystems: Optional[Dict[Path, str]] = None,
        failing: Optional[List[Path]] = None,
    ) -> None:
        self.existing = set(existing or [])
        self.free = free or {}
        self.filesystems = filesystems or {}
        self.failing = set(failing or [])
        self.free_space_calls: List[Path] = []

    def exists(self, path: Path) -> bool:
        return path in self.existing

    def free_space(self, path: Path) -> int:
        self.free_space_calls.append(path)
        if path in self.failing:
            raise ProbeError(f"Unable to query free space for {path}")
        return self.free.get(path, 10**12)

    def _label(self, path: Path) -> str:
        for prefix, label in self.filesystems.items():
            if path == prefix or prefix in path.parents:
                return label
        return "default"

    def same_filesystem(self, first: Path, second: Path) -> bool:
        return self._label(first) == self._label(second)
