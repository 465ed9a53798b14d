"""Per-invocation inputs and outputs of the renamer strategies.

- RenameRequest: everything needed to synthesize a filename for one file.
- RenameContext: the resolved (file, catalog file, episodes, show) tuple the
  condition evaluator and the name synthesizer read from.
- PlacementRequest: everything needed to pick a destination folder.
- PlacementCandidate and Destination: placement search results.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from namewright.models.core import (
    CatalogFileView,
    EpisodeView,
    FileLocation,
    FileView,
    FolderView,
    ShowView,
)
from namewright.models.script import RenameScript


class RenameRequest(BaseModel):
    """Input of a filename computation."""

    model_config = ConfigDict(frozen=True)

    file: FileView
    script: Optional[RenameScript] = None
    episodes: List[EpisodeView] = Field(default_factory=list)
    """Episodes linked to the file, as supplied by the metadata store."""

    show: Optional[ShowView] = None
    """Show owning the first episode; None when the store could not find it."""


class RenameContext(BaseModel):
    """Resolved data a script is evaluated against."""

    model_config = ConfigDict(frozen=True)

    file: FileView
    episodes: List[EpisodeView] = Field(min_length=1)
    show: ShowView

    @property
    def catalog_file(self) -> Optional[CatalogFileView]:
        return self.file.catalog_file

    @property
    def first_episode(self) -> EpisodeView:
        return self.episodes[0]


class PlacementRequest(BaseModel):
    """Input of a destination computation."""

    model_config = ConfigDict(frozen=True)

    file: FileView
    location: FileLocation
    """Current location of the file being placed."""

    folders: List[FolderView] = Field(default_factory=list)
    """Root folders available as destinations."""

    script: Optional[RenameScript] = None


class PlacementCandidate(BaseModel):
    """A sibling file location that could host the file being placed."""

    model_config = ConfigDict(frozen=True)

    location: FileLocation
    folder: FolderView
    subfolder: str


class Destination(BaseModel):
    """Chosen root folder and path relative to it."""

    model_config = ConfigDict(frozen=True)

    folder: FolderView
    subfolder: str
