"""Base abstract class for renamer strategies.

A renamer strategy answers two questions about one file: what its new
filename should be, and which root folder and sub-path it belongs in.

Design:
- Every strategy inherits from Renamer and implements get_filename and
  get_destination. Either may return None to let the next strategy answer.
- Strategies are stateless apart from the settings they are built with, so
  one instance can serve any number of files concurrently.
- Strategies are registered by id with
  :class:`~namewright.core.dispatch.RenamerRegistry`; a script's
  ``renamer_type`` names the strategy it is written for.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Self

from namewright.models.requests import Destination, PlacementRequest, RenameRequest
from namewright.utils.config import RenamerSettings


class Renamer(ABC):
    """Abstract base class for renamer strategies."""

    renamer_id: ClassVar[str]
    description: ClassVar[str] = ""

    def __init__(self: Self, settings: Optional[RenamerSettings] = None) -> None:
        """Initialize a renamer.

        Args:
            settings: Renamer settings; defaults are used when omitted.
        """
        self.settings = settings or RenamerSettings()

    @abstractmethod
    def get_filename(self: Self, request: RenameRequest) -> Optional[str]:
        """Compute the new filename, extension included.

        Returns:
            The new filename, or None to defer to another renamer.

        Raises:
            RenameError: If the name cannot be computed.
        """

    @abstractmethod
    def get_destination(self: Self, request: PlacementRequest) -> Optional[Destination]:
        """Choose the root folder and sub-path the file should move to.

        Returns:
            The destination, or None to defer to another renamer.

        Raises:
            RenameError: If no destination can be resolved.
        """
