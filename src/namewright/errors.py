"""Exception types raised by the rename engine.

Every failure is scoped to a single file: callers catch :class:`RenameError`
around one file and carry on with the next. The message of each exception is
the operator-facing reason and is surfaced verbatim.
"""


class RenameError(Exception):
    """Base class for all rename and placement failures."""


class ScriptUnavailableError(RenameError):
    """No script text was supplied to the renamer."""


class DataUnresolvableError(RenameError):
    """The file has no linked episodes or the episode's show is missing."""


class ScriptAbortedError(RenameError):
    """The script reached a FAIL action on a true condition."""


class EmptyResultError(RenameError):
    """The script ran to completion without producing a name."""


class MissingExtensionError(RenameError):
    """The current file has no extension to carry over."""


class ProbeError(RenameError):
    """A filesystem existence or free-space query failed."""


class DestinationError(RenameError):
    """No destination could be resolved for a file.

    Attributes:
        reason: Human-readable reason, e.g. ``"No xrefs"``.
    """

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
