"""Legacy renamer: runs a rename script line by line.

Each line whose condition holds applies its action to the name being built.
A ``FAIL`` action on a holding line aborts the whole run.
"""

import logging
from typing import List, Optional, Union

from namewright.errors import DataUnresolvableError, ScriptAbortedError, ScriptUnavailableError
from namewright.fs.probe import FileSystemProbe
from namewright.models.requests import (
    Destination,
    PlacementRequest,
    RenameContext,
    RenameRequest,
)
from namewright.models.script import LEGACY_RENAMER_ID, RenameScript
from namewright.rules.base import Renamer
from namewright.rules.expression import ActionKind, condition_holds, parse_script
from namewright.rules.placement import PlacementResolver
from namewright.rules.synthesizer import NameBuilder
from namewright.utils.config import RenamerSettings

logger = logging.getLogger(__name__)


def build_context(request: RenameRequest) -> RenameContext:
    """Resolve the episodes and show a script is evaluated against.

    Raises:
        DataUnresolvableError: If the file has no episodes or no show.
    """
    if not request.episodes:
        raise DataUnresolvableError("*Error: Unable to get episode for file")
    if request.show is None:
        raise DataUnresolvableError("*Error: Unable to get anime for file")

    episodes = list(request.episodes)
    if request.file.is_manually_linked:
        episodes.sort(key=lambda ep: (ep.type.sort_order, ep.number))
    return RenameContext(file=request.file, episodes=episodes, show=request.show)


def run_script(
    script: Union[str, List[str]],
    context: RenameContext,
    settings: Optional[RenamerSettings] = None,
) -> str:
    """Run *script* against *context* and return the finished filename.

    Args:
        script: Script text, or its lines.
        context: File, episodes and show to rename for.
        settings: Renamer settings; defaults when omitted.

    Raises:
        ScriptAbortedError: If a ``FAIL`` action runs.
        EmptyResultError: If no name was produced.
        MissingExtensionError: If the file has no extension.
    """
    settings = settings or RenamerSettings()
    lines = RenameScript(script=script).lines if isinstance(script, str) else script

    builder = NameBuilder()
    for line in parse_script(lines):
        if not condition_holds(line, context):
            continue
        if line.action.kind == ActionKind.FAIL:
            logger.debug("Script failed at %r for %s", line.text, context.file.path)
            raise ScriptAbortedError("*Error: The script called FAIL")
        builder = builder.apply(line.action, context, settings.max_episode_length)

    return builder.finish(context.file)


def _require_script(script: Optional[RenameScript]) -> RenameScript:
    if script is None or script.script is None:
        raise ScriptUnavailableError("*Error: No script available for renamer")
    return script


class LegacyRenamer(Renamer):
    """Renamer driven by the line-based rename script language."""

    renamer_id = LEGACY_RENAMER_ID
    description = "Legacy"

    def __init__(
        self,
        settings: Optional[RenamerSettings] = None,
        probe: Optional[FileSystemProbe] = None,
    ) -> None:
        super().__init__(settings)
        self.placement = PlacementResolver(
            probe, skip_disk_space_checks=self.settings.skip_disk_space_checks
        )

    def get_filename(self, request: RenameRequest) -> Optional[str]:
        script = _require_script(request.script)
        if script.renamer_type != self.renamer_id:
            return None
        context = build_context(request)
        return run_script(script.lines, context, self.settings)

    def get_destination(self, request: PlacementRequest) -> Destination:
        _require_script(request.script)
        return self.placement.resolve(request)
