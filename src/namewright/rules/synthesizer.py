"""Name synthesizer: applies ADD/REPLACE actions to the name being built.

The name under construction is a :class:`NameBuilder` value. Each action
returns a new builder instead of mutating shared state, so any single line
can be applied and checked in isolation.
"""

import logging
from dataclasses import dataclass, replace
from pathlib import PurePath
from typing import Callable, Dict, Optional

from namewright.errors import EmptyResultError, MissingExtensionError
from namewright.models.core import FileView, TitleLanguage, pick_title
from namewright.models.requests import RenameContext
from namewright.rules.expression import Action, ActionKind
from namewright.rules.tokens import RenameTag
from namewright.utils.sanitize import replace_invalid_folder_name_characters

logger = logging.getLogger(__name__)

ELLIPSIS = "…"
UNKNOWN = "Unknown"


def truncate_title(title: str, max_length: int) -> str:
    """Shorten *title* to at most *max_length* characters.

    Titles over the limit keep their first ``max_length - 1`` characters and
    get a single ellipsis character appended. A limit below 1 yields an
    empty title.
    """
    if max_length < 1:
        return ""
    if len(title) <= max_length:
        return title
    return title[: max_length - 1] + ELLIPSIS


def _zero_padding(episode_count: int) -> int:
    return max(len(str(episode_count)), 2)


def format_episode_number(context: RenameContext) -> str:
    """Value of ``%enr``: kind prefix, zero-padded number, ``-last`` for ranges."""
    first = context.first_episode
    padding = _zero_padding(context.show.episode_count_for(first.type))
    number = first.type.prefix + str(first.number).zfill(padding)
    if len(context.episodes) > 1:
        number += "-" + str(context.episodes[-1].number).zfill(padding)
    return number


def _episode_title(context: RenameContext, language: str, max_length: int) -> str:
    title = pick_title(context.first_episode.titles, language, preferred_only=False)
    return truncate_title(title, max_length) if title else ""


def _group_short_name(context: RenameContext) -> str:
    catalog = context.catalog_file
    name = catalog.release_group.short_name if catalog else None
    if not name or name.lower() == "raw":
        return UNKNOWN
    return name


def _original_file_stem(context: RenameContext) -> str:
    catalog = context.catalog_file
    if catalog is None or not catalog.original_filename:
        return ""
    name = catalog.original_filename
    return name[: len(name) - len(PurePath(name).suffix)]


def _video_height(context: RenameContext) -> str:
    stream = context.file.video_stream
    return str(stream.height) if stream and stream.height else ""


def _first_audio_codec(context: RenameContext) -> str:
    media = context.file.media
    if media is None or not media.audio_streams:
        return ""
    return media.audio_streams[0].codec_id or ""


TokenResolver = Callable[[RenameContext, int], str]

# Substituted in this order; every tag always receives a value.
_RESOLVERS: Dict[RenameTag, TokenResolver] = {
    RenameTag.ANIME_ID: lambda c, _: str(c.show.id),
    RenameTag.ANIME_NAME_ENGLISH: lambda c, _: (
        pick_title(c.show.titles, TitleLanguage.ENGLISH) or ""
    ),
    RenameTag.ANIME_NAME_ROMAJI: lambda c, _: (
        pick_title(c.show.titles, TitleLanguage.ROMAJI) or ""
    ),
    RenameTag.ANIME_NAME_KANJI: lambda c, _: (
        pick_title(c.show.titles, TitleLanguage.JAPANESE) or ""
    ),
    RenameTag.EPISODE_NUMBER: lambda c, _: format_episode_number(c),
    RenameTag.EPISODES: lambda c, _: str(
        c.show.episode_count_for(c.first_episode.type)
    ),
    RenameTag.EPISODE_NAME_ENGLISH: lambda c, n: _episode_title(
        c, TitleLanguage.ENGLISH, n
    ),
    RenameTag.EPISODE_NAME_ROMAJI: lambda c, n: _episode_title(
        c, TitleLanguage.ROMAJI, n
    ),
    RenameTag.GROUP_SHORT_NAME: lambda c, _: _group_short_name(c),
    RenameTag.GROUP_LONG_NAME: lambda c, _: (
        (c.catalog_file.release_group.name if c.catalog_file else None) or UNKNOWN
    ),
    RenameTag.ED2K_UPPER: lambda c, _: c.file.ed2k.upper(),
    RenameTag.ED2K_LOWER: lambda c, _: c.file.ed2k.lower(),
    RenameTag.CRC_UPPER: lambda c, _: (c.file.crc32 or "").upper(),
    RenameTag.CRC_LOWER: lambda c, _: (c.file.crc32 or "").lower(),
    RenameTag.FILE_VERSION: lambda c, _: (
        str(c.catalog_file.file_version) if c.catalog_file else "1"
    ),
    RenameTag.DUB_LANGUAGE: lambda c, _: (
        "'".join(c.catalog_file.audio_languages) if c.catalog_file else ""
    ),
    RenameTag.SUB_LANGUAGE: lambda c, _: (
        "'".join(c.catalog_file.subtitle_languages) if c.catalog_file else ""
    ),
    RenameTag.VIDEO_CODEC: lambda c, _: (
        (c.file.video_stream.codec_id if c.file.video_stream else None) or ""
    ),
    RenameTag.AUDIO_CODEC: lambda c, _: _first_audio_codec(c),
    RenameTag.VIDEO_BIT_DEPTH: lambda c, _: (
        str(c.file.video_stream.bit_depth) if c.file.video_stream else ""
    ),
    RenameTag.SOURCE: lambda c, _: (
        c.catalog_file.source.value if c.catalog_file else UNKNOWN
    ),
    RenameTag.TYPE: lambda c, _: c.show.type.value,
    RenameTag.RESOLUTION: lambda c, _: c.file.video_resolution,
    RenameTag.VIDEO_HEIGHT: lambda c, _: _video_height(c),
    RenameTag.YEAR: lambda c, _: str(c.show.air_year),
    RenameTag.FILE_ID: lambda c, _: (
        str(c.catalog_file.file_id) if c.catalog_file else ""
    ),
    RenameTag.EPISODE_ID: lambda c, _: str(c.first_episode.id),
    RenameTag.GROUP_ID: lambda c, _: (
        str(c.catalog_file.release_group.id) if c.catalog_file else UNKNOWN
    ),
    RenameTag.ORIGINAL_FILE_NAME: lambda c, _: _original_file_stem(c),
    # "unc" for files the catalog flags censored is the historical output.
    RenameTag.CENSORED: lambda c, _: (
        "unc" if c.catalog_file and c.catalog_file.is_censored else "cen"
    ),
    RenameTag.DEPRECATED: lambda c, _: (
        "DEPR" if c.catalog_file and c.catalog_file.is_deprecated else "New"
    ),
}


def substitute_tokens(
    template: str, context: RenameContext, max_episode_length: int
) -> str:
    """Replace every known ``%tag`` in *template* with its value."""
    result = template
    for tag, resolve in _RESOLVERS.items():
        if tag.value in result:
            result = result.replace(tag.value, resolve(context, max_episode_length))
    return result


def parse_replace(parameter: str) -> Optional[tuple[str, str]]:
    """Parse ``'<from>' '<to>'``; None when the quoting is incomplete."""
    text = parameter.strip()
    positions = []
    start = 0
    for _ in range(4):
        pos = text.find("'", start)
        if pos < 0:
            return None
        positions.append(pos)
        start = pos + 1
    open1, close1, open2, close2 = positions
    return text[open1 + 1 : close1], text[open2 + 1 : close2]


@dataclass(frozen=True)
class NameBuilder:
    """The filename accumulated so far, without extension."""

    name: str = ""

    def add(
        self, template: str, context: RenameContext, max_episode_length: int
    ) -> "NameBuilder":
        """Append *template* with apostrophes removed and tags substituted."""
        segment = substitute_tokens(
            template.replace("'", ""), context, max_episode_length
        )
        return replace(self, name=self.name + segment)

    def replace_text(self, parameter: str) -> "NameBuilder":
        """Apply ``REPLACE '<from>' '<to>'``; malformed quoting is a no-op."""
        parsed = parse_replace(parameter)
        if parsed is None:
            logger.debug("Ignoring malformed REPLACE %r", parameter)
            return self
        old, new = parsed
        if not old:
            return self
        return replace(self, name=self.name.replace(old, new))

    def apply(
        self, action: Action, context: RenameContext, max_episode_length: int
    ) -> "NameBuilder":
        """Return the builder after running *action*.

        FAIL is handled by the script runner; UNKNOWN actions are ignored.
        """
        if action.kind == ActionKind.ADD:
            return self.add(action.parameter, context, max_episode_length)
        if action.kind == ActionKind.REPLACE:
            return self.replace_text(action.parameter)
        return self

    def finish(self, file: FileView) -> str:
        """Produce the final filename for *file*.

        Raises:
            EmptyResultError: If no name was built.
            MissingExtensionError: If the current file has no extension.
        """
        if not self.name:
            raise EmptyResultError("*Error: the new filename is empty (script error)")
        extension = file.path.suffix
        if not extension:
            raise MissingExtensionError("*Error: Unable to get the file's extension")
        name = self.name.replace("`", "'")
        return replace_invalid_folder_name_characters(f"{name}{extension}")
