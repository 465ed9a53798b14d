"""Condition evaluator for rename script tests.

Each ``IF`` clause of a script is made of single-letter tests such as
``A(1234)`` or ``F(>=2)``. This module answers one such test against a
:class:`~namewright.models.requests.RenameContext`.

Design:
- Letters are a closed enum (:class:`~namewright.rules.tokens.TestLetter`)
  dispatched by one ``match`` statement to one function per letter.
- Numeric tests share :func:`parse_operator`, which understands a leading
  ``!`` and a single relational operator.
- A test never raises. Missing data, unparsable arguments and any other
  exception make the test false, so one bad clause cannot abort a script run.
"""

import logging
from enum import Enum
from typing import Callable, Dict, Tuple

from namewright.models.core import FileSource, ShowType, TitleLanguage, pick_title
from namewright.models.requests import RenameContext
from namewright.rules.tokens import Keyword, RenameTag, TestLetter

logger = logging.getLogger(__name__)


class Comparison(Enum):
    """Relation between the actual value and the test argument."""

    EQUAL = "="
    NOT_EQUAL = "!="
    GREATER = ">"
    GREATER_EQUAL = ">="
    LESS = "<"
    LESS_EQUAL = "<="

    def apply(self, actual: int, expected: int) -> bool:
        match self:
            case Comparison.EQUAL:
                return actual == expected
            case Comparison.NOT_EQUAL:
                return actual != expected
            case Comparison.GREATER:
                return actual > expected
            case Comparison.GREATER_EQUAL:
                return actual >= expected
            case Comparison.LESS:
                return actual < expected
            case Comparison.LESS_EQUAL:
                return actual <= expected
        return False


def split_negation(argument: str) -> Tuple[bool, str]:
    """Strip a leading ``!`` from *argument*.

    Returns:
        ``(negated, remainder)``.
    """
    if argument.startswith("!"):
        return True, argument[1:]
    return False, argument


def parse_operator(argument: str) -> Tuple[Comparison, str]:
    """Parse the operator prefix of a numeric test argument.

    A leading ``!`` turns equality into inequality. It is then followed by at
    most one of ``>``, ``>=``, ``<``, ``<=``; a relational operator replaces
    the (in)equality and the ``!`` no longer has an effect.

    Args:
        argument: Raw argument, e.g. ``"!3"`` or ``">=720"``.

    Returns:
        ``(comparison, remainder)`` where remainder is the operand text.

    Example:
        >>> parse_operator(">=2")
        (<Comparison.GREATER_EQUAL: '>='>, '2')
    """
    negated, rest = split_negation(argument)
    if rest.startswith(">"):
        if rest[1:2] == "=":
            return Comparison.GREATER_EQUAL, rest[2:]
        return Comparison.GREATER, rest[1:]
    if rest.startswith("<"):
        if rest[1:2] == "=":
            return Comparison.LESS_EQUAL, rest[2:]
        return Comparison.LESS, rest[1:]
    return (Comparison.NOT_EQUAL if negated else Comparison.EQUAL), rest


def _compare_numeric(argument: str, actual: int) -> bool:
    comparison, operand = parse_operator(argument)
    try:
        expected = int(operand)
    except ValueError:
        return False
    return comparison.apply(actual, expected)


def _matches(text: str, expected: str) -> bool:
    return text.strip().lower() == expected.strip().lower()


def _test_show_id(argument: str, context: RenameContext) -> bool:
    negated, rest = split_negation(argument)
    try:
        show_id = int(rest)
    except ValueError:
        return False
    return (context.first_episode.show_id == show_id) != negated


def _test_group_id(argument: str, context: RenameContext) -> bool:
    negated, rest = split_negation(argument)
    catalog = context.catalog_file
    if catalog is None:
        return False
    if Keyword.UNKNOWN.matches(rest):
        group_id = 0
    else:
        try:
            group_id = int(rest)
        except ValueError:
            return False
    return (catalog.release_group.id == group_id) != negated


def _test_dub_language(argument: str, context: RenameContext) -> bool:
    negated, rest = split_negation(argument)
    catalog = context.catalog_file
    if catalog is None:
        return False
    if negated:
        return all(not _matches(lang, rest) for lang in catalog.audio_languages)
    return any(_matches(lang, rest) for lang in catalog.audio_languages)


def _subtitle_track_count(context: RenameContext) -> int:
    if context.file.media is not None:
        return len(context.file.subtitle_languages)
    catalog = context.catalog_file
    return len(catalog.subtitle_languages) if catalog else 0


def _test_sub_language(argument: str, context: RenameContext) -> bool:
    negated, rest = split_negation(argument)
    catalog = context.catalog_file
    if catalog is None:
        return False
    if Keyword.NONE.matches(rest) and _subtitle_track_count(context) == 0:
        return not negated
    if negated:
        return all(not _matches(lang, rest) for lang in catalog.subtitle_languages)
    return any(_matches(lang, rest) for lang in catalog.subtitle_languages)


def _test_file_version(argument: str, context: RenameContext) -> bool:
    catalog = context.catalog_file
    if catalog is None:
        return False
    return _compare_numeric(argument, catalog.file_version)


def _test_bit_depth(argument: str, context: RenameContext) -> bool:
    stream = context.file.video_stream
    if stream is None:
        return False
    return _compare_numeric(argument, stream.bit_depth)


def _test_width(argument: str, context: RenameContext) -> bool:
    stream = context.file.video_stream
    return _compare_numeric(argument, stream.width if stream else 0)


def _test_height(argument: str, context: RenameContext) -> bool:
    stream = context.file.video_stream
    return _compare_numeric(argument, stream.height if stream else 0)


def _test_source(argument: str, context: RenameContext) -> bool:
    negated, rest = split_negation(argument)
    catalog = context.catalog_file
    if catalog is None:
        return False
    if Keyword.UNKNOWN.matches(rest) and catalog.source == FileSource.UNKNOWN:
        return not negated
    if _matches(rest, catalog.source.value):
        return not negated
    return negated


def _test_show_type(argument: str, context: RenameContext) -> bool:
    negated, rest = split_negation(argument)
    show_type = context.show.type
    if Keyword.UNKNOWN.matches(rest) and show_type == ShowType.UNKNOWN:
        return not negated
    if show_type != ShowType.UNKNOWN and _matches(rest, show_type.value):
        return not negated
    return negated


def _test_episode_type(argument: str, context: RenameContext) -> bool:
    negated, rest = split_negation(argument)
    if _matches(rest, context.first_episode.type.code):
        return not negated
    return negated


def _test_manually_linked(argument: str, context: RenameContext) -> bool:
    negated = argument.startswith("!")
    manually_linked = context.catalog_file is None and len(context.episodes) > 0
    return manually_linked != negated


def _test_has_episodes(argument: str, context: RenameContext) -> bool:
    negated = argument.startswith("!")
    return (len(context.episodes) > 0) != negated


def _episode_title(context: RenameContext, language: str) -> str | None:
    return pick_title(context.first_episode.titles, language, preferred_only=False)


# Existence predicates of the I test, keyed by lower-cased tag name.
_TAG_PREDICATES: Dict[str, Callable[[RenameContext], bool]] = {
    RenameTag.ANIME_ID.bare: lambda c: c.catalog_file is not None,
    # Manually linked files count as having a group id.
    RenameTag.GROUP_ID.bare: lambda c: True,
    RenameTag.ORIGINAL_FILE_NAME.bare: lambda c: bool(
        c.catalog_file and c.catalog_file.original_filename
    ),
    RenameTag.EPISODE_NUMBER.bare: lambda c: c.catalog_file is not None,
    RenameTag.FILE_VERSION.bare: lambda c: c.catalog_file is not None,
    RenameTag.ED2K_LOWER.bare: lambda c: True,
    RenameTag.ANIME_NAME_ENGLISH.bare: lambda c: (
        pick_title(c.show.titles, TitleLanguage.ENGLISH) is not None
    ),
    RenameTag.ANIME_NAME_KANJI.bare: lambda c: (
        pick_title(c.show.titles, TitleLanguage.JAPANESE) is not None
    ),
    RenameTag.ANIME_NAME_ROMAJI.bare: lambda c: (
        pick_title(c.show.titles, TitleLanguage.ROMAJI) is not None
    ),
    RenameTag.EPISODE_NAME_ENGLISH.bare: lambda c: bool(
        _episode_title(c, TitleLanguage.ENGLISH)
    ),
    RenameTag.EPISODE_NAME_ROMAJI.bare: lambda c: bool(
        _episode_title(c, TitleLanguage.ROMAJI)
    ),
    RenameTag.GROUP_SHORT_NAME.bare: lambda c: bool(
        c.catalog_file and c.catalog_file.release_group.short_name
    ),
    RenameTag.GROUP_LONG_NAME.bare: lambda c: bool(
        c.catalog_file and c.catalog_file.release_group.name
    ),
    RenameTag.CRC_LOWER.bare: lambda c: bool(c.file.crc32),
    RenameTag.DUB_LANGUAGE.bare: lambda c: bool(
        c.catalog_file and c.catalog_file.audio_languages
    ),
    RenameTag.SUB_LANGUAGE.bare: lambda c: bool(
        c.catalog_file and c.catalog_file.subtitle_languages
    ),
    RenameTag.RESOLUTION.bare: lambda c: bool(c.file.video_resolution),
    RenameTag.VIDEO_CODEC.bare: lambda c: False,
    RenameTag.AUDIO_CODEC.bare: lambda c: False,
    RenameTag.VIDEO_BIT_DEPTH.bare: lambda c: bool(
        c.file.video_stream and c.file.video_stream.bit_depth
    ),
    RenameTag.CENSORED.bare: lambda c: bool(
        c.catalog_file and c.catalog_file.is_censored
    ),
    RenameTag.DEPRECATED.bare: lambda c: bool(
        c.catalog_file and c.catalog_file.is_deprecated
    ),
}


def _test_has_tag(argument: str, context: RenameContext) -> bool:
    negated, rest = split_negation(argument)
    predicate = _TAG_PREDICATES.get(rest.strip().lower())
    if predicate is None:
        return False
    return predicate(context) != negated


def _dispatch(letter: TestLetter, argument: str, context: RenameContext) -> bool:
    match letter:
        case TestLetter.A:
            return _test_show_id(argument, context)
        case TestLetter.G:
            return _test_group_id(argument, context)
        case TestLetter.D:
            return _test_dub_language(argument, context)
        case TestLetter.S:
            return _test_sub_language(argument, context)
        case TestLetter.F:
            return _test_file_version(argument, context)
        case TestLetter.R:
            return _test_source(argument, context)
        case TestLetter.Z:
            return _test_bit_depth(argument, context)
        case TestLetter.T:
            return _test_show_type(argument, context)
        case TestLetter.Y:
            return _compare_numeric(argument, context.show.air_year)
        case TestLetter.E:
            return _compare_numeric(argument, context.first_episode.number)
        case TestLetter.H:
            return _test_episode_type(argument, context)
        case TestLetter.X:
            return _compare_numeric(argument, context.show.episode_count_normal)
        case TestLetter.I:
            return _test_has_tag(argument, context)
        case TestLetter.W:
            return _test_width(argument, context)
        case TestLetter.U:
            return _test_height(argument, context)
        case TestLetter.M:
            return _test_manually_linked(argument, context)
        case TestLetter.N:
            return _test_has_episodes(argument, context)
        case TestLetter.C | TestLetter.J:
            # Codec tests are reserved.
            return False
    return False


def evaluate_test(letter: str, argument: str, context: RenameContext) -> bool:
    """Evaluate a single test such as ``F(>=2)``.

    Args:
        letter: Test letter, e.g. ``"F"``.
        argument: Text between the parentheses, e.g. ``">=2"``.
        context: File, episodes and show to test against.

    Returns:
        The test result. Unknown letters and any error evaluate to False.
    """
    try:
        test = TestLetter(letter.strip().upper())
    except ValueError:
        logger.debug("Unknown rename test letter %r", letter)
        return False
    try:
        return _dispatch(test, argument.strip(), context)
    except Exception:
        logger.error(
            "Rename test %s(%s) failed for %s",
            test.value,
            argument,
            context.file.path,
            exc_info=True,
        )
        return False
