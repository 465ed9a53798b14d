"""Token vocabulary of the rename script language.

Placeholders follow the WebAOM move/rename system
(http://wiki.anidb.net/w/WebAOM#Move.2Frename_system). Keywords are matched
case-insensitively; placeholders are case-sensitive because ``%ed2`` and
``%ED2`` (like ``%crc`` and ``%CRC``) differ only by case.
"""

from enum import Enum


class RenameTag(str, Enum):
    """Placeholders substituted by ``ADD`` actions."""

    ANIME_NAME_ROMAJI = "%ann"
    ANIME_NAME_KANJI = "%kan"
    ANIME_NAME_ENGLISH = "%eng"
    EPISODE_NAME_ROMAJI = "%epn"
    EPISODE_NAME_ENGLISH = "%epr"
    EPISODE_NUMBER = "%enr"
    GROUP_SHORT_NAME = "%grp"
    GROUP_LONG_NAME = "%grl"
    ED2K_LOWER = "%ed2"
    ED2K_UPPER = "%ED2"
    CRC_LOWER = "%crc"
    CRC_UPPER = "%CRC"
    FILE_VERSION = "%ver"
    SOURCE = "%src"
    RESOLUTION = "%res"
    VIDEO_HEIGHT = "%vdh"
    YEAR = "%yea"
    EPISODES = "%eps"
    """Total number of episodes of the first episode's kind."""
    TYPE = "%typ"
    FILE_ID = "%fid"
    ANIME_ID = "%aid"
    EPISODE_ID = "%eid"
    GROUP_ID = "%gid"
    DUB_LANGUAGE = "%dub"
    SUB_LANGUAGE = "%sub"
    VIDEO_CODEC = "%vid"
    AUDIO_CODEC = "%aud"
    VIDEO_BIT_DEPTH = "%bit"
    ORIGINAL_FILE_NAME = "%sna"
    CENSORED = "%cen"
    DEPRECATED = "%dep"

    @property
    def bare(self) -> str:
        """Tag name without the leading ``%`` as used by the ``I`` test."""
        return self.value[1:]


class Keyword(str, Enum):
    """Reserved words of the script language."""

    IF = "IF"
    DO = "DO"
    FAIL = "FAIL"
    ADD = "ADD"
    REPLACE = "REPLACE"
    NONE = "none"
    """Used by ``S(none)`` for files without subtitle tracks."""
    UNKNOWN = "unknown"
    """Used by ``G``, ``R`` and ``T`` for missing values."""

    def matches(self, text: str) -> bool:
        return text.strip().lower() == self.value.lower()


class TestLetter(str, Enum):
    """Single-letter tests usable in ``IF`` conditions.

    A   int     Anime (show) id
    C   text    Video codec (reserved, always false)
    D   text    Dub language (one of the audio tracks)
    E   int     Episode number
    F   int     File version
    G   int     Group id or ``unknown``
    H   text    Episode type (E, S, C, T, P, O, U)
    I   text    Tag has a value, e.g. ``I(eng)``
    J   text    Audio codec (reserved, always false)
    M   null    File is manually linked
    N   null    File has episodes linked
    R   text    Rip source or ``unknown``
    S   text    Sub language (one of the subtitle tracks) or ``none``
    T   text    Show type or ``unknown``
    U   int     Video height
    W   int     Video width
    X   int     Number of normal episodes
    Y   int     Year
    Z   int     Video bit depth

    Numeric tests accept ``!``, ``>``, ``>=``, ``<`` and ``<=``.
    """

    __test__ = False

    A = "A"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    H = "H"
    I = "I"  # noqa: E741
    J = "J"
    M = "M"
    N = "N"
    R = "R"
    S = "S"
    T = "T"
    U = "U"
    W = "W"
    X = "X"
    Y = "Y"
    Z = "Z"
