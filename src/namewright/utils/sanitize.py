"""Filename sanitizing.

Characters that are invalid in a file or folder name on common filesystems are
swapped for visually similar Unicode characters instead of being dropped, so
titles stay readable.
"""

_REPLACEMENTS = (
    ("*", "★"),  # BLACK STAR
    ("|", "¦"),  # BROKEN BAR
    ("\\", "⧹"),  # BIG REVERSE SOLIDUS
    ("/", "⁄"),  # FRACTION SLASH
    (":", "։"),  # ARMENIAN FULL STOP
    ('"', "″"),  # DOUBLE PRIME
    (">", "›"),  # SINGLE RIGHT-POINTING ANGLE QUOTATION MARK
    ("<", "‹"),  # SINGLE LEFT-POINTING ANGLE QUOTATION MARK
    ("?", "？"),  # FULLWIDTH QUESTION MARK
    ("...", "…"),  # HORIZONTAL ELLIPSIS
)

# Leading/trailing dots hide files or get stripped by some filesystems.
_ONE_DOT_LEADER = "․"


def replace_invalid_folder_name_characters(name: str) -> str:
    """Replace characters that are invalid in a folder or file name.

    The result is stable: sanitizing an already sanitized name returns it
    unchanged.

    Args:
        name: Raw file or folder name.

    Returns:
        The sanitized name with surrounding whitespace removed.

    Example:
        >>> replace_invalid_folder_name_characters("What?: A Story...")
        'What？։ A Story…'
    """
    result = "".join(ch for ch in name if ch >= " ").strip()
    for invalid, replacement in _REPLACEMENTS:
        result = result.replace(invalid, replacement)
    if result.startswith("."):
        result = _ONE_DOT_LEADER + result[1:]
    if result.endswith("."):
        result = result[:-1] + _ONE_DOT_LEADER
    return result.strip()
