"""Version extraction from raw command output."""

from __future__ import annotations

import re

from corrator.utils.errors import ExtractionError


def extract_version(pattern: re.Pattern[str] | str, text: str) -> str:
    """Return the value captured by the ``version`` group of pattern in text.

    The first match anywhere in text is used.

    Args:
        pattern: Compiled or source pattern defining a named group ``version``
        text: Raw command output

    Returns:
        The captured version string

    Raises:
        ExtractionError: If the pattern does not match or the group did not
            participate in the match
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern)

    match = pattern.search(text)
    if match is None or "version" not in pattern.groupindex:
        raise ExtractionError(pattern.pattern, text)

    version = match.group("version")
    if version is None:
        raise ExtractionError(pattern.pattern, text)
    return version
