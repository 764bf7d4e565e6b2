from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ghmustache.constants import BRACE_BEGIN, BRACE_END, SIGIL_DELIMITER


@dataclass(frozen=True)
class Delimiters:
    """Active begin/end tag delimiters of one parse."""
    begin: str = BRACE_BEGIN
    end: str = BRACE_END

    @property
    def is_brace(self) -> bool:
        """True while the default `{{ }}` pair is active (enables `{{{x}}}`)."""
        return self.begin == BRACE_BEGIN and self.end == BRACE_END


def parse_set_delimiter(contents: str) -> Optional[Delimiters]:
    """Parse trimmed `=BEGIN END=` tag contents.

    The smallest legal directive is ``=X X=``. It must end with ``=`` and
    hold exactly one space separating two non-empty delimiters.

    Returns:
        The new delimiters, or None when *contents* is malformed.
    """
    if len(contents) < 5:
        return None
    if not contents.startswith(SIGIL_DELIMITER) or not contents.endswith(SIGIL_DELIMITER):
        return None
    space = contents.find(' ')
    if space == -1 or contents.find(' ', space + 1) != -1:
        return None
    begin = contents[1:space]
    end = contents[space + 1:-1]
    if not begin or not end:
        return None
    return Delimiters(begin=begin, end=end)
