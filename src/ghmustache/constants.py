from __future__ import annotations

"""Project-wide constants used across modules.

This module isolates public constants to reduce cross-module coupling.
"""

# Default tag delimiters. Each parse starts from these and may switch away
# from them with a `{{=<% %>=}}` directive.
BRACE_BEGIN: str = '{{'
BRACE_END: str = '}}'
BRACE_END_UNESCAPED: str = '}}}'

# Tag sigils (first character of the trimmed tag content).
SIGIL_SECTION: str = '#'
SIGIL_INVERTED: str = '^'
SIGIL_SECTION_END: str = '/'
SIGIL_PARTIAL: str = '>'
SIGIL_UNESCAPED: str = '&'
SIGIL_COMMENT: str = '!'
SIGIL_DELIMITER: str = '='

# Limits.
DEFAULT_MAX_NESTING: int = 100
DEFAULT_MAX_DEPTH: int = 100
DEFAULT_MAX_PARTIAL_DEPTH: int = 16
DEFAULT_ENGINE_CACHE_SIZE: int = 128

# Literals emitted for boolean values.
TRUE_LITERAL: str = 'true'
FALSE_LITERAL: str = 'false'
