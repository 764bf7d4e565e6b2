from __future__ import annotations

"""
text_ops – ASCII-only trimming and HTML escaping for tag contents and output.

Trimming follows C `isspace` in the "C" locale (space, \\t, \\n, \\v, \\f,
\\r); other Unicode whitespace is kept as part of tag names.
"""

ASCII_WHITESPACE = ' \t\n\v\f\r'

_HTML_ESCAPES = {
    '&': '&amp;',
    '<': '&lt;',
    '>': '&gt;',
    '"': '&quot;',
    "'": '&apos;',
}
_HTML_TABLE = str.maketrans(_HTML_ESCAPES)


def ascii_trim(text: str) -> str:
    """Strip leading and trailing ASCII whitespace from *text*."""
    return text.strip(ASCII_WHITESPACE)


def html_escape(text: str) -> str:
    """Escape the five HTML-significant characters of *text*."""
    return text.translate(_HTML_TABLE)
