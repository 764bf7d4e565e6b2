from __future__ import annotations

"""
TagTokenizer – single left-to-right scan that splits a template into a flat
stream of text and tag nodes.

This class centralizes:
    * Begin/end delimiter search, including the `{{{name}}}` triple-brace
      form that is only recognized while the default braces are active.
    * ASCII trimming of tag contents and sigil classification.
    * `{{=<% %>=}}` delimiter switching; such tags update the scan state and
      produce no node.

Nesting is not handled here; see `ghmustache.parsing.parser.TreeBuilder`.
"""

from typing import Dict, Iterator

from ghmustache.constants import (
    BRACE_END_UNESCAPED,
    SIGIL_COMMENT,
    SIGIL_DELIMITER,
    SIGIL_INVERTED,
    SIGIL_PARTIAL,
    SIGIL_SECTION,
    SIGIL_SECTION_END,
    SIGIL_UNESCAPED,
)
from ghmustache.core.errors import ErrorKind, TemplateSyntaxError
from ghmustache.core.models import Node, Tag, TagType
from ghmustache.parsing.delimiters import Delimiters, parse_set_delimiter
from ghmustache.processing.text_ops import ascii_trim

_SIGILS: Dict[str, TagType] = {
    SIGIL_SECTION: TagType.SECTION_BEGIN,
    SIGIL_INVERTED: TagType.SECTION_BEGIN_INVERTED,
    SIGIL_SECTION_END: TagType.SECTION_END,
    SIGIL_PARTIAL: TagType.PARTIAL,
    SIGIL_UNESCAPED: TagType.UNESCAPED_VARIABLE,
    SIGIL_COMMENT: TagType.COMMENT,
}


def classify_tag(contents: str, *, triple_brace: bool = False) -> Tag:
    """Build a Tag from trimmed *contents*.

    The triple-brace form is always an unescaped variable named by the full
    contents; otherwise the first character selects the type and is stripped
    from the name. Contents without a sigil name a plain variable.
    """
    if triple_brace:
        return Tag(TagType.UNESCAPED_VARIABLE, contents)
    if not contents:
        return Tag(TagType.VARIABLE, '')
    tag_type = _SIGILS.get(contents[0])
    if tag_type is None:
        return Tag(TagType.VARIABLE, contents)
    return Tag(tag_type, ascii_trim(contents[1:]))


class TagTokenizer:
    """Tokenizer bound to one template source.

    Delimiter state lives on the instance, so every parse starts from the
    default braces regardless of what previous parses switched to.
    """

    def __init__(self, source: str) -> None:
        self._source = source
        self.delimiters = Delimiters()

    def tokens(self) -> Iterator[Node]:
        """Yield text and tag nodes in document order.

        Raises:
            TemplateSyntaxError: UNTERMINATED_TAG or INVALID_DELIMITER_TAG;
                nodes yielded before the failure remain valid.
        """
        src = self._source
        n = len(src)
        pos = 0
        while pos < n:
            delims = self.delimiters
            start = src.find(delims.begin, pos)
            if start == -1:
                yield Node.text_node(src[pos:], pos)
                return
            if start != pos:
                yield Node.text_node(src[pos:start], pos)

            content_at = start + len(delims.begin)
            triple = delims.is_brace and content_at < n and src[content_at] == '{'
            end_delim = BRACE_END_UNESCAPED if triple else delims.end
            if triple:
                content_at += 1
            end = src.find(end_delim, content_at)
            if end == -1:
                raise TemplateSyntaxError(
                    ErrorKind.UNTERMINATED_TAG,
                    start,
                    f'no tag end delimiter found for start delimiter at {start}',
                )
            pos = end + len(end_delim)

            contents = ascii_trim(src[content_at:end])
            if contents.startswith(SIGIL_DELIMITER):
                switched = parse_set_delimiter(contents)
                if switched is None:
                    raise TemplateSyntaxError(
                        ErrorKind.INVALID_DELIMITER_TAG,
                        start,
                        f'invalid set delimiter tag found at {start}',
                    )
                self.delimiters = switched
                continue

            yield Node.tag_node(classify_tag(contents, triple_brace=triple), start)
