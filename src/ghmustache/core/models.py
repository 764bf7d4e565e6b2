from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional


class TagType(enum.Enum):
    INVALID = 'invalid'
    VARIABLE = 'variable'
    UNESCAPED_VARIABLE = 'unescaped_variable'
    SECTION_BEGIN = 'section_begin'
    SECTION_END = 'section_end'
    SECTION_BEGIN_INVERTED = 'section_begin_inverted'
    COMMENT = 'comment'
    PARTIAL = 'partial'
    SET_DELIMITER = 'set_delimiter'


@dataclass(frozen=True)
class Tag:
    type: TagType = TagType.INVALID
    name: str = ''

    @property
    def is_section_begin(self) -> bool:
        return self.type in (TagType.SECTION_BEGIN, TagType.SECTION_BEGIN_INVERTED)

    @property
    def is_section_end(self) -> bool:
        return self.type is TagType.SECTION_END


@dataclass
class Node:
    """One element of a parsed template tree.

    A node is either literal text (non-empty ``text``, no tag) or a tag
    (empty ``text``). Only section nodes have children. ``position`` is the
    source offset the node started at and is used for diagnostics only.
    """

    text: str = ''
    tag: Optional[Tag] = None
    children: List['Node'] = field(default_factory=list)
    position: int = -1

    @classmethod
    def text_node(cls, text: str, position: int) -> 'Node':
        return cls(text=text, position=position)

    @classmethod
    def tag_node(cls, tag: Tag, position: int) -> 'Node':
        return cls(tag=tag, position=position)

    @property
    def is_text(self) -> bool:
        return bool(self.text)

    @property
    def is_tag(self) -> bool:
        return not self.text

    @property
    def is_section_begin(self) -> bool:
        return self.tag is not None and self.tag.is_section_begin

    @property
    def is_section_end(self) -> bool:
        return self.tag is not None and self.tag.is_section_end
