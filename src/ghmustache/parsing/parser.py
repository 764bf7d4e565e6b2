from __future__ import annotations

"""
TreeBuilder – folds the tokenizer's flat node stream into a section tree.

The builder keeps a stack of open sections seeded with the root node. Every
node is appended to the innermost open section; section begin tags open a new
level and section end tags close one. A final pass checks that each section
ends with a matching end tag and removes that tag from the tree.
"""

import logging
from typing import List, Optional

from ghmustache.core.config import ParserConfig
from ghmustache.core.errors import ErrorKind, TemplateSyntaxError
from ghmustache.core.models import Node
from ghmustache.logging.helpers import get_logger
from ghmustache.parsing.tokenizer import TagTokenizer
from ghmustache.walker import WalkControl, walk


class TreeBuilder:
    """Builds the tree of a single template source.

    `root` is available even after a failed `build()`, holding whatever was
    parsed before the first error.
    """

    def __init__(
        self,
        source: str,
        *,
        config: Optional[ParserConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._source = source
        self._cfg = config or ParserConfig()
        self._log = logger or get_logger('parser')
        self.root = Node()

    def build(self) -> Node:
        """Parse the source and return the root node.

        Raises:
            TemplateSyntaxError: on the first structural error.
        """
        try:
            self._fold(TagTokenizer(self._source))
            try:
                self._close_sections()
            except RecursionError as exc:
                raise TemplateSyntaxError(
                    ErrorKind.NESTING_TOO_DEEP,
                    0,
                    'section nesting exhausted the interpreter stack '
                    f'(max_nesting={self._cfg.max_nesting})',
                ) from exc
        except TemplateSyntaxError as exc:
            self._log.debug('parse failed (%s): %s', exc.kind.value, exc)
            raise
        return self.root

    def _fold(self, tokenizer: TagTokenizer) -> None:
        sections: List[Node] = [self.root]
        for node in tokenizer.tokens():
            sections[-1].children.append(node)
            if node.is_section_begin:
                if len(sections) > self._cfg.max_nesting:
                    raise TemplateSyntaxError(
                        ErrorKind.NESTING_TOO_DEEP,
                        node.position,
                        f'section "{node.tag.name}" at {node.position} exceeds '
                        f'the nesting limit of {self._cfg.max_nesting}',
                    )
                sections.append(node)
            elif node.is_section_end:
                if len(sections) == 1:
                    raise TemplateSyntaxError(
                        ErrorKind.UNMATCHED_SECTION_END,
                        node.position,
                        f'section end tag "{node.tag.name}" found without start tag at {node.position}',
                    )
                sections.pop()

    def _close_sections(self) -> None:
        unterminated: List[Node] = []

        def _check(node: Node, _depth: int) -> WalkControl:
            if not node.is_section_begin:
                return WalkControl.CONTINUE
            last = node.children[-1] if node.children else None
            if last is None or not last.is_section_end or last.tag.name != node.tag.name:
                unterminated.append(node)
                return WalkControl.STOP
            node.children.pop()
            return WalkControl.CONTINUE

        walk(self.root, _check)
        if unterminated:
            bad = unterminated[0]
            raise TemplateSyntaxError(
                ErrorKind.UNTERMINATED_SECTION,
                bad.position,
                f'no section end tag found for section "{bad.tag.name}" at {bad.position}',
            )


def parse(source: str, *, config: Optional[ParserConfig] = None) -> Node:
    """Parse *source* and return its tree, raising TemplateSyntaxError on failure."""
    return TreeBuilder(source, config=config).build()
