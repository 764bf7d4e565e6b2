from __future__ import annotations

"""
template – Compiled template façade.

`Template(source)` parses eagerly. Parse errors never escape the constructor;
they are captured so callers check `is_valid` / `error_message` (or call
`raise_for_error()`) before rendering:

    tpl = Template("Hello {{name}}!")
    if tpl.is_valid:
        print(tpl.render({"name": "Ann"}))

A valid template is never mutated afterwards and may be rendered by several
independent calls, each with its own scope stack.
"""

import io
import logging
from typing import Any, Optional, TextIO, TypeVar

from ghmustache.core.config import ParserConfig, RenderConfig
from ghmustache.core.errors import InvalidTemplateError, TemplateSyntaxError
from ghmustache.core.interfaces.render import OutputSinkProtocol
from ghmustache.core.interfaces.templating import TemplateLoaderProtocol
from ghmustache.core.models import Node
from ghmustache.core.value import ObjectValue, Value
from ghmustache.parsing.parser import TreeBuilder
from ghmustache.rendering.renderer import Renderer
from ghmustache.walker import WalkControl, walk

SinkT = TypeVar('SinkT', bound=OutputSinkProtocol)


class Template:
    """A parsed template plus its validity state."""

    def __init__(
        self,
        source: str,
        *,
        name: Optional[str] = None,
        config: Optional[ParserConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._source = source
        self._name = name
        self._parser_cfg = config or ParserConfig()
        self._log = logger
        self._error: Optional[TemplateSyntaxError] = None

        builder = TreeBuilder(source, config=self._parser_cfg, logger=logger)
        try:
            builder.build()
        except TemplateSyntaxError as exc:
            self._error = exc
        self._root = builder.root

    def __repr__(self) -> str:
        state = 'valid' if self.is_valid else f'invalid: {self.error_message}'
        label = f' {self._name!r}' if self._name else ''
        return f'<Template{label} ({state})>'

    # State ------------------------------------------------------------------

    @property
    def source(self) -> str:
        return self._source

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def root(self) -> Node:
        return self._root

    @property
    def is_valid(self) -> bool:
        return self._error is None

    @property
    def error(self) -> Optional[TemplateSyntaxError]:
        return self._error

    @property
    def error_message(self) -> str:
        """One-line description of the first parse error ('' when valid)."""
        return '' if self._error is None else str(self._error)

    def raise_for_error(self) -> None:
        if self._error is not None:
            raise self._error

    # Rendering --------------------------------------------------------------

    def render(
        self,
        data: Any = None,
        *,
        loader: Optional[TemplateLoaderProtocol] = None,
        config: Optional[RenderConfig] = None,
    ) -> str:
        """Render against *data* (a Value or plain Python data) and return the text.

        Raises:
            InvalidTemplateError: if the template failed to parse.
            RenderError: on partial failures or depth overflow.
        """
        buf = io.StringIO()
        self.render_to(buf, data, loader=loader, config=config)
        return buf.getvalue()

    def render_to(
        self,
        sink: SinkT,
        data: Any = None,
        *,
        loader: Optional[TemplateLoaderProtocol] = None,
        config: Optional[RenderConfig] = None,
    ) -> SinkT:
        """Stream the rendering into *sink* and return it."""
        if self._error is not None:
            raise InvalidTemplateError(self._error)
        value = ObjectValue() if data is None else Value.from_python(data)
        renderer = Renderer(
            loader=loader, config=config, parser_config=self._parser_cfg, logger=self._log
        )
        renderer.render(self._root, value, sink)
        return sink

    # Diagnostics ------------------------------------------------------------

    def print_tree(self, stream: TextIO) -> None:
        """Write an indented `TAG:` / `TXT:` listing of the tree to *stream*."""

        def _print(node: Node, depth: int) -> WalkControl:
            indent = ' ' * depth
            if node.is_tag:
                stream.write(f'{indent}TAG: {{{{{node.tag.name}}}}}\n')
            else:
                stream.write(f'{indent}TXT: {node.text}\n')
            return WalkControl.CONTINUE

        walk(self._root, _print)

    def dump(self) -> str:
        buf = io.StringIO()
        self.print_tree(buf)
        return buf.getvalue()
