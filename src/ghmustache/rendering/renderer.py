"""
Renderer component for ghmustache.

This module provides:
  • RendererProtocol – DI-friendly interface (from core.interfaces.render).
  • Renderer         – depth-first tree walker writing into an output sink.

Notes
-----
• One ScopeStack is created per render call and seeded with the root value;
  sections push list items or the resolved object while their children render.
• Section nodes answer SKIP to the generic walk and walk their own children
  under the modified scope.
• Partials are looked up through a TemplateLoaderProtocol collaborator.
  Without a loader the tag renders nothing. Inclusion depth is capped, as is
  the combined section + partial depth, so runaway recursion surfaces as a
  RenderError instead of exhausting the interpreter stack.
"""

from __future__ import annotations

import contextlib
import functools
import io
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from ghmustache.constants import FALSE_LITERAL, TRUE_LITERAL
from ghmustache.core.config import ParserConfig, RenderConfig
from ghmustache.core.errors import (
    PartialNotFoundError,
    PartialRecursionError,
    PartialSyntaxError,
    RenderDepthError,
    TemplateSyntaxError,
)
from ghmustache.core.interfaces.render import OutputSinkProtocol, RendererProtocol
from ghmustache.core.interfaces.templating import TemplateLoaderProtocol
from ghmustache.core.models import Node, TagType
from ghmustache.core.value import StringValue, Value, is_truthy
from ghmustache.logging.helpers import get_logger, trace_render
from ghmustache.parsing.parser import TreeBuilder
from ghmustache.processing.text_ops import html_escape
from ghmustache.rendering.context import ScopeStack
from ghmustache.walker import WalkCallback, WalkControl, walk_children


@dataclass
class _RenderState:
    """Mutable state private to one render call."""
    scopes: ScopeStack
    sink: OutputSinkProtocol
    depth: int = 0
    partial_depth: int = 0
    partials: Dict[str, Node] = field(default_factory=dict)
    callback: Optional[WalkCallback] = None


class Renderer(RendererProtocol):
    """Render parsed template trees against template values."""

    def __init__(
        self,
        *,
        loader: Optional[TemplateLoaderProtocol] = None,
        config: Optional[RenderConfig] = None,
        parser_config: Optional[ParserConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._loader = loader
        self._cfg = config or RenderConfig()
        self._parser_cfg = parser_config or ParserConfig()
        self._log = logger or get_logger('render')

    def render(self, root: Node, data: Value, sink: OutputSinkProtocol) -> None:
        """Stream the rendering of *root* against *data* into *sink*."""
        state = _RenderState(scopes=ScopeStack(data), sink=sink)
        state.callback = functools.partial(self._visit, state)
        try:
            walk_children(root, state.callback)
        except RecursionError as exc:
            # max_depth above what the interpreter stack can hold.
            raise RenderDepthError(
                f'render nesting exhausted the interpreter stack (max_depth={self._cfg.max_depth})'
            ) from exc

    def render_to_string(self, root: Node, data: Value) -> str:
        buf = io.StringIO()
        self.render(root, data, buf)
        return buf.getvalue()

    # Dispatch ---------------------------------------------------------------

    def _visit(self, state: _RenderState, node: Node, _depth: int) -> WalkControl:
        if node.is_text:
            state.sink.write(node.text)
            return WalkControl.CONTINUE

        tag = node.tag
        if tag.type is TagType.VARIABLE:
            self._emit_variable(state, tag.name, escape=self._cfg.escape)
        elif tag.type is TagType.UNESCAPED_VARIABLE:
            self._emit_variable(state, tag.name, escape=False)
        elif tag.type is TagType.SECTION_BEGIN:
            value = state.scopes.resolve(tag.name)
            truthy = is_truthy(value)
            trace_render(self._log, 'section', name=tag.name, truthy=truthy)
            if truthy:
                self._render_section(state, node, value)
            return WalkControl.SKIP
        elif tag.type is TagType.SECTION_BEGIN_INVERTED:
            truthy = is_truthy(state.scopes.resolve(tag.name))
            trace_render(self._log, 'inverted section', name=tag.name, truthy=truthy)
            if not truthy:
                self._render_section(state, node, None)
            return WalkControl.SKIP
        elif tag.type is TagType.PARTIAL:
            self._render_partial(state, node)
        # Comments, set-delimiter and stray end tags render nothing.
        return WalkControl.CONTINUE

    def _emit_variable(self, state: _RenderState, name: str, *, escape: bool) -> None:
        value = state.scopes.resolve(name)
        if isinstance(value, StringValue):
            state.sink.write(html_escape(value.text) if escape else value.text)
        elif value is not None and value.is_bool():
            state.sink.write(TRUE_LITERAL if value.is_true() else FALSE_LITERAL)

    # Sections ---------------------------------------------------------------

    @contextlib.contextmanager
    def _nested(self, state: _RenderState, node: Node) -> Iterator[None]:
        state.depth += 1
        try:
            if state.depth > self._cfg.max_depth:
                raise RenderDepthError(
                    f'"{node.tag.name}" at {node.position} exceeds the render depth '
                    f'limit of {self._cfg.max_depth}'
                )
            yield
        finally:
            state.depth -= 1

    def _render_section(self, state: _RenderState, node: Node, value: Optional[Value]) -> None:
        with self._nested(state, node):
            if value is None or value.is_string():
                walk_children(node, state.callback)
            elif value.is_non_empty_list():
                for item in value:
                    with state.scopes.pushed(item):
                        walk_children(node, state.callback)
            else:
                # Objects contribute their fields; `true` contributes none.
                with state.scopes.pushed(value):
                    walk_children(node, state.callback)

    # Partials ---------------------------------------------------------------

    def _render_partial(self, state: _RenderState, node: Node) -> None:
        name = node.tag.name
        if self._loader is None:
            self._log.debug('partial %r ignored: no template loader configured', name)
            return
        if state.partial_depth >= self._cfg.max_partial_depth:
            raise PartialRecursionError(name, self._cfg.max_partial_depth)

        tree = state.partials.get(name)
        if tree is None:
            tree = self._load_partial(name)
            state.partials[name] = tree

        trace_render(self._log, 'partial', name=name, depth=state.partial_depth + 1)
        state.partial_depth += 1
        try:
            with self._nested(state, node):
                walk_children(tree, state.callback)
        finally:
            state.partial_depth -= 1

    def _load_partial(self, name: str) -> Node:
        source = self._loader.load(name)
        if source is None:
            raise PartialNotFoundError(name)
        try:
            return TreeBuilder(source, config=self._parser_cfg, logger=self._log).build()
        except TemplateSyntaxError as exc:
            raise PartialSyntaxError(name, exc) from exc
