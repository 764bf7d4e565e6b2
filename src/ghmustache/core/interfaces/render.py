from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

from ghmustache.core.models import Node
from ghmustache.core.value import Value


@runtime_checkable
class OutputSinkProtocol(Protocol):
    """Anything rendered text can be streamed into (io.StringIO, files, ...)."""

    def write(self, text: str) -> object:
        ...


@runtime_checkable
class RendererProtocol(Protocol):
    """Walks a parsed template tree against a root value."""

    def render(self, root: Node, data: Value, sink: OutputSinkProtocol) -> None:
        """Stream the rendering of `root` into `sink`."""
        ...

    def render_to_string(self, root: Node, data: Value) -> str:
        """Render `root` and return the text."""
        ...
