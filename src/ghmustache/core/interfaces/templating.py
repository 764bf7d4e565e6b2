from __future__ import annotations
from typing import Any, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class TemplateEngineProtocol(Protocol):
    """Protocol for string-in, string-out template engines."""

    def render(self, template: str, variables: Mapping[str, Any]) -> str:
        ...


@runtime_checkable
class TemplateLoaderProtocol(Protocol):
    """Source lookup for partial templates (`{{> name}}`)."""

    def load(self, name: str) -> Optional[str]:
        """Return the source registered under `name`, or None if unknown."""
        ...
