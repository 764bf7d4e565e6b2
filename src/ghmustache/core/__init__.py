from __future__ import annotations

"""Public surface for ghmustache.core: data model, errors, configuration and protocols."""

from ghmustache.core.config import ParserConfig, RenderConfig
from ghmustache.core.errors import ErrorKind, GhMustacheError, TemplateSyntaxError
from ghmustache.core.models import Node, Tag, TagType
from ghmustache.core.value import Value, ValueType

__all__ = [
    'ParserConfig',
    'RenderConfig',
    'ErrorKind',
    'GhMustacheError',
    'TemplateSyntaxError',
    'Node',
    'Tag',
    'TagType',
    'Value',
    'ValueType',
]
