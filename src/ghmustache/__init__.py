from __future__ import annotations

import logging
from typing import Any, Optional

from ghmustache.core.config import ParserConfig, RenderConfig
from ghmustache.core.errors import (
    ErrorKind,
    GhMustacheError,
    InvalidTemplateError,
    PartialLoadError,
    PartialNotFoundError,
    PartialRecursionError,
    PartialSyntaxError,
    RenderDepthError,
    RenderError,
    ScopeStackError,
    TemplateSyntaxError,
    ValueConversionError,
)
from ghmustache.core.interfaces.templating import TemplateEngineProtocol, TemplateLoaderProtocol
from ghmustache.core.models import Node, Tag, TagType
from ghmustache.core.value import (
    FALSE,
    TRUE,
    BoolValue,
    ListValue,
    ObjectValue,
    StringValue,
    Value,
    ValueType,
    is_truthy,
)
from ghmustache.logging.helpers import get_logger
from ghmustache.rendering.context import ScopeStack
from ghmustache.rendering.loaders import DirectoryTemplateLoader, MappingTemplateLoader
from ghmustache.rendering.renderer import Renderer
from ghmustache.rendering.template_engine import MustacheTemplateEngine
from ghmustache.template import Template

__version__ = '0.3.0'


def render(
    source: str,
    data: Any = None,
    *,
    loader: Optional[TemplateLoaderProtocol] = None,
    config: Optional[RenderConfig] = None,
) -> str:
    """Parse *source* and render it against *data* in one step.

    Raises TemplateSyntaxError when *source* is invalid.
    """
    tpl = Template(source)
    tpl.raise_for_error()
    return tpl.render(data, loader=loader, config=config)


def template_engine_factory(
    *,
    loader: Optional[TemplateLoaderProtocol] = None,
    strict: bool = True,
    logger: Optional[logging.Logger] = None,
) -> MustacheTemplateEngine:
    """Factory helper returning an engine configured from GHMUSTACHE_* variables."""
    return MustacheTemplateEngine(
        loader=loader,
        render_config=RenderConfig.from_env(),
        parser_config=ParserConfig.from_env(),
        strict=strict,
        logger=logger or get_logger('templates'),
    )


__all__ = [
    'Template',
    'render',
    'template_engine_factory',
    'MustacheTemplateEngine',
    'TemplateEngineProtocol',
    'TemplateLoaderProtocol',
    'MappingTemplateLoader',
    'DirectoryTemplateLoader',
    'Renderer',
    'ScopeStack',
    'ParserConfig',
    'RenderConfig',
    'Node',
    'Tag',
    'TagType',
    'Value',
    'ValueType',
    'ObjectValue',
    'StringValue',
    'ListValue',
    'BoolValue',
    'TRUE',
    'FALSE',
    'is_truthy',
    'ErrorKind',
    'GhMustacheError',
    'TemplateSyntaxError',
    'InvalidTemplateError',
    'RenderError',
    'RenderDepthError',
    'PartialLoadError',
    'PartialNotFoundError',
    'PartialRecursionError',
    'PartialSyntaxError',
    'ScopeStackError',
    'ValueConversionError',
]
