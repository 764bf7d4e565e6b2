"""
template_engine – TemplateEngineProtocol implementation backed by Template.

Callers that only need "string in, string out" use this engine instead of
handling Template objects. Compiled templates are cached by source text in a
small LRU so repeated renders of the same template skip parsing.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, Mapping, Optional

from ghmustache.constants import DEFAULT_ENGINE_CACHE_SIZE
from ghmustache.core.config import ParserConfig, RenderConfig
from ghmustache.core.errors import GhMustacheError
from ghmustache.core.interfaces.templating import TemplateEngineProtocol, TemplateLoaderProtocol
from ghmustache.logging.helpers import get_logger
from ghmustache.template import Template


class MustacheTemplateEngine(TemplateEngineProtocol):
    """Mustache-style engine with a bounded compile cache.

    With ``strict=True`` (default) parse and render failures propagate. With
    ``strict=False`` they are logged and the template source is returned
    unchanged, so templating never aborts the caller's pipeline.
    """

    def __init__(
        self,
        *,
        loader: Optional[TemplateLoaderProtocol] = None,
        render_config: Optional[RenderConfig] = None,
        parser_config: Optional[ParserConfig] = None,
        cache_size: int = DEFAULT_ENGINE_CACHE_SIZE,
        strict: bool = True,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._loader = loader
        self._render_cfg = render_config or RenderConfig()
        self._parser_cfg = parser_config or ParserConfig()
        self._cache_size = max(0, int(cache_size))
        self._cache: OrderedDict[str, Template] = OrderedDict()
        self._strict = strict
        self._lock = threading.Lock()
        self._log = logger or get_logger('templates')

    def compile(self, template: str) -> Template:
        """Return the (possibly cached) compiled form of *template*."""
        with self._lock:
            tpl = self._cache.get(template)
            if tpl is not None:
                self._cache.move_to_end(template)
                return tpl
        tpl = Template(template, config=self._parser_cfg, logger=self._log)
        if self._cache_size:
            with self._lock:
                self._cache[template] = tpl
                if len(self._cache) > self._cache_size:
                    self._cache.popitem(last=False)
        return tpl

    def render(self, template: str, variables: Mapping[str, Any]) -> str:  # type: ignore[override]
        """Render *template* against *variables*."""
        try:
            tpl = self.compile(template)
            tpl.raise_for_error()
            return tpl.render(dict(variables), loader=self._loader, config=self._render_cfg)
        except GhMustacheError as exc:
            if self._strict:
                raise
            self._log.error('template rendering failed: %s', exc)
            return template

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
