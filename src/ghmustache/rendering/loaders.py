from __future__ import annotations
"""
Template loaders for `{{> name}}` partials.

- `MappingTemplateLoader` serves sources from an in-memory mapping.
- `DirectoryTemplateLoader` reads `<root>/<name><suffix>` files and refuses
  names that would resolve outside of `root`.

Both satisfy `TemplateLoaderProtocol`: `load(name)` returns the source or
None when the partial does not exist. A directory file that exists but
cannot be read or decoded raises `PartialLoadError`.
"""

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

from ghmustache.core.errors import PartialLoadError
from ghmustache.core.interfaces.templating import TemplateLoaderProtocol
from ghmustache.logging.helpers import get_logger


class MappingTemplateLoader(TemplateLoaderProtocol):
    """Loader backed by a name → source mapping."""

    def __init__(self, templates: Optional[Mapping[str, str]] = None) -> None:
        self._templates: Dict[str, str] = dict(templates or {})

    def add(self, name: str, source: str) -> None:
        self._templates[name] = source

    def load(self, name: str) -> Optional[str]:
        return self._templates.get(name)


class DirectoryTemplateLoader(TemplateLoaderProtocol):
    """Loader reading partial files from a directory tree.

    Names may contain `/` to reach sub-directories; `~` is expanded on the
    root only. Paths escaping the root are treated as not found.
    """

    def __init__(
        self,
        root: Path | str,
        *,
        suffix: str = '.mustache',
        encoding: str = 'utf-8',
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._root = Path(root).expanduser().resolve()
        self._suffix = suffix
        self._encoding = encoding
        self._log = logger or get_logger('loader')

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, name: str) -> Optional[Path]:
        """Return the file backing *name*, or None when it escapes the root."""
        pth = (self._root / f'{name}{self._suffix}').resolve()
        try:
            pth.relative_to(self._root)
        except ValueError:
            self._log.warning('⚠  partial %r resolves outside %s; ignored', name, self._root)
            return None
        return pth

    def load(self, name: str) -> Optional[str]:
        pth = self.path_for(name)
        if pth is None or not pth.is_file():
            return None
        self._log.debug('loading partial %r from %s', name, pth)
        try:
            return pth.read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as exc:
            self._log.warning('⚠  partial %r at %s is unreadable: %s', name, pth, exc)
            raise PartialLoadError(name, exc) from exc
