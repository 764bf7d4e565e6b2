from __future__ import annotations

"""Typed configuration dataclasses for parsing and rendering.

Defaults come from :mod:`ghmustache.constants`; ``from_env`` lets a process
override limits with GHMUSTACHE_* environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ghmustache.constants import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_NESTING,
    DEFAULT_MAX_PARTIAL_DEPTH,
)
from ghmustache.logging.helpers import get_logger


def _env_int(
    env: Mapping[str, str],
    key: str,
    default: int,
    logger: logging.Logger,
) -> int:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        val = int(raw)
    except ValueError:
        logger.warning('⚠  invalid %s=%r, using default %d', key, raw, default)
        return default
    if val < 1:
        logger.warning('⚠  %s must be >= 1 (got %d), using default %d', key, val, default)
        return default
    return val


@dataclass(frozen=True)
class ParserConfig:
    """Options for the tree builder."""
    max_nesting: int = DEFAULT_MAX_NESTING

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'ParserConfig':
        env = os.environ if env is None else env
        log = get_logger('config')
        return cls(max_nesting=_env_int(env, 'GHMUSTACHE_MAX_NESTING', DEFAULT_MAX_NESTING, log))


@dataclass(frozen=True)
class RenderConfig:
    """Options for the renderer.

    Attributes:
        max_depth: Ceiling on combined section and partial nesting.
        max_partial_depth: Ceiling on nested partial inclusions.
        escape: HTML-escape ``{{name}}`` output; unescaped tags are never escaped.
    """
    max_depth: int = DEFAULT_MAX_DEPTH
    max_partial_depth: int = DEFAULT_MAX_PARTIAL_DEPTH
    escape: bool = True

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'RenderConfig':
        env = os.environ if env is None else env
        log = get_logger('config')
        return cls(
            max_depth=_env_int(env, 'GHMUSTACHE_MAX_DEPTH', DEFAULT_MAX_DEPTH, log),
            max_partial_depth=_env_int(
                env, 'GHMUSTACHE_MAX_PARTIAL_DEPTH', DEFAULT_MAX_PARTIAL_DEPTH, log
            ),
        )
