from __future__ import annotations

import logging
import os
from typing import Mapping, Optional, TextIO

from ghmustache.logging.helpers import get_logger, parse_level, setup_base_logger


class DefaultLoggerFactory:
    """Factory that configures the 'ghmustache' logger and hands out children.

    The handler is installed lazily by the first `get_logger` call through
    `setup_base_logger`.
    """

    def __init__(self, *, json_logs: bool = False, level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
        self._json = bool(json_logs)
        self._level = int(level)
        self._stream: Optional[TextIO] = stream
        self._configured = False

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        *,
        json_logs: bool = False,
        verbose: bool = False,
        stream: Optional[TextIO] = None,
    ) -> 'DefaultLoggerFactory':
        """Build a factory honoring GHMUSTACHE_JSON_LOGS and GHMUSTACHE_LOG_LEVEL.

        Explicit `json_logs` / `verbose` flags win over the environment.
        """
        env = os.environ if env is None else env
        level = logging.DEBUG if verbose else parse_level(env.get('GHMUSTACHE_LOG_LEVEL'), logging.INFO)
        use_json = json_logs or env.get('GHMUSTACHE_JSON_LOGS') == '1'
        return cls(json_logs=use_json, level=level, stream=stream)

    @property
    def json_logs(self) -> bool:
        return self._json

    @property
    def level(self) -> int:
        return self._level

    def get_logger(self, name: str) -> logging.Logger:
        if not self._configured:
            setup_base_logger(json_logs=self._json, level=self._level, stream=self._stream)
            self._configured = True
        return get_logger(name)
