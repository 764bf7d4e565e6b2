from __future__ import annotations

"""Exception hierarchy for ghmustache.

Parse failures are carried by :class:`TemplateSyntaxError` and captured by
``Template`` into its validity flag. Render failures propagate to the caller.
"""

import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """Classification of template syntax errors."""

    UNTERMINATED_TAG = 'unterminated_tag'
    INVALID_DELIMITER_TAG = 'invalid_delimiter_tag'
    UNMATCHED_SECTION_END = 'unmatched_section_end'
    UNTERMINATED_SECTION = 'unterminated_section'
    NESTING_TOO_DEEP = 'nesting_too_deep'


class GhMustacheError(Exception):
    """Base class for every error raised by ghmustache."""


class TemplateSyntaxError(GhMustacheError, ValueError):
    """Raised when a template cannot be parsed.

    Attributes:
        kind: The :class:`ErrorKind` of the failure.
        position: Offset in the source where the offending tag starts.
    """

    def __init__(self, kind: ErrorKind, position: int, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.position = position

    @property
    def message(self) -> str:
        return str(self)


class InvalidTemplateError(GhMustacheError):
    """Raised when rendering a template that failed to parse."""

    def __init__(self, cause: TemplateSyntaxError) -> None:
        super().__init__(f'cannot render an invalid template: {cause}')
        self.cause = cause


class RenderError(GhMustacheError):
    """Structural failure while rendering."""


class RenderDepthError(RenderError):
    """Combined section and partial nesting exceeded the configured ceiling."""


class PartialNotFoundError(RenderError):
    """The template loader has no source for a partial name."""

    def __init__(self, name: str) -> None:
        super().__init__(f'partial {name!r} not found')
        self.name = name


class PartialLoadError(RenderError):
    """The template loader found a partial but could not read it."""

    def __init__(self, name: str, cause: Exception) -> None:
        super().__init__(f'partial {name!r} could not be read: {cause}')
        self.name = name
        self.cause = cause


class PartialRecursionError(RenderError):
    """Partial inclusion nested deeper than the configured ceiling."""

    def __init__(self, name: str, limit: int) -> None:
        super().__init__(f'partial {name!r} exceeds the recursion limit of {limit}')
        self.name = name
        self.limit = limit


class PartialSyntaxError(RenderError):
    """A partial's source failed to parse."""

    def __init__(self, name: str, cause: TemplateSyntaxError) -> None:
        super().__init__(f'partial {name!r} is invalid: {cause}')
        self.name = name
        self.cause = cause


class ScopeStackError(GhMustacheError, IndexError):
    """Unbalanced scope stack operation."""


class ValueConversionError(GhMustacheError, TypeError):
    """Plain Python data that cannot be represented as a Value."""

    def __init__(self, obj: object, path: Optional[str] = None) -> None:
        where = f' at {path}' if path else ''
        super().__init__(f'cannot convert {type(obj).__name__} to a template value{where}')
        self.obj = obj
        self.path = path
