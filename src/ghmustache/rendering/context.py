from __future__ import annotations

"""
context – Scope stack used to resolve tag names during one render call.

Frames are borrowed references: the stack never copies the values pushed
onto it, and every pushed value must outlive its pop. Use `pushed()` so the
pop happens on every exit path, including exceptions.
"""

import contextlib
from typing import Iterator, List, Optional

from ghmustache.core.errors import ScopeStackError
from ghmustache.core.value import Value


class ScopeStack:
    """Innermost-last list of value frames, resolved innermost-first."""

    def __init__(self, root: Optional[Value] = None) -> None:
        self._frames: List[Value] = []
        if root is not None:
            self.push(root)

    @property
    def depth(self) -> int:
        return len(self._frames)

    def push(self, value: Value) -> None:
        self._frames.append(value)

    def pop(self) -> Value:
        if not self._frames:
            raise ScopeStackError('pop from an empty scope stack')
        return self._frames.pop()

    @contextlib.contextmanager
    def pushed(self, value: Value) -> Iterator['ScopeStack']:
        """Push *value* for the duration of the ``with`` block."""
        self.push(value)
        try:
            yield self
        finally:
            self.pop()

    def resolve(self, name: str) -> Optional[Value]:
        """Return the innermost object field named *name*, or None.

        Frames that are not objects are skipped.
        """
        for frame in reversed(self._frames):
            found = frame.get(name)
            if found is not None:
                return found
        return None
