from __future__ import annotations

"""
value – Tagged-union data model used as render input and scope frames.

A template value is exactly one of:

  • ObjectValue – name → Value mapping (first insertion of a key wins)
  • StringValue – text
  • ListValue   – ordered sequence of values
  • BoolValue   – true / false

Each variant is its own class so that a value can never carry two payloads.
Renderers only read values; the mutators exist for callers building input.
"""

import enum
import numbers
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from ghmustache.core.errors import ValueConversionError


class ValueType(enum.Enum):
    OBJECT = 'object'
    STRING = 'string'
    LIST = 'list'
    TRUE = 'true'
    FALSE = 'false'


class Value:
    """Abstract base for every template value variant."""

    __slots__ = ()

    @property
    def type(self) -> ValueType:
        raise NotImplementedError

    # Type info -------------------------------------------------------------

    def is_object(self) -> bool:
        return self.type is ValueType.OBJECT

    def is_string(self) -> bool:
        return self.type is ValueType.STRING

    def is_list(self) -> bool:
        return self.type is ValueType.LIST

    def is_bool(self) -> bool:
        return self.type in (ValueType.TRUE, ValueType.FALSE)

    def is_true(self) -> bool:
        return self.type is ValueType.TRUE

    def is_false(self) -> bool:
        return self.type is ValueType.FALSE

    def is_empty_list(self) -> bool:
        return False

    def is_non_empty_list(self) -> bool:
        return False

    # Lookup ----------------------------------------------------------------

    def get(self, name: str) -> Optional['Value']:
        """Return the field *name* of an object value, else None."""
        return None

    def copy(self) -> 'Value':
        """Return a deep copy sharing no mutable payload with *self*."""
        raise NotImplementedError

    def to_python(self) -> Any:
        raise NotImplementedError

    # Conversion ------------------------------------------------------------

    @staticmethod
    def from_python(obj: Any, _path: str = '$') -> 'Value':
        """Convert plain Python data into a Value tree.

        Mappings become objects, ``str`` strings, ``bool`` booleans, ``None``
        false, numbers their ``str()`` form and any other iterable a list.
        Existing Value instances are returned unchanged.

        Raises:
            ValueConversionError: for bytes and non-iterable objects.
        """
        if isinstance(obj, Value):
            return obj
        if obj is None:
            return FALSE
        if isinstance(obj, bool):
            return TRUE if obj else FALSE
        if isinstance(obj, str):
            return StringValue(obj)
        if isinstance(obj, numbers.Number):
            return StringValue(str(obj))
        if isinstance(obj, Mapping):
            out = ObjectValue()
            for key, val in obj.items():
                out.set(str(key), Value.from_python(val, f'{_path}.{key}'))
            return out
        if isinstance(obj, (bytes, bytearray)):
            raise ValueConversionError(obj, _path)
        if isinstance(obj, Iterable):
            return ListValue([Value.from_python(v, f'{_path}[{i}]') for i, v in enumerate(obj)])
        raise ValueConversionError(obj, _path)


@dataclass
class ObjectValue(Value):
    fields: Dict[str, Value] = field(default_factory=dict)

    @property
    def type(self) -> ValueType:
        return ValueType.OBJECT

    def set(self, name: str, value: Value) -> None:
        """Insert *name*; an existing key keeps its first value."""
        if name not in self.fields:
            self.fields[name] = value

    def get(self, name: str) -> Optional[Value]:
        return self.fields.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __len__(self) -> int:
        return len(self.fields)

    def copy(self) -> 'ObjectValue':
        return ObjectValue({k: v.copy() for k, v in self.fields.items()})

    def to_python(self) -> Dict[str, Any]:
        return {k: v.to_python() for k, v in self.fields.items()}


@dataclass(frozen=True)
class StringValue(Value):
    text: str = ''

    @property
    def type(self) -> ValueType:
        return ValueType.STRING

    def copy(self) -> 'StringValue':
        return StringValue(self.text)

    def to_python(self) -> str:
        return self.text


@dataclass
class ListValue(Value):
    items: List[Value] = field(default_factory=list)

    @property
    def type(self) -> ValueType:
        return ValueType.LIST

    def append(self, value: Value) -> None:
        self.items.append(value)

    def is_empty_list(self) -> bool:
        return not self.items

    def is_non_empty_list(self) -> bool:
        return bool(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def copy(self) -> 'ListValue':
        return ListValue([v.copy() for v in self.items])

    def to_python(self) -> List[Any]:
        return [v.to_python() for v in self.items]


@dataclass(frozen=True)
class BoolValue(Value):
    flag: bool = False

    @property
    def type(self) -> ValueType:
        return ValueType.TRUE if self.flag else ValueType.FALSE

    def copy(self) -> 'BoolValue':
        # Immutable, so sharing is indistinguishable from copying.
        return self

    def to_python(self) -> bool:
        return self.flag


TRUE = BoolValue(True)
FALSE = BoolValue(False)


def is_truthy(value: Optional[Value]) -> bool:
    """Section condition shared by normal and inverted sections.

    Truthy: object, non-empty list, true, or any string.
    Falsy: absent, false, or an empty list.
    """
    if value is None:
        return False
    return not (value.is_false() or value.is_empty_list())
