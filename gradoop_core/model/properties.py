"""
Gradoop Core Model - Properties

PropertyValue is a closed variant over the supported scalar kinds with a
total order and a tag + payload binary encoding. Properties maps property
keys to PropertyValues.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Set

import numpy as np

from gradoop_core.exceptions import (
    CorruptEncodingError, TypeMismatchError, UnsupportedTypeError
)
from gradoop_core.model.binary import BinaryReader, BinaryWriter

# =============================================================================
# Constants
# =============================================================================

INT_MIN, INT_MAX = int(np.iinfo(np.int32).min), int(np.iinfo(np.int32).max)
LONG_MIN, LONG_MAX = int(np.iinfo(np.int64).min), int(np.iinfo(np.int64).max)


# =============================================================================
# Enums
# =============================================================================

class PropertyType(Enum):
    """Kind of a property value. The value is both the type tag and the sort rank."""
    NULL = 0
    BOOLEAN = 1
    INTEGER = 2
    LONG = 3
    FLOAT = 4
    DOUBLE = 5
    STRING = 6
    BIG_DECIMAL = 7

    @property
    def tag(self) -> int:
        return self.value


_TAGS = {kind.tag: kind for kind in PropertyType}


# =============================================================================
# PropertyValue
# =============================================================================

class PropertyValue:
    """
    Immutable typed property value.

    Example:
        PropertyValue.create(23).kind            # PropertyType.INTEGER
        PropertyValue.of_long(23).get_long()     # 23
        PropertyValue.create(2.3) == PropertyValue.of_float(2.3)   # False
    """

    __slots__ = ("_kind", "_value")

    def __init__(self, kind: PropertyType, value: Any):
        # Callers go through create() / of_*(), which normalize the value.
        self._kind = kind
        self._value = value

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def create(cls, value: Any) -> 'PropertyValue':
        """
        Infer the kind of a host value.

        Raises:
            UnsupportedTypeError: for values outside the supported kinds
        """
        if isinstance(value, PropertyValue):
            return value
        if value is None:
            return cls.null()
        if isinstance(value, (bool, np.bool_)):
            return cls.of_boolean(bool(value))
        if isinstance(value, np.integer):
            if isinstance(value, (np.int8, np.int16, np.int32, np.uint8, np.uint16)):
                return cls.of_int(int(value))
            return cls._from_python_int(int(value), prefer_long=True)
        if isinstance(value, int):
            return cls._from_python_int(value, prefer_long=False)
        if isinstance(value, np.float32):
            return cls.of_float(float(value))
        if isinstance(value, (float, np.floating)):
            return cls.of_double(float(value))
        if isinstance(value, str):
            return cls.of_string(value)
        if isinstance(value, Decimal):
            return cls.of_big_decimal(value)
        raise UnsupportedTypeError(
            f"Unsupported property value type: {type(value).__name__}"
        )

    @classmethod
    def _from_python_int(cls, value: int, prefer_long: bool) -> 'PropertyValue':
        if not prefer_long and INT_MIN <= value <= INT_MAX:
            return cls.of_int(value)
        if LONG_MIN <= value <= LONG_MAX:
            return cls.of_long(value)
        raise UnsupportedTypeError(
            f"Integer {value} exceeds 64 bits; wrap it in Decimal for BIG_DECIMAL"
        )

    @classmethod
    def null(cls) -> 'PropertyValue':
        return cls(PropertyType.NULL, None)

    @classmethod
    def of_boolean(cls, value: bool) -> 'PropertyValue':
        if not isinstance(value, (bool, np.bool_)):
            raise UnsupportedTypeError(f"bool expected, got {type(value).__name__}")
        return cls(PropertyType.BOOLEAN, bool(value))

    @classmethod
    def of_int(cls, value: int) -> 'PropertyValue':
        value = _require_int(value)
        if not INT_MIN <= value <= INT_MAX:
            raise ValueError(f"{value} is outside the 32-bit integer range")
        return cls(PropertyType.INTEGER, value)

    @classmethod
    def of_long(cls, value: int) -> 'PropertyValue':
        value = _require_int(value)
        if not LONG_MIN <= value <= LONG_MAX:
            raise ValueError(f"{value} is outside the 64-bit integer range")
        return cls(PropertyType.LONG, value)

    @classmethod
    def of_float(cls, value: float) -> 'PropertyValue':
        value = _require_real(value)
        with np.errstate(over="ignore"):
            single = np.float32(value)
        if math.isinf(single) and not math.isinf(value):
            raise ValueError(f"{value} is outside the 32-bit float range")
        return cls(PropertyType.FLOAT, float(single))

    @classmethod
    def of_double(cls, value: float) -> 'PropertyValue':
        return cls(PropertyType.DOUBLE, float(_require_real(value)))

    @classmethod
    def of_string(cls, value: str) -> 'PropertyValue':
        if not isinstance(value, str):
            raise UnsupportedTypeError(f"str expected, got {type(value).__name__}")
        return cls(PropertyType.STRING, value)

    @classmethod
    def of_big_decimal(cls, value: Any) -> 'PropertyValue':
        if isinstance(value, Decimal):
            return cls(PropertyType.BIG_DECIMAL, value)
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            try:
                return cls(PropertyType.BIG_DECIMAL, Decimal(value))
            except InvalidOperation as e:
                raise ValueError(f"Invalid decimal literal: {value!r}") from e
        raise UnsupportedTypeError(f"Decimal expected, got {type(value).__name__}")

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def kind(self) -> PropertyType:
        return self._kind

    @property
    def value(self) -> Any:
        """The wrapped Python value."""
        return self._value

    def is_null(self) -> bool:
        return self._kind is PropertyType.NULL

    def is_boolean(self) -> bool:
        return self._kind is PropertyType.BOOLEAN

    def is_int(self) -> bool:
        return self._kind is PropertyType.INTEGER

    def is_long(self) -> bool:
        return self._kind is PropertyType.LONG

    def is_float(self) -> bool:
        return self._kind is PropertyType.FLOAT

    def is_double(self) -> bool:
        return self._kind is PropertyType.DOUBLE

    def is_string(self) -> bool:
        return self._kind is PropertyType.STRING

    def is_big_decimal(self) -> bool:
        return self._kind is PropertyType.BIG_DECIMAL

    def is_number(self) -> bool:
        return self._kind in _NUMERIC_KINDS

    def _typed(self, expected: PropertyType) -> Any:
        if self._kind is not expected:
            raise TypeMismatchError(
                f"Property value is {self._kind.name}, not {expected.name}"
            )
        return self._value

    def get_boolean(self) -> bool:
        return self._typed(PropertyType.BOOLEAN)

    def get_int(self) -> int:
        return self._typed(PropertyType.INTEGER)

    def get_long(self) -> int:
        return self._typed(PropertyType.LONG)

    def get_float(self) -> float:
        return self._typed(PropertyType.FLOAT)

    def get_double(self) -> float:
        return self._typed(PropertyType.DOUBLE)

    def get_string(self) -> str:
        return self._typed(PropertyType.STRING)

    def get_big_decimal(self) -> Decimal:
        return self._typed(PropertyType.BIG_DECIMAL)

    # -------------------------------------------------------------------------
    # Equality & ordering
    # -------------------------------------------------------------------------

    def _sort_key(self) -> tuple:
        kind, value = self._kind, self._value
        if kind is PropertyType.NULL:
            return kind.tag, 0
        # Values that encode differently never compare equal: -0.0 sorts just
        # before 0.0 and Decimal("1.0") just before Decimal("1.00").
        if kind in (PropertyType.FLOAT, PropertyType.DOUBLE):
            # NaN sorts after every number and equals itself.
            if math.isnan(value):
                return kind.tag, (1, 0.0)
            return kind.tag, (0, value, math.copysign(1.0, value))
        if kind is PropertyType.STRING:
            return kind.tag, value.encode("utf-8")
        if kind is PropertyType.BIG_DECIMAL and value.is_nan():
            return kind.tag, (1, str(value))
        if kind is PropertyType.BIG_DECIMAL:
            return kind.tag, (0, value, str(value))
        return kind.tag, value

    def compare_to(self, other: 'PropertyValue') -> int:
        """Three-way comparison: negative, zero or positive."""
        mine, theirs = self._sort_key(), other._sort_key()
        return (mine > theirs) - (mine < theirs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertyValue):
            return NotImplemented
        return self._sort_key() == other._sort_key()

    def __hash__(self) -> int:
        return hash(self._sort_key())

    def __lt__(self, other: 'PropertyValue') -> bool:
        if not isinstance(other, PropertyValue):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: 'PropertyValue') -> bool:
        if not isinstance(other, PropertyValue):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: 'PropertyValue') -> bool:
        if not isinstance(other, PropertyValue):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: 'PropertyValue') -> bool:
        if not isinstance(other, PropertyValue):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    # -------------------------------------------------------------------------
    # Binary form
    # -------------------------------------------------------------------------

    def write_to(self, writer: BinaryWriter) -> None:
        kind, value = self._kind, self._value
        writer.write_byte(kind.tag)
        if kind is PropertyType.BOOLEAN:
            writer.write_byte(1 if value else 0)
        elif kind is PropertyType.INTEGER:
            writer.write_int(value)
        elif kind is PropertyType.LONG:
            writer.write_long(value)
        elif kind is PropertyType.FLOAT:
            writer.write_float(value)
        elif kind is PropertyType.DOUBLE:
            writer.write_double(value)
        elif kind is PropertyType.STRING:
            writer.write_string(value)
        elif kind is PropertyType.BIG_DECIMAL:
            writer.write_string(str(value))

    @classmethod
    def read_from(cls, reader: BinaryReader) -> 'PropertyValue':
        tag = reader.read_byte()
        kind = _TAGS.get(tag)
        if kind is None:
            raise UnsupportedTypeError(f"Unknown property type tag: {tag}")
        if kind is PropertyType.NULL:
            return cls.null()
        if kind is PropertyType.BOOLEAN:
            flag = reader.read_byte()
            if flag not in (0, 1):
                raise CorruptEncodingError(f"Invalid boolean payload: {flag}")
            return cls(kind, flag == 1)
        if kind is PropertyType.INTEGER:
            return cls(kind, reader.read_int())
        if kind is PropertyType.LONG:
            return cls(kind, reader.read_long())
        if kind is PropertyType.FLOAT:
            return cls(kind, reader.read_float())
        if kind is PropertyType.DOUBLE:
            return cls(kind, reader.read_double())
        if kind is PropertyType.STRING:
            return cls(kind, reader.read_string())
        text = reader.read_string()
        try:
            return cls(kind, Decimal(text))
        except InvalidOperation as e:
            raise CorruptEncodingError(f"Invalid decimal payload: {text!r}") from e

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.write_to(writer)
        return writer.getvalue()

    # -------------------------------------------------------------------------
    # Dict form
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Kind-tagged form, e.g. {'type': 'LONG', 'value': 5}. Decimals are strings."""
        value = str(self._value) if self._kind is PropertyType.BIG_DECIMAL else self._value
        return {'type': self._kind.name, 'value': value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PropertyValue':
        try:
            kind = PropertyType[data['type']]
        except KeyError as e:
            raise UnsupportedTypeError(f"Unknown property type: {data.get('type')!r}") from e
        if kind is PropertyType.NULL:
            return cls.null()
        return getattr(cls, _CONSTRUCTORS[kind])(data.get('value'))

    @classmethod
    def from_bytes(cls, data: bytes) -> 'PropertyValue':
        reader = BinaryReader(data)
        value = cls.read_from(reader)
        reader.expect_end()
        return value

    # -------------------------------------------------------------------------
    # String Representation
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        if self._kind is PropertyType.NULL:
            return "NULL"
        return str(self._value)

    def __repr__(self) -> str:
        return f"PropertyValue({self._kind.name}, {self._value!r})"


_NUMERIC_KINDS = frozenset({
    PropertyType.INTEGER, PropertyType.LONG, PropertyType.FLOAT,
    PropertyType.DOUBLE, PropertyType.BIG_DECIMAL,
})

_CONSTRUCTORS = {
    PropertyType.BOOLEAN: 'of_boolean',
    PropertyType.INTEGER: 'of_int',
    PropertyType.LONG: 'of_long',
    PropertyType.FLOAT: 'of_float',
    PropertyType.DOUBLE: 'of_double',
    PropertyType.STRING: 'of_string',
    PropertyType.BIG_DECIMAL: 'of_big_decimal',
}


def _require_int(value: Any) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise UnsupportedTypeError(f"int expected, got {type(value).__name__}")
    return int(value)


def _require_real(value: Any) -> float:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise UnsupportedTypeError(f"float expected, got {type(value).__name__}")
    return float(value)


# =============================================================================
# Property & Properties
# =============================================================================

@dataclass(frozen=True)
class Property:
    """A single key/value pair."""

    key: str
    value: PropertyValue

    def __repr__(self) -> str:
        return f"Property({self.key}={self.value})"


class Properties:
    """
    Mapping from property key to PropertyValue.

    Iteration yields Property records in insertion order. Equality ignores
    order: same keys and equal values per key.

    Example:
        props = Properties.create_from_map({"name": "Alice", "age": 23})
        props.get("age").get_int()   # 23
    """

    def __init__(self):
        self._values: Dict[str, PropertyValue] = {}

    @classmethod
    def create(cls) -> 'Properties':
        return cls()

    @classmethod
    def create_from_map(cls, values: Optional[Dict[str, Any]]) -> 'Properties':
        properties = cls()
        if values:
            for key, value in values.items():
                properties.set(key, value)
        return properties

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def set(self, key: str, value: Any) -> None:
        """Add or replace a property. Raw values are converted with PropertyValue.create()."""
        if not isinstance(key, str) or not key:
            raise ValueError(f"Property key must be a non-empty string, got {key!r}")
        self._values[key] = PropertyValue.create(value)

    def get(self, key: str) -> Optional[PropertyValue]:
        return self._values.get(key)

    def remove(self, key: str) -> Optional[PropertyValue]:
        return self._values.pop(key, None)

    def keys(self) -> Set[str]:
        return set(self._values)

    def items(self) -> Iterator[tuple]:
        return iter(self._values.items())

    def to_dict(self) -> Dict[str, Any]:
        """Plain key -> Python value dict."""
        return {key: value.value for key, value in self._values.items()}

    def to_typed_dict(self) -> Dict[str, Dict[str, Any]]:
        """Key -> PropertyValue.to_dict(); keeps the kind of every value."""
        return {key: value.to_dict() for key, value in self._values.items()}

    @classmethod
    def create_from_typed_map(cls, values: Optional[Dict[str, Any]]) -> 'Properties':
        """
        Inverse of to_typed_dict().

        Entries that are not kind-tagged dicts are treated as raw values and
        go through PropertyValue.create().
        """
        properties = cls()
        for key, value in (values or {}).items():
            if isinstance(value, dict):
                value = PropertyValue.from_dict(value)
            properties.set(key, value)
        return properties

    def copy(self) -> 'Properties':
        clone = Properties()
        clone._values = dict(self._values)
        return clone

    def is_empty(self) -> bool:
        return not self._values

    # -------------------------------------------------------------------------
    # Binary form
    # -------------------------------------------------------------------------

    def write_to(self, writer: BinaryWriter) -> None:
        writer.write_length(len(self._values))
        for key in sorted(self._values):
            writer.write_string(key)
            self._values[key].write_to(writer)

    @classmethod
    def read_from(cls, reader: BinaryReader) -> 'Properties':
        properties = cls()
        for _ in range(reader.read_length()):
            key = reader.read_string()
            if not key or key in properties._values:
                raise CorruptEncodingError(f"Invalid or duplicate property key: {key!r}")
            properties._values[key] = PropertyValue.read_from(reader)
        return properties

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.write_to(writer)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Properties':
        reader = BinaryReader(data)
        properties = cls.read_from(reader)
        reader.expect_end()
        return properties

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[Property]:
        for key, value in self._values.items():
            yield Property(key, value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Properties):
            return NotImplemented
        return self._values == other._values

    __hash__ = None

    def __repr__(self) -> str:
        items = ', '.join(f"{k}={v}" for k, v in list(self._values.items())[:3])
        if len(self._values) > 3:
            items += ', ...'
        return f"Properties({items})"
