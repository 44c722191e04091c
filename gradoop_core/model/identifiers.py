"""
Gradoop Core Model - Identifiers

GradoopId is a 12 byte identifier that independent producers can mint
without coordination:

    | 4 bytes seconds | 5 bytes discriminator | 3 bytes counter |

GradoopIdSet is the set of graph ids a vertex or edge belongs to.
"""

import itertools
import os
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Union

from gradoop_core.exceptions import CorruptEncodingError, FormatError
from gradoop_core.model.binary import BinaryReader, BinaryWriter

# =============================================================================
# Constants
# =============================================================================

ID_SIZE = 12
DISCRIMINATOR_SIZE = 5
_COUNTER_MASK = 0xFFFFFF
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


# =============================================================================
# GradoopId
# =============================================================================

@dataclass(frozen=True, order=True)
class GradoopId:
    """
    Immutable 12 byte identifier, ordered byte-wise.

    Example:
        gid = GradoopId.get()
        same = GradoopId.from_string(str(gid))
        assert gid == same
    """

    data: bytes

    def __post_init__(self):
        if not isinstance(self.data, bytes):
            raise TypeError(f"GradoopId requires bytes, got {type(self.data).__name__}")
        if len(self.data) != ID_SIZE:
            raise FormatError(f"GradoopId requires {ID_SIZE} bytes, got {len(self.data)}")

    @classmethod
    def get(cls, generator: Optional['GradoopIdGenerator'] = None) -> 'GradoopId':
        """
        Mint a fresh identifier.

        Uses the calling thread's default generator unless an explicit
        generator is given.
        """
        if generator is None:
            generator = _default_generator()
        return generator.next_id()

    @classmethod
    def from_string(cls, value: str) -> 'GradoopId':
        """Parse the 24 character hexadecimal form."""
        if not isinstance(value, str):
            raise FormatError(f"GradoopId string expected, got {type(value).__name__}")
        if len(value) != 2 * ID_SIZE or not set(value) <= _HEX_DIGITS:
            raise FormatError(f"Invalid GradoopId string: {value!r}")
        return cls(bytes.fromhex(value))

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check whether a string is a well-formed GradoopId."""
        return (isinstance(value, str) and len(value) == 2 * ID_SIZE
                and set(value) <= _HEX_DIGITS)

    @classmethod
    def from_bytes(cls, data: bytes) -> 'GradoopId':
        if len(data) != ID_SIZE:
            raise CorruptEncodingError(
                f"GradoopId payload must be {ID_SIZE} bytes, got {len(data)}"
            )
        return cls(bytes(data))

    @classmethod
    def read_from(cls, reader: BinaryReader) -> 'GradoopId':
        return cls(reader.read_raw(ID_SIZE))

    def write_to(self, writer: BinaryWriter) -> None:
        writer.write_raw(self.data)

    def to_bytes(self) -> bytes:
        return self.data

    @property
    def timestamp(self) -> int:
        """Creation time in seconds since the epoch."""
        return int.from_bytes(self.data[:4], "big")

    def __str__(self) -> str:
        return self.data.hex()

    def __repr__(self) -> str:
        return f"GradoopId({self.data.hex()})"


GradoopId.NULL_VALUE = GradoopId(bytes(ID_SIZE))


# =============================================================================
# Generator
# =============================================================================

class GradoopIdGenerator:
    """
    Explicit identifier generator state.

    A generator owns a discriminator, a counter and a clock. Generators are
    not shared between threads; GradoopId.get() keeps one per thread.

    Example (deterministic sequence for tests):
        gen = GradoopIdGenerator(discriminator=b"\\x00" * 5, counter=0, clock=lambda: 0)
        first, second = gen.next_id(), gen.next_id()
    """

    def __init__(
            self,
            discriminator: Optional[bytes] = None,
            counter: Optional[int] = None,
            clock: Optional[Callable[[], float]] = None
    ):
        if discriminator is None:
            discriminator = os.urandom(DISCRIMINATOR_SIZE)
        if len(discriminator) != DISCRIMINATOR_SIZE:
            raise ValueError(
                f"discriminator must be {DISCRIMINATOR_SIZE} bytes, got {len(discriminator)}"
            )
        if counter is None:
            counter = int.from_bytes(os.urandom(3), "big")

        self.discriminator = bytes(discriminator)
        self._counter = itertools.count(counter)
        self._clock = clock or time.time
        self.pid = os.getpid()

    def next_id(self) -> GradoopId:
        seconds = int(self._clock()) & 0xFFFFFFFF
        count = next(self._counter) & _COUNTER_MASK
        return GradoopId(
            seconds.to_bytes(4, "big") + self.discriminator + count.to_bytes(3, "big")
        )

    def __iter__(self) -> Iterator[GradoopId]:
        while True:
            yield self.next_id()


_local = threading.local()


def _default_generator() -> GradoopIdGenerator:
    # Re-seed after fork so parent and child never share a discriminator.
    generator = getattr(_local, "generator", None)
    if generator is None or generator.pid != os.getpid():
        generator = GradoopIdGenerator()
        _local.generator = generator
    return generator


# =============================================================================
# GradoopIdSet
# =============================================================================

class GradoopIdSet:
    """
    Set of unique GradoopIds.

    Example:
        ids = GradoopIdSet.from_existing(g.id, h.id)
        vertex.graph_ids.contains_any(ids)
    """

    def __init__(self, ids: Optional[Iterable[GradoopId]] = None):
        self._ids = set()
        if ids is not None:
            self.add_all(ids)

    @classmethod
    def from_existing(cls, *ids: GradoopId) -> 'GradoopIdSet':
        """Build a set from zero or more identifiers."""
        return cls(ids)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add(self, gradoop_id: GradoopId) -> None:
        if not isinstance(gradoop_id, GradoopId):
            raise TypeError(f"GradoopId expected, got {type(gradoop_id).__name__}")
        self._ids.add(gradoop_id)

    def add_all(self, ids: Iterable[GradoopId]) -> None:
        for gradoop_id in ids:
            self.add(gradoop_id)

    def remove(self, gradoop_id: GradoopId) -> None:
        self._ids.discard(gradoop_id)

    def clear(self) -> None:
        self._ids.clear()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def contains(self, gradoop_id: GradoopId) -> bool:
        return gradoop_id in self._ids

    def contains_any(self, other: Iterable[GradoopId]) -> bool:
        return any(gradoop_id in self._ids for gradoop_id in other)

    def contains_all(self, other: Iterable[GradoopId]) -> bool:
        return all(gradoop_id in self._ids for gradoop_id in other)

    def union(self, other: Iterable[GradoopId]) -> 'GradoopIdSet':
        result = GradoopIdSet(self._ids)
        result.add_all(other)
        return result

    def is_empty(self) -> bool:
        return not self._ids

    def copy(self) -> 'GradoopIdSet':
        return GradoopIdSet(self._ids)

    # -------------------------------------------------------------------------
    # Binary form
    # -------------------------------------------------------------------------

    def write_to(self, writer: BinaryWriter) -> None:
        writer.write_length(len(self._ids))
        for gradoop_id in sorted(self._ids):
            gradoop_id.write_to(writer)

    @classmethod
    def read_from(cls, reader: BinaryReader) -> 'GradoopIdSet':
        count = reader.read_length()
        return cls(GradoopId.read_from(reader) for _ in range(count))

    def to_bytes(self) -> bytes:
        writer = BinaryWriter()
        self.write_to(writer)
        return writer.getvalue()

    @classmethod
    def from_bytes(cls, data: bytes) -> 'GradoopIdSet':
        reader = BinaryReader(data)
        ids = cls.read_from(reader)
        reader.expect_end()
        return ids

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __contains__(self, gradoop_id: object) -> bool:
        return gradoop_id in self._ids

    def __iter__(self) -> Iterator[GradoopId]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GradoopIdSet):
            return NotImplemented
        return self._ids == other._ids

    __hash__ = None

    def __repr__(self) -> str:
        return f"GradoopIdSet({', '.join(str(i) for i in sorted(self._ids))})"


IdLike = Union[GradoopIdSet, Iterable[GradoopId]]


def to_id_set(ids: Optional[IdLike]) -> GradoopIdSet:
    """Normalize an optional id collection into a fresh GradoopIdSet."""
    if ids is None:
        return GradoopIdSet()
    if isinstance(ids, GradoopId):
        return GradoopIdSet.from_existing(ids)
    return GradoopIdSet(ids)
