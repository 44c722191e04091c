"""
Gradoop Core Model - Temporal Elements

Bitemporal extension for graph heads, vertices and edges:

- valid time       [valid_from, valid_to)  when the fact holds in the modeled world
- transaction time [tx_from, tx_to)        when the fact was recorded

Bounds are signed 64-bit epoch milliseconds. The minimum value stands for
an unbounded start, the maximum value for an unbounded end.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Tuple, Union

from .base import Element, ValidationError
from .edges import Edge
from .graph_head import GraphHead
from .vertices import Vertex

# =============================================================================
# Constants
# =============================================================================

DEFAULT_TIME_FROM = -(2 ** 63)
DEFAULT_TIME_TO = 2 ** 63 - 1

TimeValue = Union[int, datetime]
TimeInterval = Tuple[TimeValue, TimeValue]


def current_time_millis() -> int:
    return time.time_ns() // 1_000_000


def to_millis(value: TimeValue) -> int:
    """
    Convert a time bound to epoch milliseconds.

    Naive datetimes are interpreted in local time, like datetime.timestamp().
    """
    if isinstance(value, datetime):
        return int(value.timestamp() * 1000)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Time bound must be int milliseconds or datetime, got {value!r}")
    if not DEFAULT_TIME_FROM <= value <= DEFAULT_TIME_TO:
        raise ValidationError(f"Time bound {value} is outside the 64-bit range")
    return value


def validate_time_interval(time_from: int, time_to: int, name: str = "interval") -> None:
    """
    Validate a time interval.

    Raises:
        ValidationError: If time_from > time_to
    """
    if time_from > time_to:
        raise ValidationError(
            f"{name} start ({time_from}) must not be after its end ({time_to})"
        )


# =============================================================================
# Temporal Mixin
# =============================================================================

@dataclass(eq=False)
class TemporalElement:
    """
    Mixin adding valid and transaction time to an element.

    Intervals default to valid forever and recorded now. Every setter keeps
    from <= to; use set_valid_time() / set_transaction_time() to move both
    bounds at once.

    List the mixin first in the bases, e.g. TemporalVertex(TemporalElement, Vertex),
    so its fields come after the element fields and positional arguments
    line up with the plain element kinds.

    Example:
        vertex.set_valid_time(datetime(2024, 1, 1), datetime(2025, 1, 1))
        vertex.is_valid_at(datetime(2024, 6, 1))    # True
    """

    _valid_from: int = field(default=DEFAULT_TIME_FROM, repr=False)
    _valid_to: int = field(default=DEFAULT_TIME_TO, repr=False)
    _tx_from: int = field(default_factory=current_time_millis, repr=False)
    _tx_to: int = field(default=DEFAULT_TIME_TO, repr=False)

    def _check_intervals(self) -> None:
        self._valid_from = to_millis(self._valid_from)
        self._valid_to = to_millis(self._valid_to)
        self._tx_from = to_millis(self._tx_from)
        self._tx_to = to_millis(self._tx_to)
        validate_time_interval(self._valid_from, self._valid_to, "valid time")
        validate_time_interval(self._tx_from, self._tx_to, "transaction time")

    # -------------------------------------------------------------------------
    # Valid time
    # -------------------------------------------------------------------------

    @property
    def valid_from(self) -> int:
        return self._valid_from

    @valid_from.setter
    def valid_from(self, value: TimeValue) -> None:
        self.set_valid_time(value, self._valid_to)

    @property
    def valid_to(self) -> int:
        return self._valid_to

    @valid_to.setter
    def valid_to(self, value: TimeValue) -> None:
        self.set_valid_time(self._valid_from, value)

    @property
    def valid_time(self) -> Tuple[int, int]:
        return self._valid_from, self._valid_to

    def set_valid_time(self, time_from: TimeValue, time_to: TimeValue) -> None:
        time_from, time_to = to_millis(time_from), to_millis(time_to)
        validate_time_interval(time_from, time_to, "valid time")
        self._valid_from, self._valid_to = time_from, time_to

    # -------------------------------------------------------------------------
    # Transaction time
    # -------------------------------------------------------------------------

    @property
    def tx_from(self) -> int:
        return self._tx_from

    @tx_from.setter
    def tx_from(self, value: TimeValue) -> None:
        self.set_transaction_time(value, self._tx_to)

    @property
    def tx_to(self) -> int:
        return self._tx_to

    @tx_to.setter
    def tx_to(self, value: TimeValue) -> None:
        self.set_transaction_time(self._tx_from, value)

    @property
    def transaction_time(self) -> Tuple[int, int]:
        return self._tx_from, self._tx_to

    def set_transaction_time(self, time_from: TimeValue, time_to: TimeValue) -> None:
        time_from, time_to = to_millis(time_from), to_millis(time_to)
        validate_time_interval(time_from, time_to, "transaction time")
        self._tx_from, self._tx_to = time_from, time_to

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_valid_at(self, timestamp: TimeValue) -> bool:
        """Check if the element is valid at the given instant (half-open)."""
        timestamp = to_millis(timestamp)
        return self._valid_from <= timestamp < self._valid_to

    def was_recorded_at(self, timestamp: TimeValue) -> bool:
        """Check if the element was part of the recorded state at the given instant."""
        timestamp = to_millis(timestamp)
        return self._tx_from <= timestamp < self._tx_to

    def valid_overlaps(self, time_from: TimeValue, time_to: TimeValue) -> bool:
        """Check if valid time overlaps [time_from, time_to)."""
        time_from, time_to = to_millis(time_from), to_millis(time_to)
        return self._valid_from < time_to and time_from < self._valid_to

    def temporal_dict(self) -> Dict[str, int]:
        return {
            'valid_from': self._valid_from,
            'valid_to': self._valid_to,
            'tx_from': self._tx_from,
            'tx_to': self._tx_to,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Build the element kind via the next class in the MRO, then restore both intervals."""
        element = super().from_dict(data)
        element.set_valid_time(data.get('valid_from', element.valid_from),
                               data.get('valid_to', element.valid_to))
        element.set_transaction_time(data.get('tx_from', element.tx_from),
                                     data.get('tx_to', element.tx_to))
        return element


# =============================================================================
# Temporal element kinds
# =============================================================================

@dataclass(eq=False, repr=False)
class TemporalGraphHead(TemporalElement, GraphHead):
    """Graph head with valid and transaction time."""

    def __post_init__(self):
        super().__post_init__()
        self._check_intervals()

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), **self.temporal_dict()}

    def __repr__(self) -> str:
        return f"TemporalGraphHead(id={self.id}, label={self.label}, valid={self.valid_time})"


@dataclass(eq=False, repr=False)
class TemporalVertex(TemporalElement, Vertex):
    """Vertex with valid and transaction time."""

    def __post_init__(self):
        super().__post_init__()
        self._check_intervals()

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), **self.temporal_dict()}

    def __repr__(self) -> str:
        return f"TemporalVertex(id={self.id}, label={self.label}, valid={self.valid_time})"


@dataclass(eq=False, repr=False)
class TemporalEdge(TemporalElement, Edge):
    """Edge with valid and transaction time."""

    def __post_init__(self):
        super().__post_init__()
        self._check_intervals()

    def to_dict(self) -> Dict[str, Any]:
        return {**super().to_dict(), **self.temporal_dict()}

    def __repr__(self) -> str:
        return (f"TemporalEdge(id={self.id}, {self.source_id}-[{self.label}]->"
                f"{self.target_id}, valid={self.valid_time})")


def is_temporal(element: Element) -> bool:
    """Check if element carries valid and transaction time"""
    return isinstance(element, TemporalElement)
