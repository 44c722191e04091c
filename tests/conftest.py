# tests/conftest.py
"""
Pytest configuration and fixtures.

Shared property samples, configs and EPGM comparison helpers.
"""

from decimal import Decimal
from pathlib import Path
from typing import Iterable

import pytest

from gradoop_core.gradoop_config import GradoopConfig
from gradoop_core.model.base import Element, GraphElement
from gradoop_core.model.identifiers import GradoopIdGenerator
from gradoop_core.model.properties import Properties, PropertyValue

DATA_DIR = Path(__file__).parent / "data"

# One entry per supported kind; key order follows the kind rank.
SUPPORTED_PROPERTIES = {
    "key1": PropertyValue.of_boolean(True),
    "key2": PropertyValue.of_int(23),
    "key3": PropertyValue.of_long(23),
    "key4": PropertyValue.of_float(2.3),
    "key5": PropertyValue.of_double(2.3),
    "key6": PropertyValue.of_string("23"),
    "key7": PropertyValue.of_big_decimal(Decimal("23")),
}


@pytest.fixture
def supported_properties() -> dict:
    return dict(SUPPORTED_PROPERTIES)


@pytest.fixture
def supported_property_map() -> Properties:
    return Properties.create_from_map(SUPPORTED_PROPERTIES)


@pytest.fixture
def config() -> GradoopConfig:
    return GradoopConfig.get_default_config()


@pytest.fixture
def id_generator() -> GradoopIdGenerator:
    """Deterministic generator: fixed clock, zero discriminator, counter from 0."""
    return GradoopIdGenerator(discriminator=bytes(5), counter=0, clock=lambda: 1_700_000_000)


@pytest.fixture
def example_gdl_path() -> Path:
    return DATA_DIR / "example.gdl"


# =============================================================================
# EPGM comparison helpers
# =============================================================================

def _sorted_by_id(elements: Iterable[Element]) -> list:
    return sorted(elements, key=lambda element: element.id)


def _assert_epgm_collections_equal(expected: Iterable[Element], actual: Iterable[Element]) -> None:
    """Same ids, labels, properties and (for graph elements) graph ids."""
    expected, actual = _sorted_by_id(expected), _sorted_by_id(actual)
    assert len(expected) == len(actual), "wrong element count"
    for left, right in zip(expected, actual):
        assert left.id == right.id
        assert left.label == right.label
        assert sorted(left.property_keys) == sorted(right.property_keys)
        for key in left.property_keys:
            assert left.get_property_value(key) == right.get_property_value(key), key
        if isinstance(left, GraphElement):
            assert left.graph_ids == right.graph_ids


def _assert_epgm_elements_equal_ignoring_ids(expected: Iterable[Element], actual: Iterable[Element]) -> None:
    """Same multiset of (label, properties), ids ignored."""
    def signature(element):
        return element.label, sorted((p.key, p.value) for p in element.properties)

    assert sorted(map(signature, expected)) == sorted(map(signature, actual))


@pytest.fixture
def assert_epgm_collections_equal():
    return _assert_epgm_collections_equal


@pytest.fixture
def assert_epgm_elements_equal_ignoring_ids():
    return _assert_epgm_elements_equal_ignoring_ids
