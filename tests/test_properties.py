# tests/test_properties.py
"""
Tests for PropertyValue and Properties.
"""

import math
from datetime import datetime
from decimal import Decimal

import numpy as np
import pytest

from gradoop_core.exceptions import CorruptEncodingError, TypeMismatchError, UnsupportedTypeError
from gradoop_core.model.properties import Properties, Property, PropertyType, PropertyValue


# =============================================================================
# Construction
# =============================================================================

class TestPropertyValueCreate:

    @pytest.mark.parametrize("value, kind", [
        (None, PropertyType.NULL),
        (True, PropertyType.BOOLEAN),
        (23, PropertyType.INTEGER),
        (2 ** 31, PropertyType.LONG),
        (-(2 ** 31) - 1, PropertyType.LONG),
        (2.3, PropertyType.DOUBLE),
        ("23", PropertyType.STRING),
        (Decimal("23.5"), PropertyType.BIG_DECIMAL),
        (np.int32(5), PropertyType.INTEGER),
        (np.int64(5), PropertyType.LONG),
        (np.float32(1.5), PropertyType.FLOAT),
        (np.float64(1.5), PropertyType.DOUBLE),
        (np.bool_(False), PropertyType.BOOLEAN),
    ])
    def test_infers_kind(self, value, kind):
        assert PropertyValue.create(value).kind is kind

    @pytest.mark.parametrize("value", [[1, 2], {"a": 1}, datetime(2024, 1, 1), 2 ** 64, b"raw"])
    def test_unsupported_values(self, value):
        with pytest.raises(UnsupportedTypeError):
            PropertyValue.create(value)

    def test_create_passes_through_property_values(self):
        value = PropertyValue.of_long(1)
        assert PropertyValue.create(value) is value

    def test_bool_is_not_an_int(self):
        assert PropertyValue.create(True).is_boolean()
        assert not PropertyValue.create(True).is_int()

    def test_explicit_constructors_check_range(self):
        with pytest.raises(ValueError):
            PropertyValue.of_int(2 ** 31)
        with pytest.raises(ValueError):
            PropertyValue.of_long(2 ** 63)
        with pytest.raises(ValueError):
            PropertyValue.of_float(1e300)

    def test_float_is_rounded_to_single_precision(self):
        value = PropertyValue.of_float(2.3)
        assert value.get_float() == float(np.float32(2.3))
        assert value.get_float() != 2.3

    def test_supported_samples(self, supported_properties):
        kinds = [value.kind for value in supported_properties.values()]
        assert kinds == [
            PropertyType.BOOLEAN, PropertyType.INTEGER, PropertyType.LONG, PropertyType.FLOAT,
            PropertyType.DOUBLE, PropertyType.STRING, PropertyType.BIG_DECIMAL,
        ]


# =============================================================================
# Accessors
# =============================================================================

class TestPropertyValueAccessors:

    def test_typed_getters(self):
        assert PropertyValue.of_boolean(True).get_boolean() is True
        assert PropertyValue.of_int(23).get_int() == 23
        assert PropertyValue.of_long(23).get_long() == 23
        assert PropertyValue.of_double(2.3).get_double() == 2.3
        assert PropertyValue.of_string("23").get_string() == "23"
        assert PropertyValue.of_big_decimal(Decimal("23")).get_big_decimal() == Decimal("23")

    @pytest.mark.parametrize("value, getter", [
        (PropertyValue.of_int(23), "get_long"),
        (PropertyValue.of_long(23), "get_int"),
        (PropertyValue.of_string("23"), "get_int"),
        (PropertyValue.null(), "get_boolean"),
        (PropertyValue.of_double(2.3), "get_float"),
    ])
    def test_getter_mismatch(self, value, getter):
        with pytest.raises(TypeMismatchError):
            getattr(value, getter)()

    def test_is_number(self):
        assert PropertyValue.of_big_decimal(Decimal(1)).is_number()
        assert PropertyValue.of_float(1.0).is_number()
        assert not PropertyValue.of_string("1").is_number()
        assert not PropertyValue.null().is_number()


# =============================================================================
# Equality & ordering
# =============================================================================

class TestPropertyValueComparison:

    def test_different_kinds_never_equal(self):
        assert PropertyValue.of_int(23) != PropertyValue.of_long(23)
        assert PropertyValue.of_double(1.0) != PropertyValue.of_float(1.0)
        assert PropertyValue.of_string("23") != PropertyValue.of_int(23)

    def test_equal_values_hash_alike(self):
        assert PropertyValue.create(23) == PropertyValue.of_int(23)
        assert hash(PropertyValue.create("x")) == hash(PropertyValue.of_string("x"))

    def test_nan_equals_itself_and_sorts_last(self):
        nan = PropertyValue.of_double(math.nan)
        assert nan == PropertyValue.of_double(math.nan)
        assert PropertyValue.of_double(math.inf) < nan

    @pytest.mark.parametrize("first,second", [
        (PropertyValue.of_double(-0.0), PropertyValue.of_double(0.0)),
        (PropertyValue.of_float(-0.0), PropertyValue.of_float(0.0)),
        (PropertyValue.of_big_decimal(Decimal("1.0")), PropertyValue.of_big_decimal(Decimal("1.00"))),
    ])
    def test_equality_follows_encoding(self, first, second):
        assert first.to_bytes() != second.to_bytes()
        assert first != second
        assert first < second
        assert first.compare_to(second) < 0
        assert first == PropertyValue.from_bytes(first.to_bytes())
        assert hash(first) == hash(PropertyValue.from_bytes(first.to_bytes()))

    def test_kind_rank_orders_first(self):
        ordered = [
            PropertyValue.null(),
            PropertyValue.of_boolean(True),
            PropertyValue.of_int(100),
            PropertyValue.of_long(1),
            PropertyValue.of_float(0.5),
            PropertyValue.of_double(-1.0),
            PropertyValue.of_string("a"),
            PropertyValue.of_big_decimal(Decimal("-5")),
        ]
        assert sorted(reversed(ordered)) == ordered

    def test_natural_order_within_kind(self):
        assert PropertyValue.of_int(-1) < PropertyValue.of_int(2)
        assert PropertyValue.of_boolean(False) < PropertyValue.of_boolean(True)
        assert PropertyValue.of_big_decimal(Decimal("2.5")) > PropertyValue.of_big_decimal(Decimal("2.25"))
        assert PropertyValue.of_int(3).compare_to(PropertyValue.of_int(3)) == 0
        assert PropertyValue.of_int(2).compare_to(PropertyValue.of_int(3)) < 0

    def test_strings_compare_by_utf8_bytes(self):
        # U+FF21 encodes to 0xEF..., U+00E9 to 0xC3...
        assert PropertyValue.of_string("é") < PropertyValue.of_string("Ａ")
        assert PropertyValue.of_string("Z") < PropertyValue.of_string("a")


# =============================================================================
# Binary form
# =============================================================================

class TestPropertyValueBinary:

    def test_round_trip_supported_samples(self, supported_properties):
        for value in supported_properties.values():
            decoded = PropertyValue.from_bytes(value.to_bytes())
            assert decoded == value
            assert decoded.kind is value.kind

    def test_layout(self):
        assert PropertyValue.null().to_bytes() == b"\x00"
        assert PropertyValue.of_boolean(True).to_bytes() == b"\x01\x01"
        assert PropertyValue.of_int(23).to_bytes() == b"\x02\x00\x00\x00\x17"
        assert PropertyValue.of_long(-1).to_bytes() == b"\x03" + b"\xff" * 8
        assert PropertyValue.of_string("ab").to_bytes() == b"\x06\x00\x00\x00\x02ab"
        assert PropertyValue.of_big_decimal(Decimal("1.5")).to_bytes() == b"\x07\x00\x00\x00\x031.5"

    def test_unknown_tag(self):
        with pytest.raises(UnsupportedTypeError):
            PropertyValue.from_bytes(b"\x42")

    @pytest.mark.parametrize("data", [
        b"",
        b"\x02\x00\x00",
        b"\x06\x00\x00\x00\x05ab",
        b"\x01\x02",
        b"\x06\x00\x00\x00\x01\xff",
        b"\x07\x00\x00\x00\x03abc",
        b"\x02\x00\x00\x00\x17\x00",
    ])
    def test_corrupt_payloads(self, data):
        with pytest.raises(CorruptEncodingError):
            PropertyValue.from_bytes(data)


# =============================================================================
# Properties
# =============================================================================

class TestProperties:

    def test_set_overwrites(self):
        props = Properties.create()
        props.set("name", "Alice")
        props.set("name", "Bob")
        assert len(props) == 1
        assert props.get("name").get_string() == "Bob"

    def test_missing_key(self):
        props = Properties()
        assert props.get("missing") is None
        assert props.remove("missing") is None
        assert "missing" not in props

    def test_invalid_key(self):
        with pytest.raises(ValueError):
            Properties().set("", 1)

    def test_iteration_yields_properties_in_insertion_order(self):
        props = Properties.create_from_map({"b": 1, "a": 2})
        assert [p.key for p in props] == ["b", "a"]
        assert list(props)[0] == Property("b", PropertyValue.of_int(1))

    def test_equality_ignores_order(self):
        first = Properties.create_from_map({"a": 1, "b": "x"})
        second = Properties.create_from_map({"b": "x", "a": 1})
        assert first == second
        second.set("a", 2)
        assert first != second

    def test_typed_dict_keeps_kinds(self, supported_property_map):
        typed = supported_property_map.to_typed_dict()
        assert typed["key2"] == {'type': "INTEGER", 'value': 23}
        assert typed["key3"] == {'type': "LONG", 'value': 23}
        assert Properties.create_from_typed_map(typed) == supported_property_map
        assert Properties.create_from_typed_map(None).is_empty()

    def test_property_value_from_dict(self):
        assert PropertyValue.from_dict({'type': "NULL"}).is_null()
        assert PropertyValue.from_dict({'type': "FLOAT", 'value': 2.5}) == PropertyValue.of_float(2.5)
        with pytest.raises(UnsupportedTypeError):
            PropertyValue.from_dict({'type': "DATE", 'value': "2024-01-01"})
        with pytest.raises(ValueError):
            PropertyValue.from_dict({'type': "INTEGER", 'value': 2 ** 40})

    def test_to_dict_and_keys(self, supported_property_map):
        assert supported_property_map.keys() == {f"key{i}" for i in range(1, 8)}
        raw = supported_property_map.to_dict()
        assert raw["key1"] is True
        assert raw["key7"] == Decimal("23")

    def test_copy_is_independent(self):
        props = Properties.create_from_map({"a": 1})
        clone = props.copy()
        clone.set("b", 2)
        assert "b" not in props

    def test_binary_round_trip(self, supported_property_map):
        data = supported_property_map.to_bytes()
        assert Properties.from_bytes(data) == supported_property_map

    def test_binary_is_key_sorted(self):
        first = Properties.create_from_map({"b": 1, "a": 2})
        second = Properties.create_from_map({"a": 2, "b": 1})
        assert first.to_bytes() == second.to_bytes()

    def test_duplicate_key_is_corrupt(self):
        entry = b"\x00\x00\x00\x01a" + PropertyValue.of_int(1).to_bytes()
        with pytest.raises(CorruptEncodingError):
            Properties.from_bytes(b"\x00\x00\x00\x02" + entry + entry)
