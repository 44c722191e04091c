# tests/test_temporal.py
"""
Test bi-temporal element behavior.

Valid time defaults to "forever", transaction time to "recorded now".
"""

from datetime import datetime, timezone

import pytest

from gradoop_core.model import (
    DEFAULT_TIME_FROM, DEFAULT_TIME_TO, GradoopId, TemporalEdge, TemporalGraphHead,
    TemporalVertex, ValidationError, Vertex, current_time_millis, is_temporal, to_millis,
)


def _check_default_temporal_element(element):
    assert element.valid_from == DEFAULT_TIME_FROM
    assert element.valid_to == DEFAULT_TIME_TO


def _check_default_tx_times(element):
    assert element.tx_from <= current_time_millis()
    assert element.tx_to == DEFAULT_TIME_TO


class TestTemporalDefaults:

    @pytest.mark.parametrize("element", [
        TemporalGraphHead(id=GradoopId.get()),
        TemporalVertex(id=GradoopId.get()),
        TemporalEdge(id=GradoopId.get(), source_id=GradoopId.get(), target_id=GradoopId.get()),
    ])
    def test_defaults(self, element):
        _check_default_temporal_element(element)
        _check_default_tx_times(element)
        assert is_temporal(element)

    def test_plain_elements_are_not_temporal(self):
        assert not is_temporal(Vertex(id=GradoopId.get()))

    def test_positional_arguments_match_plain_elements(self):
        gid, source, target = GradoopId.get(), GradoopId.get(), GradoopId.get()
        vertex = TemporalVertex(gid, "Person")
        assert (vertex.id, vertex.label) == (gid, "Person")
        _check_default_temporal_element(vertex)

        edge = TemporalEdge(GradoopId.get(), "knows", None, None, source, target)
        assert (edge.source_id, edge.target_id) == (source, target)
        assert TemporalGraphHead(gid, "Snapshot").label == "Snapshot"

    def test_temporal_vertex_is_a_vertex(self):
        vertex = TemporalVertex(id=GradoopId.get(), label="Person")
        assert isinstance(vertex, Vertex)
        assert vertex == Vertex(id=vertex.id)


class TestTemporalInvariants:

    def test_constructor_rejects_inverted_interval(self):
        with pytest.raises(ValidationError):
            TemporalVertex(id=GradoopId.get(), _valid_from=10, _valid_to=5)

    def test_set_valid_time(self):
        vertex = TemporalVertex(id=GradoopId.get())
        vertex.set_valid_time(5, 10)
        assert vertex.valid_time == (5, 10)
        with pytest.raises(ValidationError):
            vertex.set_valid_time(10, 5)
        assert vertex.valid_time == (5, 10)

    def test_single_bound_setters(self):
        vertex = TemporalVertex(id=GradoopId.get())
        vertex.valid_to = 100
        vertex.valid_from = 50
        assert vertex.valid_time == (50, 100)
        with pytest.raises(ValidationError):
            vertex.valid_from = 200
        with pytest.raises(ValidationError):
            vertex.tx_to = vertex.tx_from - 1

    def test_empty_interval_allowed(self):
        vertex = TemporalVertex(id=GradoopId.get())
        vertex.set_transaction_time(7, 7)
        assert vertex.transaction_time == (7, 7)
        assert not vertex.was_recorded_at(7)

    def test_out_of_range_bound(self):
        vertex = TemporalVertex(id=GradoopId.get())
        with pytest.raises(ValidationError):
            vertex.set_valid_time(0, 2 ** 63)
        with pytest.raises(ValidationError):
            vertex.set_valid_time("yesterday", 5)


class TestTemporalQueries:

    def test_datetime_bounds(self):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        end = datetime(2025, 1, 1, tzinfo=timezone.utc)
        vertex = TemporalVertex(id=GradoopId.get())
        vertex.set_valid_time(start, end)
        assert vertex.valid_from == 1704067200000
        assert vertex.is_valid_at(datetime(2024, 6, 1, tzinfo=timezone.utc))
        assert not vertex.is_valid_at(end)
        assert vertex.is_valid_at(start)

    def test_valid_overlaps(self):
        edge = TemporalEdge(id=GradoopId.get(), source_id=GradoopId.get(), target_id=GradoopId.get())
        edge.set_valid_time(10, 20)
        assert edge.valid_overlaps(15, 30)
        assert edge.valid_overlaps(0, 11)
        assert not edge.valid_overlaps(20, 30)
        assert not edge.valid_overlaps(0, 10)

    def test_to_millis(self):
        assert to_millis(42) == 42
        assert to_millis(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == 1000
        with pytest.raises(ValidationError):
            to_millis(True)

    @pytest.mark.parametrize("element", [
        TemporalGraphHead(id=GradoopId.get(), label="Snapshot"),
        TemporalVertex(id=GradoopId.get(), label="Person"),
        TemporalEdge(id=GradoopId.get(), label="knows",
                     source_id=GradoopId.get(), target_id=GradoopId.get()),
    ])
    def test_dict_round_trip_keeps_times(self, element):
        element.set_valid_time(5, 10)
        element.set_transaction_time(20, 30)
        restored = type(element).from_dict(element.to_dict())
        assert type(restored) is type(element)
        assert restored == element and restored.epgm_equals(element)
        assert restored.valid_time == (5, 10)
        assert restored.transaction_time == (20, 30)

    def test_from_dict_without_times_uses_defaults(self):
        vertex = Vertex(id=GradoopId.get(), label="Person")
        restored = TemporalVertex.from_dict(vertex.to_dict())
        _check_default_temporal_element(restored)
        _check_default_tx_times(restored)

    def test_from_dict_rejects_inverted_interval(self):
        data = TemporalVertex(id=GradoopId.get()).to_dict()
        data['valid_from'], data['valid_to'] = 10, 5
        with pytest.raises(ValidationError):
            TemporalVertex.from_dict(data)

    def test_to_dict_includes_times(self):
        head = TemporalGraphHead(id=GradoopId.get(), label="Snapshot")
        head.set_valid_time(1, 2)
        data = head.to_dict()
        assert data['valid_from'] == 1 and data['valid_to'] == 2
        assert data['tx_to'] == DEFAULT_TIME_TO
        assert data['label'] == "Snapshot"
