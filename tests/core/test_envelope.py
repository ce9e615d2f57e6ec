"""Tests for envelope unwrapping."""

import logging

from kanbantool_api.core.envelope import Envelope, Shape, unwrap_envelope


class TestUnwrapEnvelope:
    """Tests for unwrap_envelope."""

    def test_single_with_key(self):
        assert unwrap_envelope({"task": {"id": 1}}, "task") == {"id": 1}

    def test_single_without_key_passes_through(self):
        assert unwrap_envelope({"id": 1}, "task") == {"id": 1}

    def test_collection_with_keys(self):
        payload = [{"task": {"id": 1}}, {"task": {"id": 2}}]
        assert unwrap_envelope(payload, "task") == [{"id": 1}, {"id": 2}]

    def test_collection_mixed_elements(self):
        payload = [{"task": {"id": 1}}, {"id": 2}]
        assert unwrap_envelope(payload, "task") == [{"id": 1}, {"id": 2}]

    def test_empty_collection(self):
        assert unwrap_envelope([], "board") == []

    def test_other_key_is_not_stripped(self):
        assert unwrap_envelope({"board": {"id": 1}}, "task") == {"board": {"id": 1}}

    def test_present_but_empty_value_is_used(self):
        assert unwrap_envelope({"task": {}}, "task") == {}

    def test_non_mapping_single_passes_through(self):
        assert unwrap_envelope("ok", "task") == "ok"
        assert unwrap_envelope(None, "task") is None

    def test_explicit_single_shape_does_not_map_lists(self):
        payload = [{"task": {"id": 1}}]
        assert unwrap_envelope(payload, "task", Shape.SINGLE) == payload

    def test_collection_shape_with_mapping_passes_through(self, caplog):
        with caplog.at_level(logging.WARNING):
            result = unwrap_envelope({"task": {"id": 1}}, "task", Shape.COLLECTION)

        assert result == {"task": {"id": 1}}
        assert "Expected a list" in caplog.text


class TestEnvelope:
    """Tests for the Envelope descriptor."""

    def test_single_constructor(self):
        envelope = Envelope.single("board")
        assert envelope.key == "board"
        assert envelope.shape is Shape.SINGLE

    def test_collection_constructor(self):
        envelope = Envelope.collection("task")
        assert envelope.shape is Shape.COLLECTION

    def test_unwrap_collection(self):
        envelope = Envelope.collection("board")
        assert envelope.unwrap([{"board": {"id": 7}}]) == [{"id": 7}]

    def test_wrap_forwards_unwrapped_payload(self):
        received = []
        callback = Envelope.single("comment").wrap(received.append)

        callback({"comment": {"id": 3, "content": "Hi"}})

        assert received == [{"id": 3, "content": "Hi"}]

    def test_wrap_returns_callback_result(self):
        callback = Envelope.collection("task").wrap(len)
        assert callback([{"task": {}}, {"task": {}}]) == 2

    def test_envelope_is_hashable(self):
        assert Envelope.single("task") == Envelope("task", Shape.SINGLE)
        assert len({Envelope.single("task"), Envelope("task")}) == 1
