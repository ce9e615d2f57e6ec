"""Property-based tests for envelope unwrapping and error detection."""

import asyncio
import contextlib

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from kanbantool_api.core.call import PendingCall
from kanbantool_api.core.envelope import Envelope, Shape, unwrap_envelope
from kanbantool_api.core.errors import ApiError, ApiErrorRecord

printable = st.characters(min_codepoint=32, max_codepoint=0x24F)

keys = st.sampled_from(["board", "task", "comment", "subtask"])
scalars = st.one_of(st.none(), st.booleans(), st.integers(), st.text(printable, max_size=10))
resources = st.dictionaries(st.sampled_from(["id", "name", "position", "code"]), scalars, max_size=4)
json_values = st.recursive(
    scalars,
    lambda children: st.lists(children, max_size=3)
    | st.dictionaries(st.text(printable, max_size=8), children, max_size=3),
    max_leaves=10,
)


class TestActiveProfile:
    """The loaded profile must survive a cold run without a .hypothesis cache."""

    def test_slow_generation_is_tolerated(self):
        assert HealthCheck.too_slow in settings.default.suppress_health_check

    def test_no_deadline(self):
        assert settings.default.deadline is None


class TestUnwrapProperties:
    """Properties of unwrap_envelope."""

    @given(key=keys, resource=resources)
    def test_wrapped_single_unwraps_to_resource(self, key, resource):
        assert unwrap_envelope({key: resource}, key) == resource

    @given(key=keys, items=st.lists(resources, max_size=5))
    def test_wrapped_collection_unwraps_elementwise(self, key, items):
        wrapped = [{key: item} for item in items]
        assert unwrap_envelope(wrapped, key) == items

    @given(key=keys, items=st.lists(resources, max_size=5))
    def test_unwrapping_preserves_length(self, key, items):
        assert len(unwrap_envelope(items, key, Shape.COLLECTION)) == len(items)

    @given(key=keys, resource=resources)
    def test_bare_resource_is_unchanged(self, key, resource):
        # resources never contain envelope keys
        assert unwrap_envelope(resource, key) == resource

    @given(key=keys, payload=json_values)
    def test_wrap_matches_unwrap(self, key, payload):
        received = []
        Envelope(key).wrap(received.append)(payload)
        assert received == [unwrap_envelope(payload, key, Shape.SINGLE)]


class TestErrorDetectionProperties:
    """Properties of ApiErrorRecord.from_response."""

    @given(
        code=st.integers().filter(lambda c: c not in (0, 200)),
        message=st.text(printable, min_size=1),
    )
    def test_non_200_code_with_message_is_error(self, code, message):
        record = ApiErrorRecord.from_response(
            {"code": code, "message": message}, "GET", "boards", {}
        )
        assert record is not None
        assert (record.code, record.message) == (code, message)

    @given(payload=st.lists(json_values, max_size=4))
    def test_lists_are_never_errors(self, payload):
        assert ApiErrorRecord.from_response(payload, "GET", "boards", {}) is None


class TestExactlyOnceProperties:
    """Whatever arrives, and however often, exactly one callback fires once."""

    @settings(deadline=None, max_examples=50)
    @given(responses=st.lists(json_values, min_size=1, max_size=4))
    def test_exactly_one_callback(self, responses):
        successes, errors = [], []

        async def scenario():
            pending = PendingCall(
                "GET", "boards", {}, errors.append, on_success=successes.append, timeout=5.0
            )
            for response in responses:
                pending.deliver(response)
            await _settled(pending)

        asyncio.run(scenario())

        assert len(successes) + len(errors) == 1


async def _settled(pending: PendingCall) -> None:
    with contextlib.suppress(ApiError):
        await pending
