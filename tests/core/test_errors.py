"""Tests for error records and the exception hierarchy."""

import pytest

from kanbantool_api.core.errors import (
    TIMEOUT_MESSAGE,
    ApiError,
    ApiErrorRecord,
    ApplicationError,
    ConfigError,
    ErrorKind,
    KanbanToolError,
    MissingAccountError,
    TransportTimeoutError,
)

REQUEST = {"method": "GET", "url": "boards/5/tasks", "data": {"limit": 5}}


class TestErrorDetection:
    """Tests for ApiErrorRecord.from_response."""

    def test_application_error_detected(self):
        record = ApiErrorRecord.from_response({"code": 422, "message": "Invalid"}, **REQUEST)

        assert record is not None
        assert record.code == 422
        assert record.message == "Invalid"
        assert record.method == "GET"
        assert record.url == "boards/5/tasks"
        assert record.data == {"limit": 5}
        assert record.kind is ErrorKind.APPLICATION

    def test_code_200_is_not_an_error(self):
        assert ApiErrorRecord.from_response({"code": 200, "message": "OK"}, **REQUEST) is None

    def test_code_without_message_is_not_an_error(self):
        assert ApiErrorRecord.from_response({"code": 404}, **REQUEST) is None
        assert ApiErrorRecord.from_response({"code": 404, "message": ""}, **REQUEST) is None

    def test_message_without_code_is_not_an_error(self):
        assert ApiErrorRecord.from_response({"message": "hello"}, **REQUEST) is None

    def test_zero_code_is_not_an_error(self):
        assert ApiErrorRecord.from_response({"code": 0, "message": "x"}, **REQUEST) is None

    @pytest.mark.parametrize("code", ["422", 4.22, True, None])
    def test_non_integer_code_is_not_an_error(self, code):
        assert ApiErrorRecord.from_response({"code": code, "message": "x"}, **REQUEST) is None

    def test_integral_float_code_is_an_error(self):
        record = ApiErrorRecord.from_response({"code": 422.0, "message": "Invalid"}, **REQUEST)

        assert record is not None
        assert record.code == 422
        assert isinstance(record.code, int)

    @pytest.mark.parametrize("response", [[], [{"code": 500, "message": "x"}], "error", None])
    def test_non_mapping_is_not_an_error(self, response):
        assert ApiErrorRecord.from_response(response, **REQUEST) is None

    def test_resource_with_code_field_and_200(self):
        task = {"id": 1, "code": 200, "message": "fine", "name": "Task"}
        assert ApiErrorRecord.from_response(task, **REQUEST) is None


class TestTimeoutRecord:
    """Tests for the synthetic timeout record."""

    def test_transport_timeout_record(self):
        record = ApiErrorRecord.transport_timeout(**REQUEST)

        assert record.code == 0
        assert record.message == TIMEOUT_MESSAGE
        assert record.kind is ErrorKind.TRANSPORT_TIMEOUT
        assert record.data == {"limit": 5}


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_timeout_record_maps_to_timeout_error(self):
        error = ApiErrorRecord.transport_timeout(**REQUEST).to_exception()

        assert isinstance(error, TransportTimeoutError)
        assert isinstance(error, ApiError)
        assert isinstance(error, KanbanToolError)
        assert error.code == 0

    def test_application_record_maps_to_application_error(self):
        record = ApiErrorRecord(code=403, message="Forbidden", **REQUEST)
        error = record.to_exception()

        assert isinstance(error, ApplicationError)
        assert error.record is record
        assert "403" in str(error)
        assert "Forbidden" in str(error)
        assert "boards/5/tasks" in str(error)

    def test_kanbantool_error_formats_details(self):
        error = KanbanToolError("Something failed", "more context")
        assert str(error) == "Something failed\n  Details: more context"

    def test_kanbantool_error_without_details(self):
        assert str(KanbanToolError("Something failed")) == "Something failed"

    def test_missing_account_error(self):
        error = MissingAccountError(["subdomain", "api_token"])

        assert isinstance(error, ConfigError)
        assert error.missing == ["subdomain", "api_token"]
        assert "subdomain, api_token" in error.message
        assert "KANBANTOOL_API_TOKEN" in error.details
