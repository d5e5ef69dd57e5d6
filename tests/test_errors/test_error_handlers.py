from __future__ import annotations

import json
import pytest
from unittest.mock import Mock, patch
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from pagination_api.core.errors import (
    ErrorBody,
    ErrorEnvelope,
    _build_meta,
    _serialize_validation_errors,
    register_exception_handlers,
)


def _mock_request(method: str = "GET", path: str = "/test") -> Mock:
    mock_request = Mock()
    mock_request.state.correlation_id = "test-123"
    mock_request.url.path = path
    mock_request.method = method
    return mock_request


class TestErrorModels:
    """Test error model classes."""

    def test_error_body_creation(self):
        error_body = ErrorBody(
            type="test_error",
            message="Test message",
            details={"key": "value"}
        )
        assert error_body.type == "test_error"
        assert error_body.message == "Test message"
        assert error_body.details == {"key": "value"}

    def test_error_body_without_details(self):
        error_body = ErrorBody(type="test_error", message="Test message")
        assert error_body.details is None

    def test_error_envelope_creation(self):
        error_body = ErrorBody(type="test_error", message="Test message")
        meta = {"request_id": "123", "path": "/x", "method": "GET"}

        envelope = ErrorEnvelope(error=error_body, meta=meta)
        assert envelope.error == error_body
        assert envelope.meta == meta


class TestErrorHelpers:
    """Test error helper functions."""

    def test_build_meta_with_correlation_id(self):
        meta = _build_meta(_mock_request("GET", "/test/path"))

        assert meta == {
            "request_id": "test-123",
            "path": "/test/path",
            "method": "GET",
        }

    def test_build_meta_without_correlation_id(self):
        mock_request = _mock_request("POST", "/test/path")
        del mock_request.state.correlation_id

        meta = _build_meta(mock_request)

        assert meta["request_id"] == "-"
        assert meta["method"] == "POST"

    def test_serialize_validation_errors_empty(self):
        assert _serialize_validation_errors([]) == []

    def test_serialize_validation_errors_simple(self):
        errors = [{"loc": ["body", "defaults", "page"], "msg": "error1", "type": "greater_than"}]
        assert _serialize_validation_errors(errors) == errors

    def test_serialize_validation_errors_with_context(self):
        """Exceptions carried in ctx are stringified."""
        class CustomError:
            def __str__(self):
                return "Custom error message"

        error = {
            "loc": ["field1"],
            "msg": "error1",
            "type": "type1",
            "ctx": {"error": CustomError(), "other": "value"}
        }

        result = _serialize_validation_errors([error])

        assert result[0]["ctx"]["other"] == "value"
        assert result[0]["ctx"]["error"] == "Custom error message"
        # input is left untouched
        assert isinstance(error["ctx"]["error"], CustomError)

    def test_serialize_validation_errors_without_error_key(self):
        error = {
            "loc": ["field1"],
            "msg": "error1",
            "type": "type1",
            "ctx": {"gt": 0}
        }

        result = _serialize_validation_errors([error])

        assert result[0]["ctx"] == {"gt": 0}


class TestExceptionHandlers:
    """Test exception handler execution."""

    def setup_method(self):
        self.app = FastAPI()
        register_exception_handlers(self.app)

    @patch('pagination_api.core.errors.get_logger')
    @pytest.mark.asyncio
    async def test_http_exception_handler_with_string_detail(self, mock_get_logger):
        mock_logger = Mock()
        mock_get_logger.return_value = mock_logger

        exc = StarletteHTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not Found")

        handler = self.app.exception_handlers[StarletteHTTPException]
        response = await handler(_mock_request(), exc)

        assert response.status_code == HTTP_404_NOT_FOUND
        body = json.loads(response.body)
        assert body["error"] == {"type": "http_error", "message": "Not Found", "details": None}
        assert body["meta"]["request_id"] == "test-123"
        mock_logger.warning.assert_called_once_with("HTTP error", extra={"status_code": HTTP_404_NOT_FOUND})

    @patch('pagination_api.core.errors.get_logger')
    @pytest.mark.asyncio
    async def test_http_exception_handler_with_dict_detail(self, mock_get_logger):
        mock_get_logger.return_value = Mock()

        exc = StarletteHTTPException(status_code=400, detail={"page": "bad"})

        handler = self.app.exception_handlers[StarletteHTTPException]
        response = await handler(_mock_request(), exc)

        body = json.loads(response.body)
        assert response.status_code == 400
        assert body["error"]["message"] == "Request failed"
        assert body["error"]["details"] == {"page": "bad"}

    @patch('pagination_api.core.errors.get_logger')
    @pytest.mark.asyncio
    async def test_validation_exception_handler(self, mock_get_logger):
        mock_logger = Mock()
        mock_get_logger.return_value = mock_logger

        errors = [
            {"loc": ["field1"], "msg": "error1", "type": "value_error"},
            {"loc": ["field2"], "msg": "error2", "type": "type_error"}
        ]
        exc = RequestValidationError(errors)

        handler = self.app.exception_handlers[RequestValidationError]
        response = await handler(_mock_request("POST"), exc)

        assert response.status_code == HTTP_422_UNPROCESSABLE_CONTENT
        body = json.loads(response.body)
        assert body["error"]["type"] == "validation_error"
        assert len(body["error"]["details"]["errors"]) == 2
        mock_logger.info.assert_called_once_with("Validation error")

    @patch('pagination_api.core.errors.get_logger')
    @pytest.mark.asyncio
    async def test_unhandled_exception_handler(self, mock_get_logger):
        mock_logger = Mock()
        mock_get_logger.return_value = mock_logger

        exc = Exception("Unexpected error")

        handler = self.app.exception_handlers[Exception]
        response = await handler(_mock_request(), exc)

        assert response.status_code == HTTP_500_INTERNAL_SERVER_ERROR
        body = json.loads(response.body)
        assert body["error"] == {
            "type": "server_error",
            "message": "Internal Server Error",
            "details": None,
        }
        mock_logger.exception.assert_called_once_with("Unhandled server error", exc_info=exc)


class TestExceptionHandlerRegistration:
    """Test exception handler registration."""

    def test_register_exception_handlers(self):
        app = FastAPI()
        result = register_exception_handlers(app)

        assert result is None
        assert StarletteHTTPException in app.exception_handlers
        assert RequestValidationError in app.exception_handlers
        assert Exception in app.exception_handlers
