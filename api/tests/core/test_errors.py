"""Unit tests for core.errors module.

Tests cover:
- ApiError subclasses carry the right status codes and envelope
- from_request_validation maps FastAPI validation failures
- handlers render JSON envelopes
"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.errors import (
    BadRequestError,
    ConflictError,
    DatabaseError,
    ForbiddenError,
    InternalServerError,
    NotFoundError,
    SerializationError,
    UnauthorizedError,
    ValidationError,
    ValidationErrors,
    api_error_handler,
    from_request_validation,
    http_exception_handler,
    unhandled_exception_handler,
)


def _request(path: str = "/api/projects") -> Request:
    request = MagicMock(spec=Request)
    request.url.path = path
    request.method = "GET"
    return request


@pytest.mark.unit
class TestErrorKinds:
    """Tests for status codes and default messages."""

    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (ValidationError("title: too long"), 400),
            (BadRequestError("bad"), 400),
            (SerializationError(), 400),
            (UnauthorizedError(), 401),
            (ForbiddenError(), 403),
            (NotFoundError("missing"), 404),
            (ConflictError("dup"), 409),
            (InternalServerError(), 500),
            (DatabaseError("disk I/O error"), 500),
        ],
    )
    def test_status_codes(self, error, status):
        assert error.status_code == status
        assert error.to_dict()["error"]["code"] == status

    def test_default_messages(self):
        assert UnauthorizedError().message == "Unauthorized access"
        assert ForbiddenError().message == "Forbidden access"
        assert InternalServerError().message == "An internal server error occurred"
        assert SerializationError().message == "Invalid data format"

    def test_database_error_keeps_driver_message_in_details(self):
        body = DatabaseError("UNIQUE constraint failed").to_dict()
        assert body == {
            "success": False,
            "error": {
                "code": 500,
                "message": "A database error occurred",
                "details": "UNIQUE constraint failed",
            },
        }

    def test_details_omitted_when_absent(self):
        assert "details" not in NotFoundError("Project with ID 9 not found").to_dict()[
            "error"
        ]

    def test_validation_errors_lists_every_field(self):
        error = ValidationErrors([("title", "too long"), ("level", "too high")])

        body = error.to_dict()

        assert error.message == "title: too long, level: too high"
        assert body["error"]["validation_errors"] == [
            {"field": "title", "message": "too long"},
            {"field": "level", "message": "too high"},
        ]


@pytest.mark.unit
class TestFromRequestValidation:
    """Tests for mapping RequestValidationError onto API errors."""

    def test_single_error_becomes_validation_error(self):
        exc = RequestValidationError(
            [
                {
                    "type": "less_than_equal",
                    "loc": ("body", "level"),
                    "msg": "Input should be less than or equal to 5",
                }
            ]
        )

        error = from_request_validation(exc)

        assert isinstance(error, ValidationError)
        assert error.message == "level: Input should be less than or equal to 5"

    def test_value_error_prefix_is_dropped(self):
        exc = RequestValidationError(
            [
                {
                    "type": "value_error",
                    "loc": ("body", "github_url"),
                    "msg": "Value error, must be a valid http or https URL",
                }
            ]
        )

        error = from_request_validation(exc)

        assert error.message == "github_url: must be a valid http or https URL"

    def test_several_errors_become_validation_errors(self):
        exc = RequestValidationError(
            [
                {"type": "missing", "loc": ("body", "title"), "msg": "Required"},
                {"type": "missing", "loc": ("body", "category"), "msg": "Required"},
            ]
        )

        error = from_request_validation(exc)

        assert isinstance(error, ValidationErrors)
        assert [field for field, _ in error.errors] == ["title", "category"]

    def test_malformed_json_becomes_serialization_error(self):
        exc = RequestValidationError(
            [
                {
                    "type": "json_invalid",
                    "loc": ("body", 12),
                    "msg": "JSON decode error",
                    "ctx": {"error": "Expecting value"},
                }
            ]
        )

        error = from_request_validation(exc)

        assert isinstance(error, SerializationError)
        assert error.details == "Expecting value"


@pytest.mark.unit
class TestHandlers:
    async def test_api_error_handler_renders_envelope(self):
        response = await api_error_handler(
            _request(), NotFoundError("Project with ID 7 not found")
        )

        assert response.status_code == 404
        assert json.loads(response.body) == {
            "success": False,
            "error": {"code": 404, "message": "Project with ID 7 not found"},
        }

    async def test_http_exception_handler_renders_envelope(self):
        exc = StarletteHTTPException(status_code=404, detail="Not Found")

        response = await http_exception_handler(_request("/nope"), exc)

        assert response.status_code == 404
        body = json.loads(response.body)
        assert body["success"] is False
        assert body["error"]["message"] == "Not Found"

    async def test_unhandled_exception_hides_internals(self):
        response = await unhandled_exception_handler(
            _request(), RuntimeError("secret stack detail")
        )

        assert response.status_code == 500
        body = json.loads(response.body)
        assert body["error"]["message"] == "An internal server error occurred"
        assert "secret" not in response.body.decode()
