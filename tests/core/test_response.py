import base64
import json
from http import HTTPStatus
from typing import Any, cast

import pytest

from core.models.errors import EditsParseError, NotFoundError
from core.utils.response import ResponseBuilder


def parse_body(resp: dict[str, Any]) -> dict[str, Any]:
    body = resp.get("body")
    if not body:
        return {}

    return cast(dict[str, Any], json.loads(body))


def test_no_content_response() -> None:
    resp = ResponseBuilder.no_content(cors_origin="https://example.com")

    assert resp["statusCode"] == HTTPStatus.NO_CONTENT
    assert resp["body"] == ""
    assert resp["headers"]["Access-Control-Allow-Origin"] == "https://example.com"


@pytest.mark.parametrize(
    "func,status,error_name",
    [
        (ResponseBuilder.bad_request, HTTPStatus.BAD_REQUEST, "BAD_REQUEST"),
        (
            ResponseBuilder.internal_error,
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
        ),
    ],
)
def test_error_responses_use_explicit_message(func, status, error_name) -> None:
    resp = func("bad", request_id="req-x", cors_origin="*")
    parsed = parse_body(resp)

    assert resp["statusCode"] == status
    assert parsed["error"] == error_name
    assert parsed["message"] == "bad"
    assert parsed["request_id"] == "req-x"
    assert "timestamp" in parsed


def test_validation_error_is_bad_request() -> None:
    resp = ResponseBuilder.validation_error(
        message="Invalid image request",
        details={"errors": [{"field": "path", "message": "This field is required"}]},
    )
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.BAD_REQUEST
    assert parsed["error"] == "VALIDATION_FAILED"
    assert parsed["details"]["errors"][0]["field"] == "path"


class TestFromError:
    def test_uses_error_status_and_wire_body(self) -> None:
        resp = ResponseBuilder.from_error(
            EditsParseError(message="could not decode", details={"reason": "x"})
        )

        assert resp["statusCode"] == 400
        assert parse_body(resp) == {
            "status": 400,
            "code": "DecodeRequest::CannotDecodeRequest",
            "message": "could not decode",
        }
        assert resp["headers"]["Content-Type"] == "application/json"

    def test_includes_request_id(self) -> None:
        resp = ResponseBuilder.from_error(
            NotFoundError(message="The specified key does not exist."),
            request_id="req-404",
        )

        assert resp["statusCode"] == 404
        assert parse_body(resp)["request_id"] == "req-404"


class TestBinaryResponse:
    def test_encodes_content(self) -> None:
        content = b"binary-data"

        resp = ResponseBuilder.binary_response(
            content,
            content_type="image/png",
            cors_origin="*",
        )

        assert resp["statusCode"] == HTTPStatus.OK
        assert resp["isBase64Encoded"] is True
        assert base64.b64decode(resp["body"]) == content
        assert resp["headers"]["Content-Type"] == "image/png"
        assert resp["headers"]["Content-Length"] == str(len(content))
        assert resp["headers"]["Access-Control-Allow-Origin"] == "*"

    def test_extra_headers_override(self) -> None:
        resp = ResponseBuilder.binary_response(
            b"x",
            content_type="image",
            headers={"Content-Type": "image/webp", "Cache-Control": "no-cache"},
        )

        assert resp["headers"]["Content-Type"] == "image/webp"
        assert resp["headers"]["Cache-Control"] == "no-cache"
        assert "Access-Control-Allow-Origin" not in resp["headers"]
