import base64
import json
from http import HTTPStatus

from core.utils.response import ResponseBuilder


class TestResponseBuilder:
    def test_text(self) -> None:
        response = ResponseBuilder.text("2024/01/01/abc123.png")

        assert response["statusCode"] == 200
        assert response["body"] == "2024/01/01/abc123.png"
        assert response["headers"]["Content-Type"].startswith("text/plain")

    def test_error_body(self) -> None:
        response = ResponseBuilder.error(
            status=HTTPStatus.BAD_GATEWAY,
            message="failed",
            error="TRANSFORM_FAILED",
            details={"format": "image/avif"},
            request_id="rid",
        )

        body = json.loads(response["body"])
        assert response["statusCode"] == 502
        assert body["error"] == "TRANSFORM_FAILED"
        assert body["message"] == "failed"
        assert body["details"] == {"format": "image/avif"}
        assert body["request_id"] == "rid"
        assert "timestamp" in body

    def test_error_code_defaults_to_status_name(self) -> None:
        body = json.loads(ResponseBuilder.not_found("Image not found: k")["body"])

        assert body["error"] == "NOT_FOUND"
        assert body["message"] == "Image not found: k"

    def test_unauthorized_challenge(self) -> None:
        response = ResponseBuilder.unauthorized()

        assert response["statusCode"] == 401
        assert response["headers"]["WWW-Authenticate"] == 'Basic realm="Secure Area"'

    def test_bad_request_and_internal_error(self) -> None:
        assert ResponseBuilder.bad_request("nope")["statusCode"] == 400
        assert ResponseBuilder.internal_error()["statusCode"] == 500

    def test_cors_origin_override(self) -> None:
        response = ResponseBuilder.no_content(cors_origin="https://app.example.com")

        assert response["statusCode"] == 204
        assert response["headers"]["Access-Control-Allow-Origin"] == "https://app.example.com"

    def test_binary_response(self) -> None:
        response = ResponseBuilder.binary_response(
            b"\x00\xffbytes",
            content_type="image/webp",
            headers={"Cache-Control": "public, max-age=2592000"},
        )

        assert response["isBase64Encoded"] is True
        assert base64.b64decode(response["body"]) == b"\x00\xffbytes"
        assert response["headers"]["Content-Type"] == "image/webp"
        assert response["headers"]["Content-Length"] == "7"
        assert response["headers"]["Cache-Control"] == "public, max-age=2592000"
