"""Tests for the uniform error envelope and the catch-all handler."""

import unittest
from unittest.mock import patch

from app.core.error_handlers import ROUTE_NOT_FOUND_MESSAGE, validation_errors_to_fields
from app.core.exceptions import (
    BadRequestError,
    ErrorCode,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)
from support import ApiTestCase


class TestErrorPayload(unittest.TestCase):
    def test_errors_omitted_when_absent_or_empty(self) -> None:
        self.assertEqual(
            NotFoundError("User not found", ErrorCode.USER_NOT_FOUND).to_payload(),
            {"message": "User not found", "errorCode": 1001},
        )
        self.assertNotIn("errors", ValidationFailedError([]).to_payload())

    def test_errors_included_when_present(self) -> None:
        payload = ValidationFailedError([{"field": "name", "message": "too short"}]).to_payload()
        self.assertEqual(payload["errors"], [{"field": "name", "message": "too short"}])
        self.assertEqual(payload["errorCode"], 5002)

    def test_status_codes(self) -> None:
        self.assertEqual(BadRequestError("x", ErrorCode.SELF_DEMOTION).status_code, 400)
        self.assertEqual(NotFoundError("x", ErrorCode.TOKEN_NOT_FOUND).status_code, 404)
        self.assertEqual(UnauthorizedError("x", ErrorCode.UNAUTHORIZED).status_code, 401)
        self.assertEqual(ValidationFailedError([]).status_code, 400)
        self.assertEqual(InternalError().status_code, 500)

    def test_internal_error_hides_cause(self) -> None:
        err = InternalError(cause=RuntimeError("password=hunter2"))
        self.assertEqual(err.to_payload(), {"message": "Something went wrong!", "errorCode": 3001})


class TestValidationFields(unittest.TestCase):
    def test_location_prefix_is_dropped(self) -> None:
        fields = validation_errors_to_fields(
            [
                {"loc": ("body", "email"), "msg": "bad email"},
                {"loc": ("path", "user_id"), "msg": "not an int"},
                {"loc": ("body",), "msg": "Field required"},
            ]
        )
        self.assertEqual(
            fields,
            [
                {"field": "email", "message": "bad email"},
                {"field": "user_id", "message": "not an int"},
                {"field": "body", "message": "Field required"},
            ],
        )


class TestEnvelopeOverHttp(ApiTestCase):
    def test_root_and_health(self) -> None:
        self.assertEqual(self.client.get("/").json(), {"status": "ok"})
        health = self.client.get("/api/health/").json()
        self.assertEqual(health["status"], "ok")
        self.assertEqual(health["database"], "connected")

    def test_unknown_route(self) -> None:
        resp = self.client.get("/api/nope")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(
            resp.json(), {"message": ROUTE_NOT_FOUND_MESSAGE, "errorCode": 4004}
        )

    def test_missing_body_is_validation_error(self) -> None:
        resp = self.client.post("/api/auth/login")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["errorCode"], 5002)
        self.assertTrue(resp.json()["errors"])

    def test_unexpected_failure_becomes_internal(self) -> None:
        client = self.new_client(raise_server_exceptions=False)
        with patch("app.services.auth.find_active_user_by_email", side_effect=RuntimeError("boom")):
            resp = client.post(
                "/api/auth/login", json={"email": "john@example.com", "password": "Password123"}
            )
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"message": "Something went wrong!", "errorCode": 3001})
        self.assertNotIn("boom", resp.text)

    def test_internal_error_carries_cors_headers(self) -> None:
        origin = "http://localhost:5173"
        with patch("app.services.auth.find_active_user_by_email", side_effect=RuntimeError("boom")):
            resp = self.client.post(
                "/api/auth/login",
                json={"email": "john@example.com", "password": "Password123"},
                headers={"Origin": origin},
            )
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"message": "Something went wrong!", "errorCode": 3001})
        self.assertEqual(resp.headers.get("access-control-allow-origin"), origin)
        self.assertEqual(resp.headers.get("access-control-allow-credentials"), "true")


if __name__ == "__main__":
    unittest.main()
