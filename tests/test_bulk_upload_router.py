"""
tests/test_bulk_upload_router.py

HTTP contract of POST /api/v1/sessions/bulk-upload.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.routers.auth import router as auth_router
from app.api.routers.bulk_upload import router as bulk_upload_router
from app.config import get_security_settings
from app.security.csrf import generate_csrf_token
from app.services.bulk_import_service import BulkImportService, get_bulk_import_service
from db.session import get_db
from factories import VALID_LINE, csv_bytes

SECRET = "test-csrf-secret"
URL = "/api/v1/sessions/bulk-upload"


def _override_db() -> Iterator[None]:
    yield None


@pytest.fixture()
def client(monkeypatch: pytest.MonkeyPatch, service: BulkImportService) -> Iterator[TestClient]:
    monkeypatch.setenv("CSRF_SECRET", SECRET)
    get_security_settings.cache_clear()

    app = FastAPI()
    app.include_router(auth_router)
    app.include_router(bulk_upload_router)
    app.dependency_overrides[get_db] = _override_db
    app.dependency_overrides[get_bulk_import_service] = lambda: service

    with TestClient(app) as test_client:
        yield test_client

    get_security_settings.cache_clear()


def _headers(**overrides: str) -> dict[str, str]:
    headers = {
        "X-User-Id": "1",
        "X-User-Role": "admin",
        "X-CSRF-Token": generate_csrf_token(SECRET),
    }
    headers.update(overrides)
    return headers


def _upload(content: bytes, filename: str = "sessions.csv") -> dict:
    return {"file": (filename, content, "text/csv")}


class TestBulkUploadSuccess:
    def test_returns_report(self, client: TestClient) -> None:
        content = csv_bytes(
            VALID_LINE,
            "CS-101,PROG-101,PLT-A,nobody@x.com,2026-03-03T09:00:00Z,60,Hall 2,",
        )

        response = client.post(URL, files=_upload(content), headers=_headers())

        assert response.status_code == 200
        assert response.json() == {
            "success": 1,
            "failed": 1,
            "errors": [{"row": 3, "error": "Instructor not found: nobody@x.com"}],
        }

    def test_platoon_scoped_caller(self, client: TestClient) -> None:
        headers = _headers(**{"X-User-Role": "platoon_scoped", "X-Platoon-Id": "5"})

        response = client.post(URL, files=_upload(csv_bytes(VALID_LINE)), headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] == 0
        assert body["errors"][0]["error"] == (
            "Forbidden: You can only create sessions for your platoon"
        )

    def test_issued_token_is_accepted(self, client: TestClient) -> None:
        token = client.get("/api/v1/auth/csrf").json()["csrfToken"]

        response = client.post(
            URL,
            files=_upload(csv_bytes(VALID_LINE)),
            headers=_headers(**{"X-CSRF-Token": token}),
        )

        assert response.status_code == 200


class TestBulkUploadRejections:
    def test_missing_file_field(self, client: TestClient) -> None:
        response = client.post(URL, data={"other": "x"}, headers=_headers())

        assert response.status_code == 400
        assert response.json()["detail"] == "No file provided"

    def test_unsupported_extension(self, client: TestClient) -> None:
        response = client.post(URL, files=_upload(b"{}", "sessions.json"), headers=_headers())

        assert response.status_code == 400
        assert "Unsupported file format" in response.json()["detail"]

    def test_unauthenticated(self, client: TestClient) -> None:
        response = client.post(
            URL,
            files=_upload(csv_bytes(VALID_LINE)),
            headers={"X-CSRF-Token": generate_csrf_token(SECRET)},
        )

        assert response.status_code == 401

    def test_platoon_scoped_without_platoon(self, client: TestClient) -> None:
        response = client.post(
            URL,
            files=_upload(csv_bytes(VALID_LINE)),
            headers=_headers(**{"X-User-Role": "platoon_scoped"}),
        )

        assert response.status_code == 401

    @pytest.mark.parametrize("token", ["", "garbage", "a:1:b"])
    def test_invalid_csrf_token(self, client: TestClient, token: str) -> None:
        response = client.post(
            URL,
            files=_upload(csv_bytes(VALID_LINE)),
            headers=_headers(**{"X-CSRF-Token": token}),
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Invalid CSRF token"

    def test_non_ascii_csrf_token(self, client: TestClient) -> None:
        nonce, issued_at, _ = generate_csrf_token(SECRET).split(":")
        headers: dict[str, str | bytes] = dict(_headers())
        headers["X-CSRF-Token"] = f"{nonce}:{issued_at}:é".encode("latin-1")

        response = client.post(URL, files=_upload(csv_bytes(VALID_LINE)), headers=headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Invalid CSRF token"

    def test_csrf_failure_does_not_consume_quota(self, client: TestClient) -> None:
        for _ in range(10):
            client.post(
                URL,
                files=_upload(csv_bytes(VALID_LINE)),
                headers=_headers(**{"X-CSRF-Token": "bad"}),
            )

        response = client.post(URL, files=_upload(csv_bytes(VALID_LINE)), headers=_headers())

        assert response.status_code == 200

    def test_rate_limited(self, client: TestClient) -> None:
        for _ in range(5):
            assert client.post(URL, files=_upload(csv_bytes(VALID_LINE)), headers=_headers()).status_code == 200

        response = client.post(URL, files=_upload(csv_bytes(VALID_LINE)), headers=_headers())

        assert response.status_code == 429
        body = response.json()
        assert body["error"] == "Rate limit exceeded"
        assert isinstance(body["resetAt"], int)
        assert response.headers["X-RateLimit-Remaining"] == "0"
        assert response.headers["X-RateLimit-Reset"] == str(body["resetAt"])

    def test_rate_limit_is_per_user(self, client: TestClient) -> None:
        for _ in range(5):
            client.post(URL, files=_upload(csv_bytes(VALID_LINE)), headers=_headers())

        response = client.post(
            URL,
            files=_upload(csv_bytes(VALID_LINE)),
            headers=_headers(**{"X-User-Id": "99"}),
        )

        assert response.status_code == 200

    def test_undecodable_file(self, client: TestClient) -> None:
        response = client.post(URL, files=_upload(b"\xff\xfe\xfa"), headers=_headers())

        assert response.status_code == 500
        assert response.json()["detail"] == "Unable to read uploaded file."
