from __future__ import annotations

import pytest

from app.security.csrf import generate_csrf_token, verify_csrf_token

SECRET = "s3cret"
ISSUED_AT = 1_700_000_000_000


class TestCsrfTokens:
    def test_fresh_token_verifies(self) -> None:
        token = generate_csrf_token(SECRET, now_ms=ISSUED_AT)

        assert verify_csrf_token(token, SECRET, now_ms=ISSUED_AT + 1_000)

    def test_token_shape(self) -> None:
        nonce, issued_at, signature = generate_csrf_token(SECRET, now_ms=ISSUED_AT).split(":")

        assert len(nonce) == 64
        assert issued_at == str(ISSUED_AT)
        assert len(signature) == 64

    def test_tokens_are_unique(self) -> None:
        assert generate_csrf_token(SECRET) != generate_csrf_token(SECRET)

    def test_wrong_secret(self) -> None:
        token = generate_csrf_token(SECRET, now_ms=ISSUED_AT)

        assert not verify_csrf_token(token, "other", now_ms=ISSUED_AT)

    def test_tampered_timestamp(self) -> None:
        nonce, _, signature = generate_csrf_token(SECRET, now_ms=ISSUED_AT).split(":")
        forged = f"{nonce}:{ISSUED_AT + 3_600_000}:{signature}"

        assert not verify_csrf_token(forged, SECRET, now_ms=ISSUED_AT + 3_600_000)

    def test_expired(self) -> None:
        token = generate_csrf_token(SECRET, now_ms=ISSUED_AT)

        assert verify_csrf_token(token, SECRET, ttl_seconds=60, now_ms=ISSUED_AT + 60_000)
        assert not verify_csrf_token(token, SECRET, ttl_seconds=60, now_ms=ISSUED_AT + 60_001)

    @pytest.mark.parametrize("token", [None, "", "abc", "a:b:c", "a:1:b:c"])
    def test_malformed(self, token: str | None) -> None:
        assert not verify_csrf_token(token, SECRET, now_ms=ISSUED_AT)

    @pytest.mark.parametrize(
        "token",
        [f"abc:{ISSUED_AT}:é", f"nonce:{ISSUED_AT}:sïgnature", f"ü:{ISSUED_AT}:ü"],
    )
    def test_non_ascii_token_is_rejected(self, token: str) -> None:
        assert not verify_csrf_token(token, SECRET, now_ms=ISSUED_AT)
