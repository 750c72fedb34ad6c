"""
app/security/csrf.py

Stateless anti-forgery tokens.

A token is ``<random hex>:<issued-at epoch ms>:<HMAC-SHA256 hex>``; the
signature covers the first two parts. Tokens expire after a configurable TTL.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
import time


def _now_ms() -> int:
    return int(time.time() * 1000)


def _sign(secret: str, nonce: str, issued_at_ms: int) -> str:
    message = f"{nonce}:{issued_at_ms}".encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def generate_csrf_token(secret: str, *, now_ms: int | None = None) -> str:
    issued_at = _now_ms() if now_ms is None else now_ms
    nonce = secrets.token_hex(32)
    return f"{nonce}:{issued_at}:{_sign(secret, nonce, issued_at)}"


def verify_csrf_token(
    token: str | None,
    secret: str,
    *,
    ttl_seconds: int = 3600,
    now_ms: int | None = None,
) -> bool:
    """
    Return True when the token is well formed, unexpired and correctly signed.
    """

    if not token:
        return False
    parts = token.split(":")
    if len(parts) != 3:
        return False
    nonce, issued_at_raw, signature = parts
    try:
        issued_at = int(issued_at_raw)
    except ValueError:
        return False

    now = _now_ms() if now_ms is None else now_ms
    if now - issued_at > ttl_seconds * 1000:
        return False

    expected = _sign(secret, nonce, issued_at)
    return hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8"))
