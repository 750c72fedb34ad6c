"""
app/api/routers/auth.py

Anti-forgery token issuance.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from app.config import get_security_settings
from app.schemas.reference_catalog import CsrfTokenResponse
from app.security.csrf import generate_csrf_token

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.get("/csrf", response_model=CsrfTokenResponse)
def issue_csrf_token() -> CsrfTokenResponse:
    """
    Issue a signed token to send back in the ``X-CSRF-Token`` header.
    """

    secret = get_security_settings().csrf_secret
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="CSRF secret is not configured.",
        )
    return CsrfTokenResponse(csrfToken=generate_csrf_token(secret))
