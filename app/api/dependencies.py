"""
app/api/dependencies.py

Shared FastAPI dependencies for caller identity and anti-forgery checks.

Authentication itself happens upstream: the gateway in front of this service
verifies the user's credentials and forwards the resulting identity in the
``X-User-Id``, ``X-User-Role`` and ``X-Platoon-Id`` headers.
"""

from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status

from app.config import get_security_settings
from app.domain.bulk_import import ALLOWED_ACTOR_ROLES, Actor, ActorRole
from app.security.csrf import verify_csrf_token


def get_current_actor(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
    x_platoon_id: str | None = Header(default=None),
) -> Actor:
    """
    Build the authenticated actor from gateway headers, or reject with 401.
    """

    user_id = (x_user_id or "").strip()
    role = (x_user_role or "").strip().lower()
    if not user_id or role not in ALLOWED_ACTOR_ROLES:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    platoon_id: int | None = None
    if role == ActorRole.PLATOON_SCOPED:
        try:
            platoon_id = int((x_platoon_id or "").strip())
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Platoon-scoped users must carry a platoon id.",
            ) from exc

    return Actor(user_id=user_id, role=role, platoon_id=platoon_id)


def require_csrf(
    actor: Actor = Depends(get_current_actor),
    x_csrf_token: str | None = Header(default=None),
) -> Actor:
    """
    Verify the anti-forgery token of a state-changing request.
    """

    settings = get_security_settings()
    if not settings.csrf_secret or not verify_csrf_token(
        x_csrf_token,
        settings.csrf_secret,
        ttl_seconds=settings.csrf_token_ttl_seconds,
    ):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid CSRF token",
        )
    return actor
