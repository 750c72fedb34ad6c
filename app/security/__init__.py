"""
app/security package marker.
"""

from app.security.csrf import generate_csrf_token, verify_csrf_token

__all__ = [
    "generate_csrf_token",
    "verify_csrf_token",
]
