"""
app/validators package marker.
"""

from app.validators.session_row_validator import (
    RejectedRow,
    RowOutcome,
    SessionRowValidator,
    ValidRow,
)

__all__ = [
    "RejectedRow",
    "RowOutcome",
    "SessionRowValidator",
    "ValidRow",
]
