"""
Local token inspection.

The backend stays the authority on validity. This only short-circuits
tokens that are JWTs whose exp claim has already passed.
"""

from datetime import datetime, timezone
from typing import Optional

import jwt


def token_expiry(token: str) -> Optional[datetime]:
    """
    Read the exp claim without verifying the signature.

    Returns:
        Expiry as an aware UTC datetime, or None if the token is opaque
        or carries no exp claim
    """
    try:
        payload = jwt.decode(
            token,
            options={"verify_signature": False, "verify_exp": False},
        )
    except jwt.InvalidTokenError:
        return None

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        return None
    return datetime.fromtimestamp(exp, tz=timezone.utc)


def is_expired(token: str, leeway: int = 0) -> bool:
    """True only when the token is a JWT that expired more than leeway seconds ago."""
    expiry = token_expiry(token)
    if expiry is None:
        return False
    return datetime.now(timezone.utc).timestamp() > expiry.timestamp() + leeway
