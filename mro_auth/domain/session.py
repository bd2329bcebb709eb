"""
Local Session Domain Model - Application-issued credential plus its user.
"""

from dataclasses import dataclass
from typing import Dict, Any

from mro_auth.domain.user import UserRecord


@dataclass(frozen=True)
class LocalSession:
    """
    Local session - token issued by the backend and the user it belongs to.

    Domain rules:
    - Both fields are always present; a session is never half-built
    - Created on local login or federated exchange
    """
    token: str
    user: UserRecord

    def __post_init__(self):
        if not self.token:
            raise ValueError("LocalSession requires a token")

    @classmethod
    def from_backend(cls, payload: Dict[str, Any]) -> "LocalSession":
        """
        Build a session from a backend auth response ({token, user, expiresIn}).

        Raises:
            KeyError: If token or user is missing
            ValueError: If token is empty or the payload is not an object
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Session payload must be an object, got {type(payload).__name__}")
        return cls(
            token=payload["token"],
            user=UserRecord.from_backend(payload["user"]),
        )
