"""
Auth Errors - Failure taxonomy for session bootstrap.

Only failures that abort resolution are surfaced to the user.
Everything else is recovered and logged.
"""


class AuthError(Exception):
    """Base class for all mro_auth failures."""


class InvalidLocalToken(AuthError):
    """Backend rejected the persisted local session token."""


class BackendUnavailable(AuthError):
    """Backend could not be reached (transport failure)."""


class TokenAcquisitionFailed(AuthError):
    """Silent token acquisition from the identity provider failed."""


class ExchangeFailed(AuthError):
    """Backend rejected the federated token exchange."""


class ExchangeTimeout(AuthError):
    """Federated exchange sequence exceeded its time budget."""


class ProfileEnrichmentFailed(AuthError):
    """Best-effort profile or avatar fetch failed."""


class LocalLoginFailed(AuthError):
    """Email/password login was rejected."""


class WriterAlreadyClaimed(AuthError):
    """The structural AuthState writer was claimed twice."""
