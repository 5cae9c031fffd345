"""Exception hierarchy for NHS login authentication requests.

Separates programmer errors (a request that can never be sent) from
malformed serialized input, so callers can handle each precisely.
"""

from __future__ import annotations


class NhsLoginError(Exception):
    """Base exception for all NHS login related errors."""

    pass


class InvalidAuthenticationRequestError(NhsLoginError, ValueError):
    """Raised when a request is built or projected with invalid values.

    Covers empty or openid-less scope lists and missing values that the
    authorize endpoint requires (host, client_id, redirect_uri, state, nonce).
    """

    pass


class AuthenticationRequestDecodeError(NhsLoginError):
    """Raised when serialized data is not a valid authentication request."""

    pass


class ConfigurationError(NhsLoginError):
    """Raised when NHS login settings are missing or malformed."""

    pass
