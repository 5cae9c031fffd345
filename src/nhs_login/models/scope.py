"""Scopes that can be requested from NHS login."""

from __future__ import annotations

from enum import Enum


class Scope(Enum):
    """Sets of claims made available when making an authentication request.

    Every request must include OPENID.
    """

    OPENID = "openid"
    PROFILE = "profile"
    EMAIL = "email"
    PHONE = "phone"
    PROFILE_EXTENDED = "profile_extended"
    BASIC_DEMOGRAPHICS = "basic_demographics"
    GP_REGISTRATION_DETAILS = "gp_registration_details"
    GP_INTEGRATION_CREDENTIALS = "gp_integration_credentials"
    CLIENT_METADATA = "client_metadata"

    def encode(self) -> str:
        return self.value

    @classmethod
    def decode(cls, value: str) -> Scope:
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown scope: {value!r}") from None


def join_scopes(scopes: tuple[Scope, ...] | list[Scope]) -> str:
    """Space-join scopes in order, as both wire forms expect."""
    return " ".join(scope.encode() for scope in scopes)


def split_scopes(value: str) -> tuple[Scope, ...]:
    """Inverse of join_scopes. Splits on a single ASCII space."""
    return tuple(Scope.decode(part) for part in value.split(" "))
