"""Authentication request creation for a configured relying party.

Applies deployment settings (host, client id, redirect URI, scopes and
vector of trust) to every request so route handlers only pass what
varies per login, such as a prompt or an asserted login identity.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from nhs_login.config import NhsLoginSettings
from nhs_login.models.authentication import AuthenticationRequest
from nhs_login.primitives.random import RandomSource

logger = logging.getLogger(__name__)


class AuthenticationRequestFactory:
    """Creates NHS login authentication requests from settings.

    Per-call keyword arguments override the settings, and accept everything
    ``AuthenticationRequest.from_values`` accepts.
    """

    def __init__(
        self,
        settings: NhsLoginSettings,
        random_source: RandomSource | None = None,
    ):
        self._settings = settings
        self._random_source = random_source

    @property
    def settings(self) -> NhsLoginSettings:
        return self._settings

    def create(self, **overrides: Any) -> AuthenticationRequest:
        """Create a request, generating state and nonce unless given.

        Raises:
            InvalidAuthenticationRequestError: If the resulting scopes are
                empty or do not include openid
        """
        values: dict[str, Any] = {
            "scopes": self._settings.scopes,
            "host": self._settings.host,
            "client_id": self._settings.client_id,
            "redirect_uri": self._settings.redirect_uri,
            "vector_of_trust": self._settings.vector_of_trust,
            "random_source": self._random_source,
        }
        values.update(overrides)
        return AuthenticationRequest.from_values(**values)

    def authorization_url(
        self, **overrides: Any
    ) -> tuple[httpx.URL, AuthenticationRequest]:
        """Create a request and the URL to redirect the user to.

        Store the returned request (e.g. ``request.to_json()``) to validate
        state and nonce when the callback arrives.

        Returns:
            Tuple of (authorization_url, request)
        """
        request = self.create(**overrides)
        url = request.to_uri()

        logger.info(
            f"Generated authorization URL for client {request.client_id} "
            f"on {request.host}"
        )
        return url, request
