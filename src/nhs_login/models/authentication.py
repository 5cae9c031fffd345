"""Authentication request model for NHS login.

The client starts an OpenID Connect authentication by sending the user to
the NHS login authorize endpoint, using HTTP GET (query serialization) or
HTTP POST (form serialization). The request is also stored as JSON between
the redirect and the callback so state and nonce can be checked.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from nhs_login.encoding import payload, query
from nhs_login.encoding.query import RESPONSE_TYPE
from nhs_login.models.display import Display
from nhs_login.models.errors import (
    AuthenticationRequestDecodeError,
    InvalidAuthenticationRequestError,
)
from nhs_login.models.prompt import Prompt
from nhs_login.models.scope import Scope
from nhs_login.models.vector_of_trust import VectorOfTrust
from nhs_login.primitives.random import RandomSource, random_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticationRequest:
    """Immutable NHS login authentication request.

    Build new requests with ``from_values``, which validates scopes and
    generates state and nonce. The plain constructor does no validation.
    Use ``replace`` to derive a modified copy.
    """

    scopes: tuple[Scope, ...]
    state: str
    nonce: str

    # The host of the NHS login server, e.g. "auth.login.nhs.uk"
    host: str | None = None

    # Static client identifier issued during partner onboarding
    client_id: str | None = None

    # Must exactly match a pre-registered redirection URI and must not use
    # the http scheme
    redirect_uri: str | None = None

    display: Display | None = None
    prompt: Prompt | None = None
    vector_of_trust: VectorOfTrust | None = None

    # Base64url-encoded FIDO UAF AuthResponse from a registered device
    fido_auth_response: str | None = None

    # Signed JWT issued by another relying party for seamless login between
    # two RPs without cookie-based SSO. Passed through, never verified here.
    asserted_login_identity: str | None = None

    # False hides the account registration links in the NHS login UI
    allow_registration: bool | None = None

    response_type: str = field(default=RESPONSE_TYPE, init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.scopes, tuple):
            object.__setattr__(self, "scopes", tuple(self.scopes))

    @classmethod
    def from_values(
        cls,
        *,
        scopes: list[Scope] | tuple[Scope, ...],
        host: str | None = None,
        client_id: str | None = None,
        redirect_uri: str | None = None,
        state: str | None = None,
        nonce: str | None = None,
        display: Display | None = Display.PAGE,
        prompt: Prompt | None = None,
        vector_of_trust: VectorOfTrust | None = None,
        fido_auth_response: str | None = None,
        asserted_login_identity: str | None = None,
        allow_registration: bool | None = None,
        random_source: RandomSource | None = None,
    ) -> AuthenticationRequest:
        """Create a validated authentication request.

        Args:
            scopes: Requested scopes, in order. Must include Scope.OPENID.
            host: NHS login host. Only required to build a URL.
            client_id: Client identifier registered with NHS login
            redirect_uri: Where the Platform sends the authentication response
            state: CSRF token. Generated when omitted.
            nonce: Replay protection token. Generated when omitted.
            display: Display mode. Pass None for no display parameter.
            prompt: Optional sign-in prompt hint
            vector_of_trust: Optional requested levels of trust
            fido_auth_response: Optional FIDO UAF AuthResponse
            asserted_login_identity: Optional signed JWT from another RP
            allow_registration: Optional; False hides registration links
            random_source: Source for generated tokens. Defaults to the
                system CSPRNG.

        Returns:
            AuthenticationRequest: Immutable request

        Raises:
            InvalidAuthenticationRequestError: If scopes is empty or does
                not include Scope.OPENID
        """
        scopes = _validate_scopes(scopes)

        if display is not None and not display.is_supported:
            logger.warning(
                f"Display mode {display.encode()!r} is not supported by NHS login"
            )

        if state is None:
            state = random_token(random_source)
        if nonce is None:
            nonce = random_token(random_source)

        logger.debug(
            f"Created authentication request for client {client_id} "
            f"with scopes {[scope.encode() for scope in scopes]}"
        )

        return cls(
            scopes=scopes,
            host=host,
            client_id=client_id,
            redirect_uri=redirect_uri,
            state=state,
            nonce=nonce,
            display=display,
            prompt=prompt,
            vector_of_trust=vector_of_trust,
            fido_auth_response=fido_auth_response,
            asserted_login_identity=asserted_login_identity,
            allow_registration=allow_registration,
        )

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> AuthenticationRequest:
        """Rebuild a request from ``to_json`` output.

        Nothing is defaulted or generated: the request holds exactly what
        the data holds.

        Raises:
            AuthenticationRequestDecodeError: If data is not a valid
                serialized request
        """
        return cls(**payload.decode_fields(data))

    @classmethod
    def from_json_string(cls, text: str | bytes) -> AuthenticationRequest:
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise AuthenticationRequestDecodeError(
                f"Serialized authentication request is not valid JSON: {e}"
            ) from e
        return cls.from_json(data)

    def replace(self, **changes: Any) -> AuthenticationRequest:
        """Return a copy with the given fields replaced.

        Replacement scopes are validated like in ``from_values``.

        Raises:
            InvalidAuthenticationRequestError: If new scopes are empty or do
                not include Scope.OPENID
        """
        if "scopes" in changes:
            changes["scopes"] = _validate_scopes(changes["scopes"])
        return dataclasses.replace(self, **changes)

    @property
    def uri(self) -> httpx.URL:
        return self.to_uri()

    def to_uri(self) -> httpx.URL:
        """Build the authorization URL for a browser redirect.

        Raises:
            InvalidAuthenticationRequestError: If host, client_id,
                redirect_uri, state or nonce is missing
        """
        return query.to_uri(self)

    def to_query_params(self) -> dict[str, str]:
        return query.to_query_params(self)

    def authorization_endpoint(self) -> httpx.URL:
        return query.authorization_endpoint(self)

    def to_form_data(self) -> dict[str, str]:
        """Convert to form data for an HTTP POST to the authorize endpoint.

        Returns:
            Dictionary suitable for httpx data parameter
        """
        return query.to_query_params(self)

    def to_json(self) -> dict[str, Any]:
        return payload.to_json(self)

    def to_json_string(self) -> str:
        return json.dumps(self.to_json(), separators=(",", ":"))


def _validate_scopes(scopes: list[Scope] | tuple[Scope, ...]) -> tuple[Scope, ...]:
    scopes = tuple(scopes)
    if not scopes:
        raise InvalidAuthenticationRequestError("At least one scope is required")
    if Scope.OPENID not in scopes:
        raise InvalidAuthenticationRequestError(
            f"Scopes must include {Scope.OPENID.encode()!r}"
        )
    return scopes
