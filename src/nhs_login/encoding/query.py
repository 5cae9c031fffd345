"""Query and form serialization of authentication requests.

The authorize endpoint accepts the request as an HTTP GET with the
parameters in the query string, or as an HTTP POST with the same
parameters form-encoded. Both use the parameter map built here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from nhs_login.models.errors import InvalidAuthenticationRequestError
from nhs_login.models.scope import join_scopes

if TYPE_CHECKING:
    from nhs_login.models.authentication import AuthenticationRequest

AUTHORIZE_PATH = "/authorize"
RESPONSE_TYPE = "code"


def _require(value: str | None, name: str) -> str:
    if not value:
        raise InvalidAuthenticationRequestError(
            f"{name} is required to build an authorization request"
        )
    return value


def to_query_params(request: AuthenticationRequest) -> dict[str, str]:
    """Build the ordered parameter map for the authorize endpoint.

    Optional parameters are left out entirely when unset. ``scope`` is the
    space-joined scope list and ``allow_registration`` is lowercased
    ``"true"``/``"false"``.

    Raises:
        InvalidAuthenticationRequestError: If client_id, redirect_uri,
            state or nonce is missing or empty
    """
    params = {
        "scope": join_scopes(request.scopes),
        "response_type": RESPONSE_TYPE,
        "client_id": _require(request.client_id, "client_id"),
        "redirect_uri": _require(request.redirect_uri, "redirect_uri"),
        "state": _require(request.state, "state"),
        "nonce": _require(request.nonce, "nonce"),
    }

    if request.display is not None:
        params["display"] = request.display.encode()
    if request.prompt is not None:
        params["prompt"] = request.prompt.encode()
    if request.vector_of_trust is not None:
        params["vtr"] = str(request.vector_of_trust)
    if request.fido_auth_response is not None:
        params["fido_auth_response"] = request.fido_auth_response
    if request.asserted_login_identity is not None:
        params["asserted_login_identity"] = request.asserted_login_identity
    if request.allow_registration is not None:
        params["allow_registration"] = "true" if request.allow_registration else "false"

    return params


def authorization_endpoint(request: AuthenticationRequest) -> httpx.URL:
    """The authorize endpoint URL without any query, for form POSTs."""
    host = _require(request.host, "host")
    return httpx.URL(f"https://{host}{AUTHORIZE_PATH}")


def to_uri(request: AuthenticationRequest) -> httpx.URL:
    """Build the complete authorization URL for a browser redirect."""
    host = _require(request.host, "host")
    return httpx.URL(f"https://{host}{AUTHORIZE_PATH}", params=to_query_params(request))
