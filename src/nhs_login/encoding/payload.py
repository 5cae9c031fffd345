"""JSON serialization of authentication requests.

The JSON form keeps native JSON types and camelCase keys, except for
``scopes``, which is a single space-joined string rather than an array so
that stored requests stay compatible with the legacy string format.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationError,
    field_validator,
)

from nhs_login.encoding.query import RESPONSE_TYPE
from nhs_login.models.display import Display
from nhs_login.models.errors import (
    AuthenticationRequestDecodeError,
    InvalidAuthenticationRequestError,
)
from nhs_login.models.prompt import Prompt
from nhs_login.models.scope import join_scopes, split_scopes
from nhs_login.models.vector_of_trust import VectorOfTrust

if TYPE_CHECKING:
    from nhs_login.models.authentication import AuthenticationRequest

logger = logging.getLogger(__name__)


class AuthenticationRequestPayload(BaseModel):
    """Wire shape of a serialized authentication request.

    Field order is the key order of the serialized object. Unknown keys
    are ignored so newer writers stay readable.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    response_type: StrictStr = Field(alias="responseType")
    host: StrictStr | None = None
    scopes: StrictStr
    client_id: StrictStr | None = Field(default=None, alias="clientId")
    redirect_uri: StrictStr | None = Field(default=None, alias="redirectUri")
    state: StrictStr
    nonce: StrictStr
    display: StrictStr | None = None
    prompt: StrictStr | None = None
    vector_of_trust: StrictStr | None = Field(default=None, alias="vectorOfTrust")
    fido_auth_response: StrictStr | None = Field(
        default=None, alias="fidoAuthResponse"
    )
    asserted_login_identity: StrictStr | None = Field(
        default=None, alias="assertedLoginIdentity"
    )
    allow_registration: StrictBool | None = Field(
        default=None, alias="allowRegistration"
    )

    @field_validator("response_type")
    @classmethod
    def validate_response_type(cls, v: str) -> str:
        if v != RESPONSE_TYPE:
            raise ValueError(f"Unsupported response type: {v}")
        return v


def to_json(request: AuthenticationRequest) -> dict[str, Any]:
    """Serialize a request to a JSON-compatible dict.

    Unset fields are omitted rather than written as null.

    Raises:
        InvalidAuthenticationRequestError: If the request holds values that
            cannot be represented, such as a missing state
    """
    try:
        payload = AuthenticationRequestPayload(
            response_type=request.response_type,
            host=request.host,
            scopes=join_scopes(request.scopes),
            client_id=request.client_id,
            redirect_uri=request.redirect_uri,
            state=request.state,
            nonce=request.nonce,
            display=request.display.encode() if request.display else None,
            prompt=request.prompt.encode() if request.prompt else None,
            vector_of_trust=(
                str(request.vector_of_trust) if request.vector_of_trust else None
            ),
            fido_auth_response=request.fido_auth_response,
            asserted_login_identity=request.asserted_login_identity,
            allow_registration=request.allow_registration,
        )
    except ValidationError as e:
        raise InvalidAuthenticationRequestError(
            f"Cannot serialize authentication request: {e}"
        ) from e

    return payload.model_dump(by_alias=True, exclude_none=True)


def decode_fields(data: Any) -> dict[str, Any]:
    """Decode serialized JSON data into AuthenticationRequest field values.

    Args:
        data: A dict as produced by ``to_json``

    Returns:
        Keyword arguments for the AuthenticationRequest constructor

    Raises:
        AuthenticationRequestDecodeError: If required keys are missing, a
            value has the wrong JSON type, or an enum value is unknown
    """
    try:
        payload = AuthenticationRequestPayload.model_validate(data)
    except ValidationError as e:
        raise AuthenticationRequestDecodeError(
            f"Invalid serialized authentication request: {e}"
        ) from e

    try:
        fields = {
            "host": payload.host,
            "scopes": split_scopes(payload.scopes),
            "client_id": payload.client_id,
            "redirect_uri": payload.redirect_uri,
            "state": payload.state,
            "nonce": payload.nonce,
            "display": (
                Display.decode(payload.display) if payload.display is not None else None
            ),
            "prompt": (
                Prompt.decode(payload.prompt) if payload.prompt is not None else None
            ),
            "vector_of_trust": (
                VectorOfTrust.parse(payload.vector_of_trust)
                if payload.vector_of_trust is not None
                else None
            ),
            "fido_auth_response": payload.fido_auth_response,
            "asserted_login_identity": payload.asserted_login_identity,
            "allow_registration": payload.allow_registration,
        }
    except ValueError as e:
        raise AuthenticationRequestDecodeError(
            f"Invalid serialized authentication request: {e}"
        ) from e

    logger.debug(f"Decoded authentication request with {len(fields['scopes'])} scopes")
    return fields
