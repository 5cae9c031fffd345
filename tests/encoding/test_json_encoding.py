"""Tests for the JSON form of authentication requests."""

import json

import pytest

from nhs_login.encoding.payload import decode_fields, to_json
from nhs_login.models.authentication import AuthenticationRequest
from nhs_login.models.display import Display
from nhs_login.models.errors import (
    AuthenticationRequestDecodeError,
    InvalidAuthenticationRequestError,
)
from nhs_login.models.prompt import Prompt
from nhs_login.models.scope import Scope
from nhs_login.models.vector_of_trust import VectorOfTrust


def full_request(base_values) -> AuthenticationRequest:
    return AuthenticationRequest.from_values(
        **base_values,
        display=Display.TOUCH,
        prompt=Prompt.LOGIN,
        vector_of_trust=VectorOfTrust.for_level("P5"),
        fido_auth_response="Zmlkbw",
        asserted_login_identity="eyJhbGciOiJSUzUxMiJ9.e30.sig",
        allow_registration=False,
    )


class TestToJson:
    def test_scopes_is_a_space_joined_string(self, base_values) -> None:
        # Arrange
        request = AuthenticationRequest.from_values(**base_values)

        # Act
        data = to_json(request)

        # Assert
        assert data["scopes"] == "openid profile"
        assert isinstance(data["scopes"], str)

    def test_keys_and_order(self, base_values) -> None:
        data = full_request(base_values).to_json()

        assert list(data) == [
            "responseType",
            "host",
            "scopes",
            "clientId",
            "redirectUri",
            "state",
            "nonce",
            "display",
            "prompt",
            "vectorOfTrust",
            "fidoAuthResponse",
            "assertedLoginIdentity",
            "allowRegistration",
        ]

    def test_values_use_native_json_types(self, base_values) -> None:
        data = full_request(base_values).to_json()

        assert data["responseType"] == "code"
        assert data["display"] == "touch"
        assert data["prompt"] == "login"
        assert data["vectorOfTrust"] == '["P5.Cp.Cd","P5.Cp.Ck","P5.Cm"]'
        assert data["allowRegistration"] is False

    def test_absent_fields_are_omitted(self, base_values) -> None:
        # Arrange
        request = AuthenticationRequest.from_values(**base_values, display=None)

        # Act
        data = request.to_json()

        # Assert
        assert data == {
            "responseType": "code",
            "host": "as.example",
            "scopes": "openid profile",
            "clientId": "c1",
            "redirectUri": "https://app/cb",
            "state": "S",
            "nonce": "N",
        }

    def test_json_string_is_compact(self, base_values) -> None:
        request = AuthenticationRequest.from_values(**base_values, display=None)

        text = request.to_json_string()

        assert text.startswith('{"responseType":"code","host":"as.example"')
        assert json.loads(text) == request.to_json()

    def test_unserializable_request_fails(self) -> None:
        request = AuthenticationRequest(scopes=(Scope.OPENID,), state=None, nonce="n")

        with pytest.raises(InvalidAuthenticationRequestError):
            request.to_json()


class TestRoundTrip:
    def test_minimal_request(self, base_values) -> None:
        # Arrange
        request = AuthenticationRequest.from_values(**base_values)

        # Act
        decoded = AuthenticationRequest.from_json(request.to_json())

        # Assert
        assert decoded == request
        assert decoded.scopes == (Scope.OPENID, Scope.PROFILE)

    def test_full_request(self, base_values) -> None:
        request = full_request(base_values)
        assert AuthenticationRequest.from_json(request.to_json()) == request

    def test_request_without_host_or_display(self) -> None:
        request = AuthenticationRequest.from_values(
            scopes=[Scope.PROFILE, Scope.OPENID], display=None
        )
        assert AuthenticationRequest.from_json(request.to_json()) == request

    def test_json_string(self, base_values) -> None:
        request = full_request(base_values)
        decoded = AuthenticationRequest.from_json_string(request.to_json_string())
        assert decoded == request

    def test_allow_registration_false_survives(self, base_values) -> None:
        request = AuthenticationRequest.from_values(
            **base_values, allow_registration=False
        )

        decoded = AuthenticationRequest.from_json(request.to_json())

        assert decoded.allow_registration is False


class TestFromJson:
    def setup_method(self):
        self.data = {
            "responseType": "code",
            "host": "as.example",
            "scopes": "openid profile",
            "clientId": "c1",
            "redirectUri": "https://app/cb",
            "state": "S",
            "nonce": "N",
        }

    def test_unknown_keys_are_ignored(self) -> None:
        # Arrange
        self.data["uiLocales"] = "en"

        # Act
        request = AuthenticationRequest.from_json(self.data)

        # Assert
        assert request.client_id == "c1"

    def test_missing_optional_keys_are_absent(self) -> None:
        request = AuthenticationRequest.from_json(self.data)

        assert request.display is None
        assert request.prompt is None
        assert request.allow_registration is None

    def test_null_optional_values_are_absent(self) -> None:
        self.data["display"] = None
        self.data["allowRegistration"] = None

        request = AuthenticationRequest.from_json(self.data)

        assert request.display is None
        assert request.allow_registration is None

    def test_no_defaults_are_applied(self) -> None:
        self.data["scopes"] = "profile"

        fields = decode_fields(self.data)

        assert fields["scopes"] == (Scope.PROFILE,)
        assert fields["display"] is None

    @pytest.mark.parametrize("key", ["responseType", "scopes", "state", "nonce"])
    def test_missing_required_key(self, key) -> None:
        del self.data[key]

        with pytest.raises(AuthenticationRequestDecodeError):
            AuthenticationRequest.from_json(self.data)

    @pytest.mark.parametrize(
        "key, value",
        [
            ("scopes", ["openid", "profile"]),
            ("state", 42),
            ("allowRegistration", "true"),
            ("responseType", "token"),
        ],
    )
    def test_wrong_value_types(self, key, value) -> None:
        self.data[key] = value

        with pytest.raises(AuthenticationRequestDecodeError):
            AuthenticationRequest.from_json(self.data)

    @pytest.mark.parametrize(
        "key, value",
        [
            ("scopes", "openid offline_access"),
            ("scopes", "openid  profile"),
            ("display", "fullscreen"),
            ("prompt", "LOGIN"),
            ("vectorOfTrust", "P9.Cp.Cd"),
        ],
    )
    def test_unknown_enum_values(self, key, value) -> None:
        self.data[key] = value

        with pytest.raises(AuthenticationRequestDecodeError):
            AuthenticationRequest.from_json(self.data)

    @pytest.mark.parametrize("data", [None, [], "openid", 3])
    def test_non_object_input(self, data) -> None:
        with pytest.raises(AuthenticationRequestDecodeError):
            AuthenticationRequest.from_json(data)

    def test_invalid_utf8_bytes(self) -> None:
        with pytest.raises(AuthenticationRequestDecodeError, match="not valid JSON"):
            AuthenticationRequest.from_json_string(b'{"state": "\xff"}')

    def test_utf8_bytes_are_accepted(self) -> None:
        request = AuthenticationRequest.from_json_string(
            json.dumps(self.data).encode("utf-8")
        )
        assert request.client_id == "c1"

    def test_response_type_is_fixed(self) -> None:
        request = AuthenticationRequest.from_json(self.data)
        assert request.response_type == "code"

    def test_invalid_json_text(self) -> None:
        with pytest.raises(AuthenticationRequestDecodeError, match="not valid JSON"):
            AuthenticationRequest.from_json_string("{not json")
