"""Deployment settings for an NHS login relying party.

Settings come from environment variables, optionally loaded from a
``.env`` file:

- NHS_LOGIN_HOST: authorize endpoint host (required)
- NHS_LOGIN_CLIENT_ID: registered client identifier (required)
- NHS_LOGIN_REDIRECT_URI: registered redirection URI (required)
- NHS_LOGIN_SCOPES: space-separated scopes, defaults to "openid"
- NHS_LOGIN_VTR: vector of trust, e.g. ["P9.Cp.Cd","P9.Cp.Ck","P9.Cm"]
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlparse

from dotenv import dotenv_values, find_dotenv

from nhs_login.models.errors import ConfigurationError
from nhs_login.models.scope import Scope, split_scopes
from nhs_login.models.vector_of_trust import VectorOfTrust

logger = logging.getLogger(__name__)

ENV_PREFIX = "NHS_LOGIN_"


@dataclass(frozen=True)
class NhsLoginSettings:
    host: str
    client_id: str
    redirect_uri: str
    scopes: tuple[Scope, ...] = (Scope.OPENID,)
    vector_of_trust: VectorOfTrust | None = None

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> NhsLoginSettings:
        """Load settings from the environment.

        Variables already set in the environment win over the ``.env`` file.
        The file is read without modifying ``os.environ``.

        Args:
            env_file: Path to a .env file. When None, python-dotenv searches
                for one from the current directory upwards.

        Raises:
            ConfigurationError: If a required variable is missing or a value
                cannot be parsed
        """
        file_values = dotenv_values(env_file or find_dotenv(usecwd=True))
        env = {
            **{key: value for key, value in file_values.items() if value is not None},
            **os.environ,
        }

        host = _required(env, "HOST")
        client_id = _required(env, "CLIENT_ID")
        redirect_uri = _required(env, "REDIRECT_URI")

        raw_scopes = env.get(f"{ENV_PREFIX}SCOPES", Scope.OPENID.encode()).strip()
        try:
            scopes = split_scopes(" ".join(raw_scopes.split()))
        except ValueError as e:
            raise ConfigurationError(f"Invalid {ENV_PREFIX}SCOPES: {e}") from e

        vector_of_trust = None
        raw_vtr = env.get(f"{ENV_PREFIX}VTR")
        if raw_vtr:
            try:
                vector_of_trust = VectorOfTrust.parse(raw_vtr)
            except ValueError as e:
                raise ConfigurationError(f"Invalid {ENV_PREFIX}VTR: {e}") from e

        parsed = urlparse(redirect_uri)
        if parsed.scheme == "http" and parsed.hostname != "localhost":
            logger.warning(
                f"Redirect URI {redirect_uri} uses http; NHS login will reject it"
            )

        return cls(
            host=host,
            client_id=client_id,
            redirect_uri=redirect_uri,
            scopes=scopes,
            vector_of_trust=vector_of_trust,
        )


def _required(env: Mapping[str, str], name: str) -> str:
    value = env.get(f"{ENV_PREFIX}{name}", "").strip()
    if not value:
        raise ConfigurationError(f"{ENV_PREFIX}{name} is not set")
    return value
