"""Vector of Trust requests (RFC 8485) as used by NHS login.

A vector combines an identity proofing level (P0, P5, P9) with one or
more credential components:

- Cp: password
- Cd: device with a registered second factor
- Ck: cryptographic key (e.g. FIDO)
- Cm: multi-factor authentication

A request lists the vectors the client accepts, serialized as a compact
JSON array of strings: ``["P9.Cp.Cd","P9.Cp.Ck","P9.Cm"]``.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

IDENTITY_LEVELS = ("P0", "P5", "P9")

_VECTOR_PATTERN = re.compile(r"^P[059](\.C[pdkm])+$")


@dataclass(frozen=True)
class VectorOfTrust:
    """Requested levels of identity verification and authentication."""

    vectors: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.vectors:
            raise ValueError("A vector of trust needs at least one vector")
        for vector in self.vectors:
            if not isinstance(vector, str) or not _VECTOR_PATTERN.match(vector):
                raise ValueError(f"Invalid trust vector: {vector!r}")

    @classmethod
    def for_level(cls, level: str) -> VectorOfTrust:
        """Accept any NHS login credential combination at an identity level.

        Without a ``vtr`` the Platform assumes ``for_level("P9")``.
        """
        if level not in IDENTITY_LEVELS:
            raise ValueError(f"Unknown identity level: {level!r}")
        return cls(vectors=(f"{level}.Cp.Cd", f"{level}.Cp.Ck", f"{level}.Cm"))

    @classmethod
    def parse(cls, value: str) -> VectorOfTrust:
        """Parse the string form produced by ``str(vector_of_trust)``."""
        try:
            vectors = json.loads(value)
        except (TypeError, json.JSONDecodeError) as e:
            raise ValueError(f"Invalid vector of trust: {value!r}") from e
        if not isinstance(vectors, list):
            raise ValueError(f"Vector of trust must be a JSON array: {value!r}")
        return cls(vectors=tuple(vectors))

    def __str__(self) -> str:
        return json.dumps(list(self.vectors), separators=(",", ":"))
