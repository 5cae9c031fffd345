"""Random token generation for state and nonce values.

Tokens are drawn from an injectable source so tests can use a
deterministic one. The default source is backed by the operating
system's CSPRNG and is never seeded.
"""

from __future__ import annotations

import secrets
import string
from collections.abc import Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")

TOKEN_ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
TOKEN_LENGTH = 50


class RandomSource(Protocol):
    """Anything that can pick an element uniformly from a sequence."""

    def choice(self, seq: Sequence[T]) -> T: ...


_system_random = secrets.SystemRandom()


def random_token(
    source: RandomSource | None = None, length: int = TOKEN_LENGTH
) -> str:
    """Generate an alphanumeric token suitable for state or nonce.

    Args:
        source: Random source to draw from. Defaults to the system CSPRNG.
        length: Number of characters, 50 unless overridden

    Returns:
        A string of ``length`` characters from ``[0-9a-zA-Z]``
    """
    source = source or _system_random
    return "".join(source.choice(TOKEN_ALPHABET) for _ in range(length))
