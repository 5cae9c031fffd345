from collections.abc import Sequence
from typing import TypeVar

import pytest

from nhs_login.models.scope import Scope

T = TypeVar("T")


class CyclingRandomSource:
    """Deterministic source that walks the sequence in order."""

    def __init__(self) -> None:
        self.calls = 0

    def choice(self, seq: Sequence[T]) -> T:
        item = seq[self.calls % len(seq)]
        self.calls += 1
        return item


@pytest.fixture
def cycling_source() -> CyclingRandomSource:
    return CyclingRandomSource()


@pytest.fixture
def base_values() -> dict:
    return {
        "scopes": [Scope.OPENID, Scope.PROFILE],
        "host": "as.example",
        "client_id": "c1",
        "redirect_uri": "https://app/cb",
        "state": "S",
        "nonce": "N",
    }
