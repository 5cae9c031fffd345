"""Prompt hints controlling whether NHS login asks the user to sign in."""

from __future__ import annotations

from enum import Enum


class Prompt(Enum):
    """Force a sign-in, or ask the Platform not to prompt at all (SSO).

    The value of each member is its wire value; it is not the member name.
    """

    NONE = "none"
    LOGIN = "login"

    @property
    def wire_value(self) -> str:
        return self.value

    def encode(self) -> str:
        return self.wire_value

    @classmethod
    def decode(cls, value: str) -> Prompt:
        for prompt in cls:
            if prompt.wire_value == value:
                return prompt
        raise ValueError(f"Unknown prompt: {value!r}")
