"""Display modes for the NHS login user interface."""

from __future__ import annotations

from enum import Enum


class Display(Enum):
    """How the Platform displays its authentication and consent pages.

    POPUP and WAP are part of OpenID Connect but NHS login does not
    support them.
    """

    PAGE = "page"
    TOUCH = "touch"
    POPUP = "popup"
    WAP = "wap"

    @property
    def is_supported(self) -> bool:
        return self not in (Display.POPUP, Display.WAP)

    def encode(self) -> str:
        """Canonical name sent on the wire, e.g. "page"."""
        return self.value

    @classmethod
    def decode(cls, value: str) -> Display:
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown display: {value!r}") from None
