"""Commands understood by the console of an Android emulator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class _Kind(Enum):
    AUTHENTICATE = "auth {0}"
    SMS = "sms send {0} {1}"
    ROTATE = "rotate"


@dataclass(frozen=True)
class EmulatorCommand:
    """A single console command; its text form is newline terminated."""

    kind: _Kind
    args: tuple = ()

    @classmethod
    def authenticate(cls, token: str) -> EmulatorCommand:
        """Authenticate against the console with ``token``."""
        return cls(_Kind.AUTHENTICATE, (token,))

    @classmethod
    def sms(cls, phone_number: str, content: str) -> EmulatorCommand:
        """Deliver an SMS with ``content`` coming from ``phone_number``."""
        return cls(_Kind.SMS, (phone_number, content))

    @classmethod
    def rotate(cls) -> EmulatorCommand:
        """Rotate the emulator screen."""
        return cls(_Kind.ROTATE)

    @property
    def skip_response_lines(self) -> int:
        """Number of response lines to skip before the command's status."""
        return 1 if self.kind is _Kind.AUTHENTICATE else 0

    def __str__(self) -> str:
        return self.kind.value.format(*self.args) + "\n"