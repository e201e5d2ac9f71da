"""Messages of the ADB transport protocol."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar

from .errors import ConversionError, WrongResponseError

BUFFER_SIZE = 65536

AUTH_TOKEN = 1
AUTH_SIGNATURE = 2
AUTH_RSAPUBLICKEY = 3

_MASK = 0xFFFFFFFF


class MessageCommand(IntEnum):
    """Command identifier at the start of each transport message."""

    CNXN = 0x4E584E43
    CLSE = 0x45534C43
    AUTH = 0x48545541
    OPEN = 0x4E45504F
    WRITE = 0x45545257
    OKAY = 0x59414B4F
    STLS = 0x534C5453

    def __str__(self) -> str:
        return "WRTE" if self is MessageCommand.WRITE else self.name


class MessageSubcommand(IntEnum):
    """Requests of the sync sub-protocol."""

    STAT = 0x54415453
    SEND = 0x444E4553
    RECV = 0x56434552
    QUIT = 0x54495551
    FAIL = 0x4C494146
    DONE = 0x454E4F44
    DATA = 0x41544144
    LIST = 0x5453494C

    def with_arg(self, arg: int) -> bytes:
        """Encode this subcommand followed by a u32 argument, little-endian."""
        return struct.pack("<II", int(self), arg & _MASK)


def compute_crc32(data: bytes) -> int:
    """Checksum used by ADB: the byte sum, truncated to 32 bits."""
    return sum(data) & _MASK


def compute_magic(command: MessageCommand) -> int:
    """Magic field of a header: the command with every bit inverted."""
    return int(command) ^ _MASK


@dataclass(frozen=True)
class MessageHeader:
    """The fixed 24-byte header of a transport message."""

    command: MessageCommand
    arg0: int
    arg1: int
    data_length: int
    data_crc32: int
    magic: int

    SIZE: ClassVar[int] = 24
    _FORMAT: ClassVar[str] = "<6I"

    @classmethod
    def create(cls, command: MessageCommand, arg0: int, arg1: int, data: bytes) -> MessageHeader:
        """Build the header describing ``data``."""
        return cls(
            command=command,
            arg0=arg0,
            arg1=arg1,
            data_length=len(data),
            data_crc32=compute_crc32(data),
            magic=compute_magic(command),
        )

    def to_bytes(self) -> bytes:
        """Serialize to the little-endian wire form."""
        try:
            return struct.pack(
                self._FORMAT,
                int(self.command),
                self.arg0,
                self.arg1,
                self.data_length,
                self.data_crc32,
                self.magic,
            )
        except struct.error as exc:
            raise ConversionError() from exc

    @classmethod
    def from_bytes(cls, data: bytes) -> MessageHeader:
        """Parse a 24-byte header; raise ConversionError on bad input."""
        if len(data) != cls.SIZE:
            raise ConversionError()
        raw_command, arg0, arg1, length, crc, magic = struct.unpack(cls._FORMAT, data)
        try:
            command = MessageCommand(raw_command)
        except ValueError:
            raise ConversionError() from None
        return cls(command, arg0, arg1, length, crc, magic)


@dataclass
class TransportMessage:
    """A header with its payload."""

    header: MessageHeader
    payload: bytes = field(default=b"")

    @classmethod
    def create(cls, command: MessageCommand, arg0: int, arg1: int, data: bytes = b"") -> TransportMessage:
        """Build a message carrying ``data``."""
        payload = bytes(data)
        return cls(MessageHeader.create(command, arg0, arg1, payload), payload)

    @property
    def command(self) -> MessageCommand:
        return self.header.command

    def check_integrity(self) -> bool:
        """Whether magic and checksum agree with command and payload."""
        return (
            compute_magic(self.header.command) == self.header.magic
            and compute_crc32(self.payload) == self.header.data_crc32
        )

    def assert_command(self, expected: MessageCommand) -> None:
        """Raise WrongResponseError unless this message carries ``expected``."""
        ours = self.header.command
        if ours != expected:
            raise WrongResponseError(str(ours), str(expected))