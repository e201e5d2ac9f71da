"""Value types exchanged with an ADB server or device."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar

from .errors import ConversionError, FramebufferConversionError, UnknownResponseTypeError


class AdbRequestStatus(Enum):
    """Status word returned by an ADB server."""

    OKAY = "okay"
    FAIL = "fail"

    @classmethod
    def parse(cls, value: str) -> AdbRequestStatus:
        """Parse a status word, ignoring ASCII case."""
        lowered = value.lower()
        try:
            return cls(lowered)
        except ValueError:
            raise UnknownResponseTypeError(lowered) from None


class ServerCommandKind(Enum):
    """Kinds of requests sent to an ADB server; values are format templates."""

    VERSION = "host:version"
    KILL = "host:kill"
    DEVICES = "host:devices"
    DEVICES_LONG = "host:devices-l"
    TRACK_DEVICES = "host:track-devices"
    HOST_FEATURES = "host:features"
    CONNECT = "host:connect:{0}"
    DISCONNECT = "host:disconnect:{0}"
    PAIR = "host:pair:{1}:{0}"
    TRANSPORT_ANY = "host:transport-any"
    TRANSPORT_SERIAL = "host:transport:{0}"
    MDNS_CHECK = "host:mdns:check"
    MDNS_SERVICES = "host:mdns:services"
    SERVER_STATUS = "host:server-status"
    RECONNECT_OFFLINE = "host:reconnect-offline"
    UNINSTALL = "exec:cmd package 'uninstall' {0}"
    INSTALL = "exec:cmd package 'install' -S {0}"
    WAIT_FOR_DEVICE = "host:wait-for-{1}-{0}"
    SHELL_COMMAND = "shell,{term}raw:{0}"
    SHELL = "shell,{term}raw:"
    FRAMEBUFFER = "framebuffer:"
    SYNC = "sync:"
    REBOOT = "reboot:{0}"
    FORWARD = "host:forward:{1};{0}"
    FORWARD_REMOVE_ALL = "host:killforward-all"
    REVERSE = "reverse:forward:{0};{1}"
    REVERSE_REMOVE_ALL = "reverse:killforward-all"
    RECONNECT = "reconnect"
    TCPIP = "tcpip:{0}"
    USB = "usb:"


def _render(arg: Any) -> str:
    if isinstance(arg, tuple) and len(arg) == 2:
        host, port = arg
        return f"{host}:{port}"
    return str(arg)


@dataclass(frozen=True)
class ServerCommand:
    """A request to an ADB server together with its arguments.

    Argument order follows the request: ``PAIR`` takes (address, code),
    ``FORWARD`` and ``REVERSE`` take (remote, local), ``WAIT_FOR_DEVICE``
    takes (state, transport). Addresses may be ``"host:port"`` strings or
    ``(host, port)`` tuples.
    """

    kind: ServerCommandKind
    args: tuple = ()

    def __str__(self) -> str:
        term = os.environ.get("TERM")
        term_part = f"TERM={term}," if term is not None else ""
        rendered = [_render(a) for a in self.args]
        return self.kind.value.format(*rendered, term=term_part)


@dataclass(frozen=True)
class AdbStatResponse:
    """Answer to a ``stat`` request."""

    file_perm: int
    file_size: int
    mod_time: int

    SIZE: ClassVar[int] = 12

    @classmethod
    def from_bytes(cls, data: bytes) -> AdbStatResponse:
        """Decode the first 12 bytes of ``data`` as three little-endian u32."""
        if len(data) < cls.SIZE:
            raise ConversionError()
        return cls(*struct.unpack_from("<3I", data))

    def __str__(self) -> str:
        moment = datetime.fromtimestamp(self.mod_time, tz=timezone.utc)
        stamp = moment.strftime("%Y-%m-%d %H:%M:%S")
        return (
            f"File permissions: {self.file_perm}\n"
            f"File size: {self.file_size} bytes\n"
            f"Modification time: {stamp}.{moment.microsecond * 1000:09d} UTC"
        )


def _unpack_u32_fields(cls: type, data: bytes) -> Any:
    count = len(fields(cls))
    if len(data) < count * 4:
        raise FramebufferConversionError()
    return cls(*struct.unpack_from(f"<{count}I", data))


@dataclass(frozen=True)
class FrameBufferInfoV1:
    """Framebuffer header, version 1 (RGBA_8888)."""

    bpp: int
    size: int
    width: int
    height: int
    red_offset: int
    red_length: int
    blue_offset: int
    blue_length: int
    green_offset: int
    green_length: int
    alpha_offset: int
    alpha_length: int

    SIZE: ClassVar[int] = 48

    @classmethod
    def from_bytes(cls, data: bytes) -> FrameBufferInfoV1:
        """Decode a header from little-endian u32 values."""
        return _unpack_u32_fields(cls, data)


@dataclass(frozen=True)
class FrameBufferInfoV2:
    """Framebuffer header, version 2 (RGBX_8888)."""

    bpp: int
    color_space: int
    size: int
    width: int
    height: int
    red_offset: int
    red_length: int
    blue_offset: int
    blue_length: int
    green_offset: int
    green_length: int
    alpha_offset: int
    alpha_length: int

    SIZE: ClassVar[int] = 52

    @classmethod
    def from_bytes(cls, data: bytes) -> FrameBufferInfoV2:
        """Decode a header from little-endian u32 values."""
        return _unpack_u32_fields(cls, data)


class HostFeatures(Enum):
    """Features an ADB server may advertise."""

    SHELL_V2 = b"shell_v2"
    CMD = b"cmd"

    @classmethod
    def from_bytes(cls, value: bytes) -> HostFeatures:
        """Parse a feature name; raise ValueError for unknown ones."""
        try:
            return cls(bytes(value))
        except ValueError:
            raise ValueError(f"Unknown value {value!r}") from None

    def __str__(self) -> str:
        return "ShellV2" if self is HostFeatures.SHELL_V2 else "Cmd"


class RebootType(Enum):
    """Mode to reboot a device into."""

    SYSTEM = ""
    BOOTLOADER = "bootloader"
    RECOVERY = "recovery"
    SIDELOAD = "sideload"
    SIDELOAD_AUTO_REBOOT = "sideload-auto-reboot"
    FASTBOOT = "fastboot"

    def __str__(self) -> str:
        return self.value


class SyncCommand(Enum):
    """Requests of the sync protocol."""

    LIST = "LIST"
    RECV = "RECV"
    SEND = "SEND"
    STAT = "STAT"

    def __str__(self) -> str:
        return self.value