"""Exceptions raised by the adbwire package."""

from __future__ import annotations


class ADBError(Exception):
    """Base class for every error raised by this package."""


class RequestFailedError(ADBError):
    """An ADB request failed."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"ADB request failed - {detail}")


class UnknownResponseTypeError(ADBError):
    """The remote side answered with an unknown response type."""

    def __init__(self, response: str) -> None:
        self.response = response
        super().__init__(f"Unknown response type {response}")


class WrongResponseError(ADBError):
    """A different command than the expected one was received."""

    def __init__(self, received: str, expected: str) -> None:
        self.received = received
        self.expected = expected
        super().__init__(f"Wrong response command received: {received}. Expected {expected}")


class ConversionError(ADBError):
    """A value could not be converted to or from its wire form."""

    def __init__(self, message: str = "Conversion error") -> None:
        super().__init__(message)


class ShellNotSupportedError(ADBError):
    """The remote side does not support the shell feature."""

    def __init__(self, message: str = "Remote ADB server does not support shell feature") -> None:
        super().__init__(message)


class DeviceNotFoundError(ADBError):
    """The requested device could not be found."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Device not found: {detail}")


class FramebufferConversionError(ADBError):
    """Framebuffer content could not be turned into an image."""

    def __init__(self, message: str = "Cannot convert framebuffer into image") -> None:
        super().__init__(message)


class UnimplementedFramebufferVersionError(ADBError):
    """The device sent a framebuffer header version that is not handled."""

    def __init__(self, version: int) -> None:
        self.version = version
        super().__init__(f"Unimplemented framebuffer image version: {version}")


class InvalidIntegrityError(ADBError):
    """The checksum of a received message does not match its payload."""

    def __init__(self, expected: int, got: int) -> None:
        self.expected = expected
        self.got = got
        super().__init__(f"Invalid integrity. Expected CRC32 {expected}, got {got}")


class WrongFileExtensionError(ADBError):
    """A path does not carry the expected file extension."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"wrong file extension: {detail}")