"""Writable streams that forward data as ADB WRITE messages."""

from __future__ import annotations

import io

from .message import MessageCommand, TransportMessage
from .session import MessageTransport


class _StreamWriter(io.RawIOBase):
    def __init__(self, transport: MessageTransport, local_id: int, remote_id: int) -> None:
        super().__init__()
        self.transport = transport
        self.local_id = local_id
        self.remote_id = remote_id

    def writable(self) -> bool:
        return True

    def _send(self, data: bytes) -> int:
        payload = bytes(data)
        self.transport.write_message(
            TransportMessage.create(MessageCommand.WRITE, self.local_id, self.remote_id, payload)
        )
        return len(payload)


class MessageWriter(_StreamWriter):
    """Sends each write as a WRITE message and requires an OKAY answer."""

    def __init__(self, transport: MessageTransport, local_id: int, remote_id: int) -> None:
        super().__init__(transport, local_id, remote_id)

    def write(self, data: bytes) -> int:
        size = self._send(data)
        self.transport.read_message().assert_command(MessageCommand.OKAY)
        return size


class ShellMessageWriter(_StreamWriter):
    """Sends each write as a WRITE message without waiting for an answer."""

    def __init__(self, transport: MessageTransport, local_id: int, remote_id: int) -> None:
        super().__init__(transport, local_id, remote_id)

    def write(self, data: bytes) -> int:
        return self._send(data)