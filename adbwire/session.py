"""Session state and sync helpers over a message based ADB transport."""

from __future__ import annotations

import random
import struct
from typing import BinaryIO, Protocol

from .errors import ConversionError, RequestFailedError
from .message import BUFFER_SIZE, MessageCommand, MessageSubcommand, TransportMessage
from .models import AdbStatResponse


class MessageTransport(Protocol):
    """A transport able to exchange whole ADB messages."""

    def read_message(self, timeout: float | None = None) -> TransportMessage:
        """Receive the next message."""

    def write_message(self, message: TransportMessage, timeout: float | None = None) -> None:
        """Send ``message``."""


class MessageSession:
    """An ADB device reached over a message transport, with its stream ids."""

    def __init__(self, transport: MessageTransport) -> None:
        self.transport = transport
        self._local_id: int | None = None
        self._remote_id: int | None = None

    @property
    def local_id(self) -> int:
        """Our id of the open stream."""
        if self._local_id is None:
            raise RequestFailedError("connection not opened, no local_id")
        return self._local_id

    @property
    def remote_id(self) -> int:
        """The device's id of the open stream."""
        if self._remote_id is None:
            raise RequestFailedError("connection not opened, no remote_id")
        return self._remote_id

    def _write(self, payload: bytes) -> TransportMessage:
        return TransportMessage.create(MessageCommand.WRITE, self.local_id, self.remote_id, payload)

    def recv_and_reply_okay(self) -> TransportMessage:
        """Receive a message and acknowledge it with OKAY."""
        message = self.transport.read_message()
        self.transport.write_message(
            TransportMessage.create(MessageCommand.OKAY, self.local_id, self.remote_id)
        )
        return message

    def send_and_expect_okay(self, message: TransportMessage) -> TransportMessage:
        """Send ``message`` and require an OKAY answer, which is returned."""
        self.transport.write_message(message)
        response = self.transport.read_message()
        response.assert_command(MessageCommand.OKAY)
        return response

    def recv_file(self, output: BinaryIO) -> None:
        """Receive a file sent by the sync protocol and write it to ``output``."""
        pending: int | None = None
        while True:
            payload = self.recv_and_reply_okay().payload
            size = len(payload)
            pos = 0
            while pos != size:
                current, pending = pending, None
                if not current:
                    pos += 4
                    if pos + 4 > size:
                        raise ConversionError("truncated sync chunk header")
                    (pending,) = struct.unpack_from("<I", payload, pos)
                    pos += 4
                    continue
                remaining = size - pos
                if current < remaining:
                    output.write(payload[pos : pos + current])
                    pos += current
                else:
                    output.write(payload[pos:])
                    pending = current - remaining
                    break
            if size < 8:
                raise ConversionError("sync payload too short")
            (marker,) = struct.unpack_from("<I", payload, size - 8)
            if marker == MessageSubcommand.DONE:
                return

    def push_file(self, local_id: int, remote_id: int, reader: BinaryIO) -> None:
        """Send the content of ``reader`` as DATA chunks, then DONE."""

        def send(payload: bytes) -> None:
            self.send_and_expect_okay(
                TransportMessage.create(MessageCommand.WRITE, local_id, remote_id, payload)
            )

        chunk = reader.read(BUFFER_SIZE) or b""
        send(MessageSubcommand.DATA.with_arg(len(chunk)) + chunk)
        while chunk := reader.read(BUFFER_SIZE):
            send(MessageSubcommand.DATA.with_arg(len(chunk)) + chunk)

        # File mtime is not forwarded.
        send(MessageSubcommand.DONE.with_arg(0))
        received = self.transport.read_message()
        if received.command != MessageCommand.WRITE:
            raise RequestFailedError(f"Wrong command received {received.command}")

    def begin_synchronization(self) -> None:
        """Open a sync stream."""
        self.open_session(b"sync:\0")

    def stat_with_explicit_ids(self, remote_path: str) -> AdbStatResponse:
        """Stat ``remote_path`` on the already opened sync stream."""
        path = remote_path.encode()
        self.send_and_expect_okay(self._write(MessageSubcommand.STAT.with_arg(len(path))))
        self.send_and_expect_okay(self._write(path))
        response = self.transport.read_message()
        # The first four bytes repeat the literal "STAT".
        return AdbStatResponse.from_bytes(response.payload[4:])

    def end_transaction(self) -> None:
        """Quit the sync stream and consume the closing message."""
        self.send_and_expect_okay(self._write(MessageSubcommand.QUIT.with_arg(0)))
        self.transport.read_message()

    def open_session(self, data: bytes) -> TransportMessage:
        """Open a stream for service ``data`` and remember both stream ids."""
        message = TransportMessage.create(MessageCommand.OPEN, random.getrandbits(32), 0, data)
        self.transport.write_message(message)
        response = self.transport.read_message()
        self._local_id = response.header.arg1
        self._remote_id = response.header.arg0
        return response