"""High level device commands over a message based ADB transport."""

from __future__ import annotations

import os
import shutil
import struct
import threading
from pathlib import Path
from typing import BinaryIO

from PIL import Image

from .device_ext import ADBDevice
from .errors import (
    FramebufferConversionError,
    RequestFailedError,
    ShellNotSupportedError,
    UnimplementedFramebufferVersionError,
    UnknownResponseTypeError,
    WrongFileExtensionError,
)
from .message import BUFFER_SIZE, MessageCommand, MessageSubcommand, TransportMessage
from .models import AdbStatResponse, FrameBufferInfoV1, FrameBufferInfoV2, RebootType
from .session import MessageSession, MessageTransport
from .writers import MessageWriter, ShellMessageWriter

_SUCCESS = b"Success\n"
_PULL_ACK_TIMEOUT = 4.0


def _check_extension_is_apk(path: Path) -> None:
    if path.suffix != ".apk":
        raise WrongFileExtensionError(str(path))


class MessageDevice(MessageSession, ADBDevice):
    """A device spoken to directly with ADB transport messages."""

    def __init__(self, transport: MessageTransport) -> None:
        super().__init__(transport)

    def shell_command(self, command: list[str], output: BinaryIO) -> None:
        """Run ``command`` in a device shell and write what it prints to ``output``."""
        response = self.open_session(f"shell:{' '.join(command)}\0".encode())
        if response.command != MessageCommand.OKAY:
            raise RequestFailedError(f"wrong command {response.command}")

        while True:
            message = self.transport.read_message()
            if message.command != MessageCommand.WRITE:
                break
            output.write(message.payload)

    def _pump_shell_output(self, writer: BinaryIO, local_id: int, remote_id: int) -> None:
        while True:
            message = self.transport.read_message()
            self.transport.write_message(
                TransportMessage.create(MessageCommand.OKAY, local_id, remote_id)
            )
            if message.command == MessageCommand.WRITE:
                writer.write(message.payload)
                writer.flush()
            elif message.command != MessageCommand.OKAY:
                raise ShellNotSupportedError()

    def _shell_reader_thread(self, writer: BinaryIO, local_id: int, remote_id: int) -> None:
        try:
            self._pump_shell_output(writer, local_id, remote_id)
        except Exception:  # the session ends when the device stops answering
            return

    def shell(self, reader: BinaryIO, writer: BinaryIO) -> None:
        """Run an interactive shell: input comes from ``reader``, output goes to ``writer``."""
        self.open_session(b"shell:\0")
        local_id, remote_id = self.local_id, self.remote_id

        threading.Thread(
            target=self._shell_reader_thread,
            args=(writer, local_id, remote_id),
            daemon=True,
        ).start()

        shell_writer = ShellMessageWriter(self.transport, local_id, remote_id)
        read = getattr(reader, "read1", reader.read)
        try:
            while chunk := read(BUFFER_SIZE):
                shell_writer.write(chunk)
        except BrokenPipeError:
            return

    def stat(self, remote_path: str) -> AdbStatResponse:
        """Stat ``remote_path`` through a dedicated sync stream."""
        self.begin_synchronization()
        response = self.stat_with_explicit_ids(remote_path)
        self.end_transaction()
        return response

    def pull(self, source: str, output: BinaryIO) -> None:
        """Copy the remote file ``source`` into ``output``."""
        self.begin_synchronization()
        stat = self.stat_with_explicit_ids(source)
        if stat.file_perm == 0:
            raise UnknownResponseTypeError("mode is 0: source file does not exist")

        self.transport.write_message(
            TransportMessage.create(MessageCommand.OKAY, self.local_id, self.remote_id),
            _PULL_ACK_TIMEOUT,
        )

        path = source.encode()
        self.send_and_expect_okay(self._write(MessageSubcommand.RECV.with_arg(len(path))))
        self.send_and_expect_okay(self._write(path))

        self.recv_file(output)
        self.end_transaction()

    def push(self, stream: BinaryIO, path: str) -> None:
        """Copy ``stream`` to ``path`` on the device, with mode 0777."""
        self.begin_synchronization()

        header = f"{path},0777".encode()
        self.send_and_expect_okay(
            self._write(MessageSubcommand.SEND.with_arg(len(header)) + header)
        )
        self.push_file(self.local_id, self.remote_id, stream)
        self.end_transaction()

    def reboot(self, reboot_type: RebootType) -> None:
        """Reboot the device into ``reboot_type``."""
        self.open_session(f"reboot:{reboot_type}\0".encode())
        self.transport.read_message().assert_command(MessageCommand.OKAY)

    def install(self, apk_path: str | os.PathLike) -> None:
        """Install the APK file at ``apk_path``."""
        path = Path(apk_path)
        with path.open("rb") as apk_file:
            _check_extension_is_apk(path)
            size = os.fstat(apk_file.fileno()).st_size

            self.open_session(f"exec:cmd package 'install' -S {size}\0".encode())
            writer = MessageWriter(self.transport, self.local_id, self.remote_id)
            shutil.copyfileobj(apk_file, writer, BUFFER_SIZE)

        status = self.transport.read_message().payload
        if status != _SUCCESS:
            raise RequestFailedError(status.decode("utf-8"))

    def uninstall(self, package: str) -> None:
        """Remove ``package`` from the device."""
        self.open_session(f"exec:cmd package 'uninstall' {package}\0".encode())
        status = self.transport.read_message().payload
        if status != _SUCCESS:
            raise RequestFailedError(status.decode("utf-8"))

    def framebuffer_image(self) -> Image.Image:
        """Fetch the device framebuffer as an RGBA image."""
        self.open_session(b"framebuffer:\0")
        payload = self.recv_and_reply_okay().payload

        if len(payload) < 4:
            raise FramebufferConversionError()
        (version,) = struct.unpack_from("<I", payload)

        info: FrameBufferInfoV1 | FrameBufferInfoV2
        if version == 1:
            info = FrameBufferInfoV1.from_bytes(payload[4:])
            offset = 4 + FrameBufferInfoV1.SIZE
        elif version == 2:
            info = FrameBufferInfoV2.from_bytes(payload[4:])
            offset = 4 + FrameBufferInfoV2.SIZE
        else:
            raise UnimplementedFramebufferVersionError(version)

        data = bytearray(payload[offset:])
        while len(data) < info.size:
            data += self.recv_and_reply_okay().payload

        needed = info.width * info.height * 4
        if len(data) < needed:
            raise FramebufferConversionError()
        image = Image.frombytes("RGBA", (info.width, info.height), bytes(data[:needed]))

        self.transport.read_message().assert_command(MessageCommand.CLSE)
        return image