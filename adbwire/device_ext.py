"""Operations common to every kind of ADB device."""

from __future__ import annotations

import io
import os
from abc import ABC, abstractmethod
from typing import BinaryIO

from PIL import Image

from .models import AdbStatResponse, RebootType


class ADBDevice(ABC):
    """Interface shared by all devices, with operations built on top of it."""

    @abstractmethod
    def shell_command(self, command: list[str], output: BinaryIO) -> None:
        """Run ``command`` in a device shell, writing its output to ``output``."""

    @abstractmethod
    def shell(self, reader: BinaryIO, writer: BinaryIO) -> None:
        """Run an interactive shell fed from ``reader``, answering into ``writer``."""

    @abstractmethod
    def stat(self, remote_path: str) -> AdbStatResponse:
        """Stat a file on the device."""

    @abstractmethod
    def pull(self, source: str, output: BinaryIO) -> None:
        """Copy remote file ``source`` into ``output``."""

    @abstractmethod
    def push(self, stream: BinaryIO, path: str) -> None:
        """Copy ``stream`` to ``path`` on the device."""

    @abstractmethod
    def reboot(self, reboot_type: RebootType) -> None:
        """Reboot the device into the given mode."""

    @abstractmethod
    def install(self, apk_path: str | os.PathLike) -> None:
        """Install the APK at ``apk_path``."""

    @abstractmethod
    def uninstall(self, package: str) -> None:
        """Remove ``package`` from the device."""

    @abstractmethod
    def framebuffer_image(self) -> Image.Image:
        """Fetch the device framebuffer as an RGBA image."""

    def run_activity(self, package: str, activity: str) -> bytes:
        """Start ``activity`` of ``package`` and return the command output."""
        output = io.BytesIO()
        self.shell_command(["am", "start", f"{package}/{package}.{activity}"], output)
        return output.getvalue()

    def framebuffer(self, path: str | os.PathLike) -> None:
        """Save the framebuffer to ``path``; the format follows its extension."""
        self.framebuffer_image().save(path)

    def framebuffer_bytes(self) -> bytes:
        """Return the framebuffer encoded as PNG."""
        buffer = io.BytesIO()
        self.framebuffer_image().save(buffer, format="PNG")
        return buffer.getvalue()