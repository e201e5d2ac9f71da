import io

import pytest
from PIL import Image

from adbwire.device_ext import ADBDevice
from adbwire.models import AdbStatResponse


class FakeDevice(ADBDevice):
    def __init__(self):
        self.commands = []
        self.image = Image.new("RGBA", (3, 2), (10, 20, 30, 255))

    def shell_command(self, command, output):
        self.commands.append(list(command))
        output.write(" ".join(command).encode())

    def shell(self, reader, writer):
        writer.write(reader.read())

    def stat(self, remote_path):
        return AdbStatResponse(0, 0, 0)

    def pull(self, source, output):
        output.write(source.encode())

    def push(self, stream, path):
        self.commands.append([path, stream.read()])

    def reboot(self, reboot_type):
        self.commands.append([str(reboot_type)])

    def install(self, apk_path):
        self.commands.append([str(apk_path)])

    def uninstall(self, package):
        self.commands.append([package])

    def framebuffer_image(self):
        return self.image


def test_interface_cannot_be_instantiated():
    with pytest.raises(TypeError):
        ADBDevice()


def test_run_activity_builds_am_start_command():
    device = FakeDevice()
    output = ADBDevice.run_activity(device, "com.example.app", "MainActivity")
    assert device.commands == [["am", "start", "com.example.app/com.example.app.MainActivity"]]
    assert output == b"am start com.example.app/com.example.app.MainActivity"


def test_framebuffer_bytes_is_png_round_trip():
    device = FakeDevice()
    data = ADBDevice.framebuffer_bytes(device)
    assert data.startswith(b"\x89PNG\r\n\x1a\n")
    decoded = Image.open(io.BytesIO(data))
    assert decoded.size == (3, 2)
    assert decoded.convert("RGBA").tobytes() == device.image.tobytes()


def test_framebuffer_saves_to_path(tmp_path):
    device = FakeDevice()
    target = tmp_path / "screen.png"
    ADBDevice.framebuffer(device, target)
    with Image.open(target) as saved:
        assert saved.format == "PNG"
        assert saved.convert("RGBA").tobytes() == device.image.tobytes()