import struct

import pytest

from adbwire.errors import ConversionError, FramebufferConversionError, UnknownResponseTypeError
from adbwire.models import (
    AdbRequestStatus,
    AdbStatResponse,
    FrameBufferInfoV1,
    FrameBufferInfoV2,
    HostFeatures,
    RebootType,
    ServerCommand,
    ServerCommandKind,
    SyncCommand,
)


def test_pair_command():
    host = "192.168.0.197:34783"
    code = "091102"
    code_int = int(code)
    pair = ServerCommand(ServerCommandKind.PAIR, (host, code))
    assert str(pair) == f"host:pair:{code}:{host}"
    assert str(pair) != f"host:pair:{code_int}:{host}"


def test_pair_command_with_tuple_address():
    pair = ServerCommand(ServerCommandKind.PAIR, (("192.168.0.197", 34783), "091102"))
    assert str(pair) == "host:pair:091102:192.168.0.197:34783"


@pytest.mark.parametrize(
    "kind,args,expected",
    [
        (ServerCommandKind.VERSION, (), "host:version"),
        (ServerCommandKind.DEVICES_LONG, (), "host:devices-l"),
        (ServerCommandKind.TRANSPORT_SERIAL, ("emulator-5554",), "host:transport:emulator-5554"),
        (ServerCommandKind.CONNECT, ("10.0.0.2:5555",), "host:connect:10.0.0.2:5555"),
        (ServerCommandKind.FORWARD, ("tcp:1", "tcp:2"), "host:forward:tcp:2;tcp:1"),
        (ServerCommandKind.REVERSE, ("tcp:1", "tcp:2"), "reverse:forward:tcp:1;tcp:2"),
        (ServerCommandKind.TCPIP, (5555,), "tcpip:5555"),
        (ServerCommandKind.INSTALL, (1024,), "exec:cmd package 'install' -S 1024"),
        (ServerCommandKind.UNINSTALL, ("com.example",), "exec:cmd package 'uninstall' com.example"),
        (ServerCommandKind.WAIT_FOR_DEVICE, ("device", "usb"), "host:wait-for-usb-device"),
        (ServerCommandKind.REBOOT, (RebootType.RECOVERY,), "reboot:recovery"),
        (ServerCommandKind.REBOOT, (RebootType.SYSTEM,), "reboot:"),
    ],
)
def test_server_command_strings(kind, args, expected):
    assert str(ServerCommand(kind, args)) == expected


def test_shell_command_with_term(monkeypatch):
    monkeypatch.setenv("TERM", "xterm")
    assert str(ServerCommand(ServerCommandKind.SHELL_COMMAND, ("ls -l",))) == "shell,TERM=xterm,raw:ls -l"
    assert str(ServerCommand(ServerCommandKind.SHELL)) == "shell,TERM=xterm,raw:"


def test_shell_command_without_term(monkeypatch):
    monkeypatch.delenv("TERM", raising=False)
    assert str(ServerCommand(ServerCommandKind.SHELL_COMMAND, ("id",))) == "shell,raw:id"
    assert str(ServerCommand(ServerCommandKind.SHELL)) == "shell,raw:"


def test_request_status_parse():
    assert AdbRequestStatus.parse("OKAY") is AdbRequestStatus.OKAY
    assert AdbRequestStatus.parse("Fail") is AdbRequestStatus.FAIL
    with pytest.raises(UnknownResponseTypeError) as info:
        AdbRequestStatus.parse("WHAT")
    assert info.value.response == "what"


def test_stat_response_from_bytes():
    data = struct.pack("<3I", 0o100644, 42, 1700000000)
    stat = AdbStatResponse.from_bytes(data)
    assert stat == AdbStatResponse(0o100644, 42, 1700000000)


def test_stat_response_ignores_trailing_bytes():
    data = struct.pack("<3I", 1, 2, 3) + b"extra"
    assert AdbStatResponse.from_bytes(data) == AdbStatResponse(1, 2, 3)


def test_stat_response_too_short():
    with pytest.raises(ConversionError):
        AdbStatResponse.from_bytes(b"\x00" * 11)


def test_stat_response_display():
    stat = AdbStatResponse(file_perm=33188, file_size=10, mod_time=0)
    assert str(stat) == (
        "File permissions: 33188\n"
        "File size: 10 bytes\n"
        "Modification time: 1970-01-01 00:00:00.000000000 UTC"
    )


def test_framebuffer_v1_from_bytes():
    values = list(range(1, 13))
    info = FrameBufferInfoV1.from_bytes(struct.pack("<12I", *values))
    assert (info.bpp, info.size, info.width, info.height) == (1, 2, 3, 4)
    assert info.alpha_length == 12
    assert FrameBufferInfoV1.SIZE == len(struct.pack("<12I", *values))


def test_framebuffer_v2_from_bytes():
    values = list(range(100, 113))
    info = FrameBufferInfoV2.from_bytes(struct.pack("<13I", *values))
    assert (info.bpp, info.color_space, info.size, info.width, info.height) == (100, 101, 102, 103, 104)
    assert info.alpha_length == 112


def test_framebuffer_short_data():
    with pytest.raises(FramebufferConversionError):
        FrameBufferInfoV1.from_bytes(b"\x00" * 47)
    with pytest.raises(FramebufferConversionError):
        FrameBufferInfoV2.from_bytes(b"\x00" * 48)


def test_host_features():
    assert HostFeatures.from_bytes(b"shell_v2") is HostFeatures.SHELL_V2
    assert HostFeatures.from_bytes(b"cmd") is HostFeatures.CMD
    assert str(HostFeatures.SHELL_V2) == "ShellV2"
    assert str(HostFeatures.CMD) == "Cmd"
    with pytest.raises(ValueError):
        HostFeatures.from_bytes(b"abb")


def test_reboot_type_strings():
    assert RebootType.SYSTEM.__str__() == ""
    assert RebootType.SIDELOAD_AUTO_REBOOT.__str__() == "sideload-auto-reboot"
    assert RebootType.FASTBOOT.__str__() == "fastboot"
    command = ServerCommand(ServerCommandKind.REBOOT, (RebootType.SIDELOAD,))
    assert command.__str__() == "reboot:sideload"


def test_sync_command_strings():
    assert SyncCommand.LIST.__str__() == "LIST"
    assert SyncCommand.RECV.__str__() == "RECV"
    assert SyncCommand.SEND.__str__() == "SEND"
    assert SyncCommand.STAT.__str__() == "STAT"
    assert list(SyncCommand) == [SyncCommand.LIST, SyncCommand.RECV, SyncCommand.SEND, SyncCommand.STAT]