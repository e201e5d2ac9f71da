import pytest

from adbwire.errors import ConversionError, WrongResponseError
from adbwire.message import (
    MessageCommand,
    MessageHeader,
    MessageSubcommand,
    TransportMessage,
    compute_crc32,
    compute_magic,
)


def test_command_display():
    assert MessageCommand.WRITE.__str__() == "WRTE"
    assert MessageCommand.CNXN.__str__() == "CNXN"
    message = TransportMessage.create(MessageCommand.OKAY, 0, 0, b"")
    assert message.command.__str__() == "OKAY"


@pytest.mark.parametrize("command", list(MessageCommand))
def test_command_value_spells_its_name_on_the_wire(command):
    header = MessageHeader.create(command, 0, 0, b"")
    assert header.to_bytes()[:4].decode("ascii") == str(command)


@pytest.mark.parametrize("command", list(MessageCommand))
def test_magic_is_inverse(command):
    assert compute_magic(command) ^ int(command) == 0xFFFFFFFF


def test_crc_is_byte_sum():
    assert compute_crc32(b"") == 0
    assert compute_crc32(b"\x01\x02\x03") == 6
    assert compute_crc32(bytes([255]) * 4) == compute_crc32(bytes([255]) * 2) * 2


def test_subcommand_with_arg():
    encoded = MessageSubcommand.DATA.with_arg(5)
    assert encoded == b"DATA" + (5).to_bytes(4, "little")
    assert len(MessageSubcommand.QUIT.with_arg(0)) == 8


def test_header_round_trip():
    header = MessageHeader.create(MessageCommand.OPEN, 7, 9, b"shell:\0")
    raw = header.to_bytes()
    assert len(raw) == MessageHeader.SIZE
    assert MessageHeader.from_bytes(raw) == header
    assert header.data_length == len(b"shell:\0")


def test_header_from_bytes_rejects_unknown_command():
    raw = b"ZZZZ" + bytes(20)
    with pytest.raises(ConversionError):
        MessageHeader.from_bytes(raw)


def test_header_from_bytes_rejects_wrong_length():
    raw = MessageHeader.create(MessageCommand.OKAY, 1, 2, b"").to_bytes()
    with pytest.raises(ConversionError):
        MessageHeader.from_bytes(raw[:-1])


def test_message_integrity():
    message = TransportMessage.create(MessageCommand.WRITE, 1, 2, b"payload")
    assert message.check_integrity()
    assert message.payload == b"payload"
    tampered = TransportMessage(message.header, b"payloae")
    assert not tampered.check_integrity()


def test_message_integrity_bad_magic():
    good = MessageHeader.create(MessageCommand.OKAY, 1, 2, b"")
    bad = MessageHeader(good.command, good.arg0, good.arg1, good.data_length, good.data_crc32, 0)
    assert not TransportMessage(bad, b"").check_integrity()


def test_assert_command():
    message = TransportMessage.create(MessageCommand.CLSE, 0, 0)
    message.assert_command(MessageCommand.CLSE)
    with pytest.raises(WrongResponseError) as info:
        message.assert_command(MessageCommand.OKAY)
    assert info.value.received == "CLSE"
    assert info.value.expected == "OKAY"
    assert message.command is MessageCommand.CLSE