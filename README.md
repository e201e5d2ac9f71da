# adbwire

A pure Python implementation of the Android Debug Bridge (ADB) message
protocol. It builds and checks the 24-byte ADB message headers, speaks the
file synchronisation sub-protocol (`STAT`, `SEND`, `RECV`, `DATA`, `DONE`,
`QUIT`) and offers device commands (shell, stat, pull, push, reboot,
install, uninstall, framebuffer capture) on top of any transport object that
can read and write whole ADB messages.

## Installation

```
pip install adbwire
```

## Modules

- `adbwire.message`: `MessageCommand` (`CNXN`, `CLSE`, `AUTH`, `OPEN`,
  `WRTE`, `OKAY`, `STLS`), `MessageSubcommand` with `with_arg()`,
  `MessageHeader` (`create`, `to_bytes`, `from_bytes`) and
  `TransportMessage` (`create`, `check_integrity`, `assert_command`).
  `compute_crc32` is the byte sum ADB uses as its checksum and
  `compute_magic` is the command with every bit inverted. `BUFFER_SIZE` is
  the chunk size used for file transfers (65536 bytes).
- `adbwire.models`: `RebootType`, `HostFeatures`, `AdbStatResponse`,
  `ServerCommand` / `ServerCommandKind` (text of requests to an ADB server),
  `SyncCommand`, `AdbRequestStatus` and the framebuffer header layouts
  `FrameBufferInfoV1` / `FrameBufferInfoV2`.
- `adbwire.emulator_command`: `EmulatorCommand` for the emulator console
  (`authenticate`, `sms`, `rotate`). Its text form is newline terminated.
- `adbwire.session`: `MessageTransport`, the interface a transport
  implements, and `MessageSession`, which opens streams, remembers the local
  and remote stream ids, and sends and receives files over the sync protocol.
- `adbwire.writers`: `MessageWriter`, which sends each write as a `WRTE`
  message and requires an `OKAY` answer, and `ShellMessageWriter`, which
  does not wait for an answer.
- `adbwire.device_ext`: `ADBDevice`, the abstract device interface, with
  `run_activity`, `framebuffer` and `framebuffer_bytes` built on top of it.
- `adbwire.message_device`: `MessageDevice`, a complete `ADBDevice` over
  any `MessageTransport`.
- `adbwire.errors`: `ADBError` and its subclasses.

## Messages

```python
from adbwire.message import MessageCommand, MessageHeader, TransportMessage

msg = TransportMessage.create(MessageCommand.OPEN, 1, 0, b"shell:ls\0")
assert msg.check_integrity()

raw = msg.header.to_bytes() + msg.payload
header = MessageHeader.from_bytes(raw[:MessageHeader.SIZE])
assert header.command is MessageCommand.OPEN
```

`MessageHeader.from_bytes` raises `ConversionError` when the input is not 24
bytes long or does not start with a known command. `assert_command` raises
`WrongResponseError` naming the received and expected commands.

## Talking to a device

Supply an object with two methods:

- `read_message(timeout=None)` returning the next `TransportMessage`;
- `write_message(message, timeout=None)` sending one.

Then wrap it:

```python
from adbwire.message_device import MessageDevice
from adbwire.models import RebootType

device = MessageDevice(my_transport)

with open("out.txt", "wb") as out:
    device.pull("/sdcard/notes.txt", out)

with open("local.bin", "rb") as src:
    device.push(src, "/sdcard/local.bin")   # written with mode 0777

print(device.stat("/sdcard/local.bin"))
output = device.run_activity("com.example.app", "MainActivity")
device.framebuffer("screen.png")            # format follows the extension
png = device.framebuffer_bytes()
device.install("app.apk")                   # the path must end in ".apk"
device.uninstall("com.example.app")
device.reboot(RebootType.BOOTLOADER)
```

`shell_command(["ls", "-l"], output)` writes the command's output to a
binary stream. `shell(reader, writer)` runs an interactive shell: a
background thread copies what the device prints into `writer`, while the
calling thread sends everything read from `reader` until it is exhausted.

`pull` raises `UnknownResponseTypeError` when the remote file does not exist;
`install` and `uninstall` raise `RequestFailedError` carrying the device's
answer unless it is `Success`; `framebuffer_image` accepts header versions 1
and 2 and raises `UnimplementedFramebufferVersionError` for any other.

## Other helpers

```python
from adbwire.emulator_command import EmulatorCommand
from adbwire.models import ServerCommand, ServerCommandKind

str(EmulatorCommand.rotate())                       # "rotate\n"
str(ServerCommand(ServerCommandKind.TRANSPORT_SERIAL, ("emulator-5554",)))
# "host:transport:emulator-5554"
```

The text of `SHELL` and `SHELL_COMMAND` server requests includes
`TERM=<value>,` when the `TERM` environment variable is set.

## What this package does not do

- It ships no transport: there is no TCP, TLS or USB connection code. You
  provide the object that moves `TransportMessage`s.
- It performs no connection handshake or authentication (`CNXN`, `AUTH`,
  `STLS`); the transport must hand over a connection that is already set up.
- It does not talk to an ADB server or an emulator console. `ServerCommand`
  and `EmulatorCommand` only produce the request text.
- It has no mDNS discovery and no command-line tool.

Failures are raised as subclasses of `adbwire.errors.ADBError`.