"""Client for the window manager's IPC socket: message framing, request building and a CLI."""

from __future__ import annotations

import json
import socket
import struct
import sys
from enum import IntEnum
from typing import Optional, Sequence, Union

IPC_MAGIC = b"DWM-IPC"
DEFAULT_SOCKET_PATH = "/tmp/dwm.sock"
PROG_NAME = "dwm-msg"

EVENT_TAG_CHANGE = "tag_change_event"
EVENT_CLIENT_FOCUS_CHANGE = "client_focus_change_event"
EVENT_LAYOUT_CHANGE = "layout_change_event"
EVENT_MONITOR_FOCUS_CHANGE = "monitor_focus_change_event"
EVENT_FOCUSED_TITLE_CHANGE = "focused_title_change_event"
EVENT_FOCUSED_STATE_CHANGE = "focused_state_change_event"

# Magic, payload size and message type, packed without padding in native byte order.
_HEADER = struct.Struct("=7sIB")
HEADER_SIZE = _HEADER.size

# Requests that carry no data still send a single NUL byte.
_EMPTY_PAYLOAD = b"\0"


class MessageType(IntEnum):
    """Kinds of IPC messages."""

    RUN_COMMAND = 0
    GET_MONITORS = 1
    GET_TAGS = 2
    GET_LAYOUTS = 3
    GET_DWM_CLIENT = 4
    SUBSCRIBE = 5
    EVENT = 6


class IpcError(Exception):
    """A malformed message or a lost connection."""


def encode_message(msg_type: int, payload: Union[bytes, str]) -> bytes:
    """Frame a payload with the IPC header."""
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return _HEADER.pack(IPC_MAGIC, len(payload), int(msg_type)) + payload


def decode_header(data: bytes) -> tuple[int, int]:
    """Return the message type and payload size from a header."""
    if len(data) < HEADER_SIZE:
        raise IpcError(
            f"Unexpectedly reached EOF while reading header. "
            f"Read {len(data)} bytes, expected {HEADER_SIZE} total bytes."
        )
    magic, size, msg_type = _HEADER.unpack(data[:HEADER_SIZE])
    if magic != IPC_MAGIC:
        got = magic.decode("latin-1")
        raise IpcError(f"Invalid magic string. Got '{got}', expected '{IPC_MAGIC.decode()}'")
    return msg_type, size


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_float(s: str) -> bool:
    """Digits with an optional leading minus and at most one inner decimal point."""
    dot_used = minus_used = False
    last = len(s) - 1
    for i, ch in enumerate(s):
        if _is_digit(ch):
            continue
        if not dot_used and ch == "." and i != 0 and i != last:
            dot_used = True
        elif not minus_used and ch == "-" and i == 0:
            minus_used = True
        else:
            return False
    return True


def is_unsigned_int(s: str) -> bool:
    """Only digits."""
    return all(_is_digit(ch) for ch in s)


def is_signed_int(s: str) -> bool:
    """Digits with an optional leading minus."""
    return all(_is_digit(ch) or (i == 0 and ch == "-") for i, ch in enumerate(s))


def _leading_int(s: str) -> int:
    """Value of the leading integer of ``s``, or 0 when there is none."""
    sign = -1 if s.startswith("-") else 1
    digits = s[1:] if s[:1] in "+-" else s
    end = 0
    while end < len(digits) and _is_digit(digits[end]):
        end += 1
    return sign * int(digits[:end]) if end else 0


def _json_string(s: str) -> str:
    return json.dumps(s, ensure_ascii=False)


def _json_double(value: float) -> str:
    text = "%.20g" % value
    if all(ch in "0123456789-" for ch in text):
        text += ".0"
    return text


def _single_precision(s: str) -> float:
    return struct.unpack("=f", struct.pack("=f", float(s)))[0]


def build_run_command(name: str, args: Sequence[str]) -> bytes:
    """JSON payload running a named command; numeric arguments are sent as numbers."""
    encoded = []
    for arg in args:
        if is_signed_int(arg):
            encoded.append(str(_leading_int(arg)))
        elif is_float(arg):
            encoded.append(_json_double(_single_precision(arg)))
        else:
            encoded.append(_json_string(arg))
    text = '{"command":%s,"args":[%s]}' % (_json_string(name), ",".join(encoded))
    return text.encode("utf-8")


def build_get_client(window: int) -> bytes:
    """JSON payload asking for the properties of the client with a window id."""
    return ('{"client_window_id":%d}' % int(window)).encode("utf-8")


def build_subscribe(event: str) -> bytes:
    """JSON payload subscribing to an event."""
    return ('{"event":%s,"action":"subscribe"}' % _json_string(event)).encode("utf-8")


class IpcClient:
    """A connection to the IPC socket."""

    def __init__(self, path: str = DEFAULT_SOCKET_PATH,
                 sock: Optional[socket.socket] = None) -> None:
        self.path = path
        self.sock = sock

    def __enter__(self) -> "IpcClient":
        if self.sock is None:
            self.connect()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def connect(self) -> None:
        """Open the connection to the socket path."""
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(self.path)
        except OSError:
            sock.close()
            raise
        self.sock = sock

    def close(self) -> None:
        """Close the connection if it is open."""
        if self.sock is not None:
            self.sock.close()
            self.sock = None

    def _socket(self) -> socket.socket:
        if self.sock is None:
            raise IpcError("not connected")
        return self.sock

    def send(self, msg_type: int, payload: Union[bytes, str]) -> None:
        """Send one framed message."""
        self._socket().sendall(encode_message(msg_type, payload))

    def _recv_exact(self, size: int, what: str) -> bytes:
        sock = self._socket()
        buf = bytearray()
        while len(buf) < size:
            chunk = sock.recv(size - len(buf))
            if not chunk:
                raise IpcError(
                    f"Unexpectedly reached EOF while reading {what}. "
                    f"Read {len(buf)} bytes, expected {size} total bytes."
                )
            buf.extend(chunk)
        return bytes(buf)

    def receive(self) -> tuple[int, bytes]:
        """Read one message and return its type and payload."""
        msg_type, size = decode_header(self._recv_exact(HEADER_SIZE, "header"))
        return msg_type, self._recv_exact(size, "payload")


def _print_reply(client: IpcClient) -> None:
    _, payload = client.receive()
    text = payload.split(b"\0", 1)[0].decode("utf-8", errors="replace")
    sys.stdout.write(text + "\n")
    sys.stdout.flush()


def _usage_error(message: str) -> int:
    sys.stderr.write(f"Error: {message}\nusage: {PROG_NAME} <command> [...]\n")
    sys.stderr.write(f"Try '{PROG_NAME} help'\n")
    return 1


def _print_usage() -> None:
    pad = " " * 34
    lines = [
        f"usage: {PROG_NAME} [options] <command> [...]",
        "",
        "Commands:",
        "  run_command <name> [args...]    Run an IPC command",
        "",
        "  get_monitors                    Get monitor properties",
        "",
        "  get_tags                        Get list of tags",
        "",
        "  get_layouts                     Get list of layouts",
        "",
        "  get_dwm_client <window_id>      Get dwm client proprties",
        "",
        "  subscribe [events...]           Subscribe to specified events",
        f"{pad}Options: {EVENT_TAG_CHANGE},",
        f"{pad}{EVENT_LAYOUT_CHANGE},",
        f"{pad}{EVENT_CLIENT_FOCUS_CHANGE},",
        f"{pad}{EVENT_MONITOR_FOCUS_CHANGE},",
        f"{pad}{EVENT_FOCUSED_TITLE_CHANGE},",
        f"{pad}{EVENT_FOCUSED_STATE_CHANGE}",
        "",
        "  help                            Display this message",
        "",
        "Options:",
        "  --ignore-reply                  Don't print reply messages from",
        f"{pad}run_command and subscribe.",
        "",
    ]
    sys.stdout.write("\n".join(lines) + "\n")


def _plan_requests(args: list[str], ignore_reply: bool):
    """Turn command-line arguments into (type, payload, print reply) requests."""
    command, rest = args[0], args[1:]
    if command == "run_command":
        if not rest:
            raise ValueError("No command specified")
        return [(MessageType.RUN_COMMAND, build_run_command(rest[0], rest[1:]),
                 not ignore_reply)], False
    simple = {
        "get_monitors": MessageType.GET_MONITORS,
        "get_tags": MessageType.GET_TAGS,
        "get_layouts": MessageType.GET_LAYOUTS,
    }
    if command in simple:
        return [(simple[command], _EMPTY_PAYLOAD, True)], False
    if command == "get_dwm_client":
        if not rest:
            raise ValueError("Expected the window id")
        if not is_unsigned_int(rest[0]):
            raise ValueError("Expected unsigned integer argument")
        return [(MessageType.GET_DWM_CLIENT, build_get_client(_leading_int(rest[0])),
                 True)], False
    if command == "subscribe":
        if not rest:
            raise ValueError("Expected event name")
        return [(MessageType.SUBSCRIBE, build_subscribe(event), not ignore_reply)
                for event in rest], True
    raise ValueError(f"Invalid argument '{command}'")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Send one request to the window manager and print its reply."""
    args = list(sys.argv[1:] if argv is None else argv)
    ignore_reply = False
    if args and args[0] == "--ignore-reply":
        ignore_reply = True
        args = args[1:]
    if not args:
        return _usage_error("Expected an argument, got none")
    if args[0] == "help":
        _print_usage()
        return 0
    try:
        requests, listen = _plan_requests(args, ignore_reply)
    except ValueError as exc:
        return _usage_error(str(exc))

    client = IpcClient()
    try:
        client.connect()
    except OSError:
        sys.stderr.write("Failed to connect to socket\n")
        return 1

    try:
        with client:
            for msg_type, payload, show in requests:
                client.send(msg_type, payload)
                if show:
                    _print_reply(client)
                else:
                    client.receive()
            while listen:
                _print_reply(client)
    except (IpcError, OSError) as exc:
        sys.stderr.write(f"{exc}\n")
        sys.stderr.write("Error receiving response from socket. "
                         "The connection might have been lost.\n")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())