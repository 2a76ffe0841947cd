import json
import socket
import struct

import pytest

from dwmkit.ipc import (
    HEADER_SIZE,
    IPC_MAGIC,
    IpcClient,
    IpcError,
    MessageType,
    build_get_client,
    build_run_command,
    build_subscribe,
    decode_header,
    encode_message,
    is_float,
    is_signed_int,
    is_unsigned_int,
    main,
)


@pytest.fixture
def pair():
    left, right = socket.socketpair()
    client = IpcClient(sock=left)
    yield client, right
    client.close()
    right.close()


def test_header_layout():
    data = encode_message(MessageType.GET_TAGS, b"\0")
    assert data[:7] == b"DWM-IPC"
    assert data[7:11] == struct.pack("=I", 1)
    assert data[11] == 2
    assert data[12:] == b"\0"
    assert HEADER_SIZE == 12


def test_encode_decode_round_trip():
    payload = b'{"event":"tag_change_event","action":"subscribe"}'
    data = encode_message(MessageType.SUBSCRIBE, payload)
    msg_type, size = decode_header(data)
    assert msg_type == MessageType.SUBSCRIBE
    assert size == len(payload)
    assert data[HEADER_SIZE:] == payload


def test_encode_accepts_text():
    assert encode_message(0, "ab") == encode_message(0, b"ab")


def test_decode_rejects_bad_magic():
    data = b"XXX-IPC" + encode_message(1, b"x")[7:]
    with pytest.raises(IpcError):
        decode_header(data)


def test_decode_rejects_short_header():
    with pytest.raises(IpcError):
        decode_header(IPC_MAGIC)


@pytest.mark.parametrize(
    "text, expected",
    [("12", True), ("-3.5", True), ("1.2.3", False), (".5", False),
     ("5.", False), ("1-2", False), ("abc", False), ("", True)],
)
def test_is_float(text, expected):
    assert is_float(text) is expected


@pytest.mark.parametrize(
    "text, expected",
    [("42", True), ("-42", True), ("4-2", False), ("--1", False), ("1.0", False)],
)
def test_is_signed_int(text, expected):
    assert is_signed_int(text) is expected


@pytest.mark.parametrize("text, expected", [("42", True), ("-42", False), ("4a", False)])
def test_is_unsigned_int(text, expected):
    assert is_unsigned_int(text) is expected


def test_run_command_payload_bytes():
    assert build_run_command("view", ["1", "-2", "abc"]) == (
        b'{"command":"view","args":[1,-2,"abc"]}'
    )


def test_run_command_float_argument():
    decoded = json.loads(build_run_command("setmfact", ["0.5"]))
    assert decoded == {"command": "setmfact", "args": [0.5]}


def test_run_command_float_has_decimal_point():
    payload = build_run_command("x", ["-2.5"]).decode()
    assert "-2.5" in payload
    assert json.loads(payload)["args"] == [-2.5]


def test_run_command_escapes_strings():
    decoded = json.loads(build_run_command("spawn", ['say "hi"']))
    assert decoded["args"] == ['say "hi"']


def test_get_client_payload():
    assert json.loads(build_get_client(12345)) == {"client_window_id": 12345}


def test_subscribe_payload():
    assert build_subscribe("tag_change_event") == (
        b'{"event":"tag_change_event","action":"subscribe"}'
    )


def test_client_send(pair):
    client, peer = pair
    client.send(MessageType.GET_MONITORS, b"\0")
    data = peer.recv(64)
    assert data == encode_message(MessageType.GET_MONITORS, b"\0")


def test_client_receive(pair):
    client, peer = pair
    peer.sendall(encode_message(MessageType.EVENT, b'{"a":1}'))
    assert client.receive() == (MessageType.EVENT, b'{"a":1}')


def test_client_receive_eof(pair):
    client, peer = pair
    peer.sendall(encode_message(MessageType.EVENT, b"abcdef")[:-2])
    peer.shutdown(socket.SHUT_WR)
    with pytest.raises(IpcError):
        client.receive()


def test_client_close_then_send_fails(pair):
    client, _ = pair
    client.close()
    with pytest.raises(IpcError):
        client.send(MessageType.GET_TAGS, b"\0")


def test_main_help(capsys):
    assert main(["help"]) == 0
    out = capsys.readouterr().out
    assert "run_command <name> [args...]" in out
    assert "tag_change_event" in out


def test_main_without_arguments(capsys):
    assert main([]) == 1
    assert "Expected an argument, got none" in capsys.readouterr().err


def test_main_invalid_argument(capsys):
    assert main(["bogus"]) == 1
    assert "Invalid argument 'bogus'" in capsys.readouterr().err


def test_main_get_client_requires_unsigned(capsys):
    assert main(["get_dwm_client", "-5"]) == 1
    assert "Expected unsigned integer argument" in capsys.readouterr().err


def test_main_subscribe_requires_event(capsys):
    assert main(["--ignore-reply", "subscribe"]) == 1
    assert "Expected event name" in capsys.readouterr().err