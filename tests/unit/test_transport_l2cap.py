"""Test L2CAP port I/O over a local seqpacket socket pair."""

from __future__ import annotations

import socket

import pytest

from balanceboard.exceptions import TransportError, TransportTimeoutError
from balanceboard.transport import L2CAPPort

ADDRESS = "00:23:CC:43:DC:C2"


@pytest.fixture
def socket_pair():
    left, right = socket.socketpair(socket.AF_UNIX, socket.SOCK_SEQPACKET)
    yield left, right
    left.close()
    right.close()


@pytest.mark.asyncio
async def test_send_writes_whole_command(socket_pair) -> None:
    left, right = socket_pair
    port = L2CAPPort(ADDRESS, 0x11, sock=left)

    await port.send(b"\x52\x12\x00\x32")

    assert right.recv(24) == b"\x52\x12\x00\x32"


@pytest.mark.asyncio
async def test_receive_preserves_report_boundaries(socket_pair) -> None:
    left, right = socket_pair
    port = L2CAPPort(ADDRESS, 0x13, sock=left)
    right.send(b"\xa1\x32\x00\x00")
    right.send(b"\xa1\x20\x00\x02\x00\x00\x00\x64")

    first = await port.receive(24, timeout=1.0)
    second = await port.receive(24, timeout=1.0)

    assert first == b"\xa1\x32\x00\x00"
    assert second == b"\xa1\x20\x00\x02\x00\x00\x00\x64"


@pytest.mark.asyncio
async def test_receive_timeout(socket_pair) -> None:
    left, _ = socket_pair
    port = L2CAPPort(ADDRESS, 0x13, sock=left)

    with pytest.raises(TransportTimeoutError, match="within 0.05s"):
        await port.receive(24, timeout=0.05)


@pytest.mark.asyncio
async def test_receive_after_peer_closed_returns_empty(socket_pair) -> None:
    left, right = socket_pair
    port = L2CAPPort(ADDRESS, 0x13, sock=left)
    right.close()

    assert await port.receive(24, timeout=1.0) == b""


@pytest.mark.asyncio
async def test_close_is_idempotent(socket_pair) -> None:
    left, _ = socket_pair
    port = L2CAPPort(ADDRESS, 0x13, sock=left)

    async with port:
        assert port.is_open

    assert not port.is_open
    await port.close()


@pytest.mark.asyncio
async def test_send_requires_connection() -> None:
    port = L2CAPPort(ADDRESS, 0x11)

    with pytest.raises(TransportError, match="Not connected"):
        await port.send(b"\x52\x11\x10")


@pytest.mark.asyncio
async def test_open_without_bluetooth_support(monkeypatch) -> None:
    monkeypatch.delattr(socket, "AF_BLUETOOTH", raising=False)
    port = L2CAPPort(ADDRESS, 0x11)

    with pytest.raises(TransportError, match="not supported"):
        await port.open()


@pytest.mark.asyncio
async def test_open_maps_socket_creation_error(monkeypatch) -> None:
    monkeypatch.setattr(socket, "AF_BLUETOOTH", 31, raising=False)
    monkeypatch.setattr(socket, "BTPROTO_L2CAP", 0, raising=False)

    def _refuse(*args, **kwargs):
        raise OSError(97, "Address family not supported by protocol")

    monkeypatch.setattr(socket, "socket", _refuse)
    port = L2CAPPort(ADDRESS, 0x11)

    with pytest.raises(TransportError, match="Failed to create L2CAP socket"):
        await port.open()
