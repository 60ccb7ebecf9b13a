"""Test the session loop with fake channels."""

from __future__ import annotations

import pytest

from balanceboard import BalanceBoardSession, OutputMode, SessionConfig
from balanceboard.exceptions import ShortReadError, TransportError, TransportTimeoutError
from balanceboard.interpreters import ReportInterpreter
from balanceboard.protocol.commands import HANDSHAKE_SEQUENCE
from balanceboard.protocol.reports import SensorReport

ADDRESS = "00:23:CC:43:DC:C2"


class _FakePort:
    def __init__(self, responses: list[bytes | Exception] | None = None):
        self._responses = list(responses or [])
        self.sent: list[bytes] = []
        self.closed = False
        self.opened = False
        self.receive_args: list[tuple[int, float | None]] = []

    async def open(self) -> None:
        self.opened = True

    async def close(self) -> None:
        self.closed = True

    async def send(self, data: bytes) -> None:
        self.sent.append(data)

    async def receive(self, max_len: int, timeout: float | None = None) -> bytes:
        self.receive_args.append((max_len, timeout))
        if not self._responses:
            raise TransportTimeoutError("no fake responses left")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class _FailingSendPort(_FakePort):
    async def send(self, data: bytes) -> None:
        raise TransportError("Send failed: [Errno 107] Transport endpoint is not connected")


def _session(mode: OutputMode = OutputMode.RAW, data: list | None = None):
    config = SessionConfig(ADDRESS, output_mode=mode, poll_interval=0)
    lines: list[str] = []
    session = BalanceBoardSession(config, writer=lines.append)
    control = _FakePort()
    data_port = _FakePort(data)
    session._control = control  # Inject fake channels
    session._data = data_port
    return session, control, data_port, lines


@pytest.mark.asyncio
async def test_five_ticks_send_each_handshake_command_once_in_order() -> None:
    """Scenario E: each catalog command sent exactly once, in priority order."""
    session, control, _, _ = _session()

    for _ in range(5):
        await session.tick()

    assert control.sent == [command.payload for command in HANDSHAKE_SEQUENCE]
    assert len(set(control.sent)) == 5
    assert session.handshake.is_complete


@pytest.mark.asyncio
async def test_tick_receives_bounded_buffer_with_timeout() -> None:
    session, _, data_port, _ = _session()

    await session.tick()

    assert data_port.receive_args == [(24, 1.0)]


@pytest.mark.asyncio
async def test_receive_timeout_keeps_session_running() -> None:
    session, _, _, _ = _session(data=[])

    report = await session.tick()

    assert report is None
    assert session.running


@pytest.mark.asyncio
async def test_power_off_report_ends_run(sensor_report, power_off_report) -> None:
    """Scenario D inside the loop: run() returns after the power-off report."""
    session, control, _, _ = _session(data=[sensor_report(), sensor_report(), power_off_report])

    await session.run()

    assert not session.running
    assert session.run_state.reason == "powered off"
    assert session.error is None
    assert len(control.sent) == 5


def test_dispatch_power_off_clears_running(power_off_report) -> None:
    """Scenario D: running flag transitions to false after dispatch."""
    session, _, _, _ = _session()

    report = session.dispatch(power_off_report)

    assert isinstance(report, SensorReport)
    assert not session.running


def test_dispatch_short_read_is_fatal() -> None:
    session, _, _, _ = _session()

    with pytest.raises(ShortReadError):
        session.dispatch(b"\xa1")

    assert not session.running


def test_dispatch_ignores_unknown_report() -> None:
    session, _, _, lines = _session(OutputMode.DEBUG)

    session.dispatch(bytes([0xA1, 0x30, 0x00, 0x00]))

    assert session.running
    assert lines == []


@pytest.mark.asyncio
async def test_empty_receive_fails_run() -> None:
    session, _, _, _ = _session(data=[b""])

    with pytest.raises(ShortReadError):
        await session.run()

    assert isinstance(session.error, ShortReadError)
    assert session.run_state.reason == "short read"


@pytest.mark.asyncio
async def test_receive_error_fails_run() -> None:
    session, _, _, _ = _session(data=[TransportError("Receive failed: [Errno 104] Connection reset")])

    with pytest.raises(TransportError, match="Receive failed"):
        await session.run()

    assert not session.running
    assert session.run_state.reason == "transport error"


@pytest.mark.asyncio
async def test_send_error_leaves_flag_pending() -> None:
    session, _, _, _ = _session()
    session._control = _FailingSendPort()

    with pytest.raises(TransportError, match="Send failed"):
        await session.run()

    assert session.handshake.need_status


@pytest.mark.asyncio
async def test_external_stop_ends_run_after_current_tick(sensor_report) -> None:
    session, _, _, _ = _session(data=[sensor_report()] * 10)
    session.stop("enter pressed")

    await session.run()

    assert session.run_state.reason == "enter pressed"


@pytest.mark.asyncio
async def test_calibrated_session_converts_sensor_values(
    first_calibration_report, second_calibration_report, sensor_report
) -> None:
    session, _, _, lines = _session(
        OutputMode.DECODE,
        data=[
            first_calibration_report,
            second_calibration_report,
            sensor_report((2000, 2000, 4000, 100)),
        ],
    )

    for _ in range(3):
        await session.tick()

    assert session.calibration is not None
    assert session.calibration.is_complete
    assert lines == ["17000,17000,34000,0,68       \r"]


@pytest.mark.parametrize("mode", [OutputMode.DECODE, OutputMode.DEBUG])
def test_sensor_values_not_shown_before_second_calibration_fragment(
    mode, first_calibration_report, sensor_report
) -> None:
    session, _, _, lines = _session(mode)
    session.dispatch(first_calibration_report)
    lines.clear()

    report = session.dispatch(sensor_report((5000, 5000, 5000, 5000)))

    assert isinstance(report, SensorReport)
    assert session.calibration is not None
    assert not session.calibration.is_complete
    assert lines == []
    assert session.running


def test_raw_session_has_no_calibration_store(first_calibration_report) -> None:
    session, _, _, lines = _session(OutputMode.RAW)

    session.dispatch(first_calibration_report)

    assert session.calibration is None
    assert lines[0].startswith("Calibration: 0:a1 1:21")


@pytest.mark.asyncio
async def test_context_manager_opens_and_closes_channels() -> None:
    session, control, data_port, _ = _session()

    async with session:
        assert control.opened and data_port.opened

    assert control.closed and data_port.closed


@pytest.mark.asyncio
async def test_connect_closes_control_when_data_channel_fails() -> None:
    session, control, _, _ = _session()

    class _RefusingPort(_FakePort):
        async def open(self) -> None:
            raise TransportError("Failed to connect to 00:23:CC:43:DC:C2 PSM 0x13")

    session._data = _RefusingPort()

    with pytest.raises(TransportError, match="PSM 0x13"):
        await session.connect()

    assert control.closed


def test_custom_interpreter_without_calibration() -> None:
    config = SessionConfig(ADDRESS, output_mode=OutputMode.DEBUG)
    session = BalanceBoardSession(config, interpreter=ReportInterpreter())

    assert session.calibration is None
