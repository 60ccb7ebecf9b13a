"""Balance board session: handshake, receive and dispatch loop."""

from __future__ import annotations

import asyncio
import logging

from .config import SessionConfig
from .exceptions import TransportError, TransportTimeoutError
from .interpreters import ReportInterpreter, Writer, create_interpreter, write_stdout
from .models.calibration import CalibrationStore
from .models.state import RunState
from .protocol import HandshakeState, Report, ReportDispatcher
from .transport import L2CAPPort, Port

_LOGGER = logging.getLogger(__name__)


class BalanceBoardSession:
    """One run against one balance board.

    Owns the control and data channels, the handshake flags, the running
    flag and, for calibrated output, the calibration store.

    Usage:
        config = SessionConfig("00:23:CC:43:DC:C2", output_mode=OutputMode.DEBUG)
        async with BalanceBoardSession(config) as session:
            await session.run()
    """

    def __init__(
            self,
            config: SessionConfig,
            interpreter: ReportInterpreter | None = None,
            run_state: RunState | None = None,
            writer: Writer = write_stdout,
    ):
        """Initialize session.

        Args:
            config: Session configuration
            interpreter: Report interpreter (default: built from config.output_mode)
            run_state: Running flag shared with a listener (default: new RunState)
            writer: Output sink for the default interpreter
        """
        self.config = config
        self.interpreter = interpreter or create_interpreter(config.output_mode, writer)
        self.run_state = run_state or RunState()
        self.handshake = HandshakeState()
        self.calibration: CalibrationStore | None = (
            CalibrationStore() if self.interpreter.uses_calibration else None
        )
        self.error: TransportError | None = None

        self._control: Port = L2CAPPort(config.address, config.control_psm, config.connect_timeout)
        self._data: Port = L2CAPPort(config.address, config.data_psm, config.connect_timeout)
        self._dispatcher = ReportDispatcher(self.run_state, self.interpreter, self.calibration)

    async def __aenter__(self) -> BalanceBoardSession:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def address(self) -> str:
        return self.config.address

    @property
    def running(self) -> bool:
        return self.run_state.running

    def stop(self, reason: str = "stop requested") -> None:
        """Ask the loop to end after the current tick."""
        self.run_state.stop(reason)

    async def connect(self) -> None:
        """Open the control channel, then the data channel.

        Raises:
            TransportError: If either channel fails to open
        """
        _LOGGER.info("Connecting to balance board %s", self.address)
        await self._control.open()
        try:
            await self._data.open()
        except TransportError:
            await self._control.close()
            raise

    async def close(self) -> None:
        """Close both channels."""
        await self._control.close()
        await self._data.close()
        _LOGGER.debug("Closed channels to %s", self.address)

    def dispatch(self, data: bytes) -> Report | None:
        """Dispatch one received buffer (see ReportDispatcher.dispatch)."""
        return self._dispatcher.dispatch(data)

    async def tick(self) -> Report | None:
        """Run one loop iteration without the trailing sleep.

        Sends any pending handshake commands, waits for one report on the
        data channel and dispatches it. A receive timeout is not an error:
        the tick just ends so the running flag gets checked again.

        Raises:
            TransportError: If a send or receive fails
        """
        await self.handshake.step(self._control)

        try:
            data = await self._data.receive(self.config.buffer_size, self.config.receive_timeout)
        except TransportTimeoutError:
            _LOGGER.debug("No report within %ss", self.config.receive_timeout)
            return None

        return self.dispatch(data)

    async def run(self) -> None:
        """Tick until the session stops.

        The session stops when the board powers off, when another actor
        calls stop(), or on a transport failure.

        Raises:
            TransportError: On a fatal transport failure, after stopping
        """
        try:
            while self.running:
                await self.tick()
                await asyncio.sleep(self.config.poll_interval)
        except TransportError as e:
            _LOGGER.error("Session with %s failed: %s", self.address, e)
            self.error = e
            self.run_state.stop("transport error")
            raise

        _LOGGER.info("Session with %s ended: %s", self.address, self.run_state.reason)
