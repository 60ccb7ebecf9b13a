"""Session configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .discovery import validate_address
from .models.enums import OutputMode
from .protocol.commands import CONTROL_PSM, DATA_PSM, REPORT_BUFFER_SIZE


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Everything a session needs to know before it connects.

    Attributes:
        address: Board Bluetooth address (XX:XX:XX:XX:XX:XX)
        control_psm: PSM of the control channel (commands)
        data_psm: PSM of the data channel (reports)
        buffer_size: Maximum bytes read per receive
        poll_interval: Sleep between loop ticks, in seconds
        receive_timeout: Seconds one receive may block, None for no limit
        connect_timeout: Seconds each channel connect may take
        output_mode: Report interpreter to use
    """

    address: str
    control_psm: int = CONTROL_PSM
    data_psm: int = DATA_PSM
    buffer_size: int = REPORT_BUFFER_SIZE
    poll_interval: float = 0.01
    receive_timeout: float | None = 1.0
    connect_timeout: float = 10.0
    output_mode: OutputMode = OutputMode.RAW

    def __post_init__(self) -> None:
        validate_address(self.address)
        if self.buffer_size < 2:
            raise ValueError(f"buffer_size too small: {self.buffer_size} (must be >= 2)")
        if self.poll_interval < 0:
            raise ValueError(f"poll_interval must not be negative: {self.poll_interval}")
        if self.receive_timeout is not None and self.receive_timeout <= 0:
            raise ValueError(f"receive_timeout must be positive: {self.receive_timeout}")
        if self.connect_timeout <= 0:
            raise ValueError(f"connect_timeout must be positive: {self.connect_timeout}")
        object.__setattr__(self, "output_mode", OutputMode(self.output_mode))
