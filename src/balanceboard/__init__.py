"""Wii Balance Board L2CAP Protocol Package.

  Pure Python package for reading calibrated weight from a Wii Balance Board.
  """

from .config import SessionConfig
from .discovery import discover_board, is_valid_address, validate_address
from .exceptions import (
    BalanceBoardError,
    CalibrationError,
    InvalidAddressError,
    InvalidReportError,
    ProtocolError,
    ShortReadError,
    TransportError,
    TransportTimeoutError,
)
from .interpreters import (
    DebugInterpreter,
    DecodeInterpreter,
    RawDumpInterpreter,
    ReportInterpreter,
    create_interpreter,
)
from .models.calibration import CalibrationStore
from .models.enums import OutputMode, ReportType, SensorPosition
from .models.state import RunState
from .models.weight import WeightConverter, WeightReading
from .protocol import (
    DEFAULT_ADDRESS,
    DEVICE_NAME,
    HANDSHAKE_SEQUENCE,
    CalibrationReport,
    HandshakeState,
    ReportDispatcher,
    SensorReport,
    StatusReport,
    UnknownReport,
    parse_report,
)
from .session import BalanceBoardSession
from .transport import L2CAPPort

__version__ = "0.1.0"

__all__ = [
    # Main API
    "BalanceBoardSession",
    "SessionConfig",
    "discover_board",
    "is_valid_address",
    "validate_address",
    # Exceptions
    "BalanceBoardError",
    "TransportError",
    "TransportTimeoutError",
    "ShortReadError",
    "ProtocolError",
    "InvalidReportError",
    "CalibrationError",
    "InvalidAddressError",
    # Protocol
    "HandshakeState",
    "ReportDispatcher",
    "parse_report",
    "StatusReport",
    "CalibrationReport",
    "SensorReport",
    "UnknownReport",
    "L2CAPPort",
    # Models
    "CalibrationStore",
    "WeightConverter",
    "WeightReading",
    "RunState",
    # Interpreters
    "ReportInterpreter",
    "RawDumpInterpreter",
    "DecodeInterpreter",
    "DebugInterpreter",
    "create_interpreter",
    # Enums
    "OutputMode",
    "ReportType",
    "SensorPosition",
    # Constants
    "DEFAULT_ADDRESS",
    "DEVICE_NAME",
    "HANDSHAKE_SEQUENCE",
]
