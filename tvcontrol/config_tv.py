# tvcontrol/config_tv.py
from __future__ import annotations

from dataclasses import dataclass

import serial

# --- Serial Port Configuration ---
SERIAL_PORT = "/dev/ttyUSB0"
BAUD_RATE = 9600
BYTE_SIZE = serial.EIGHTBITS
STOP_BITS = serial.STOPBITS_ONE
PARITY = serial.PARITY_NONE
SERIAL_TIMEOUT = 1.0

# --- Retry Policy ---
# Physical write+read attempts per command, and the pause between them.
RETRY_ATTEMPTS = 6
RETRY_DELAY_S = 2.0


@dataclass(frozen=True, slots=True)
class SerialSettings:
    """Connection parameters for one session. Both handles are opened with these."""
    port: str = SERIAL_PORT
    baudrate: int = BAUD_RATE
    bytesize: int = BYTE_SIZE
    stopbits: float = STOP_BITS
    parity: str = PARITY
    timeout: float = SERIAL_TIMEOUT
    retries: int = RETRY_ATTEMPTS
    retry_delay: float = RETRY_DELAY_S

    def __post_init__(self) -> None:
        if self.timeout <= 0: raise ValueError("timeout must be positive")
        if self.retries < 1: raise ValueError("retries must be at least 1")
        if self.retry_delay < 0: raise ValueError("retry_delay must not be negative")
