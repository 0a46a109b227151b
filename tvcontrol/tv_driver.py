# tvcontrol/tv_driver.py
"""
Serial driver for TVs speaking the fixed-width ASCII control protocol.

Each command is one write of an 8-character body plus ``\\r`` followed by one
``\\r``-terminated reply. The driver keeps two handles on the same port, one
for writing and one for reading; sharing a single handle for both directions
gave unreliable reads on the target hardware.

A failed write or read (including a read that times out before the
terminator arrives) is retried with a fixed pause between attempts. When the
attempts run out the result is the literal ``ERR``, the same text the TV
itself sends back for a rejected command.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

import serial

from .catalog import (
    TERMINATOR,
    Domain,
    TVError,
    encode_command,
    encode_frame,
)
from .config_tv import SerialSettings

logger = logging.getLogger(__name__)

ERR_RESPONSE = "ERR"
_TERMINATOR_BYTES = TERMINATOR.encode("ascii")

# ----------------------- Errors -----------------------

class DeviceNotFoundError(TVError):
    """Raised when the configured port is not a character device."""

class TVCommunicationError(TVError):
    """Raised when the port cannot be opened, or on a single failed write/read."""

# ----------------------- Data Types -----------------------

@dataclass(frozen=True, slots=True)
class ExchangeResult:
    """Outcome of one logical command: the reply text and how many attempts it took."""
    response: str
    attempts: int

    @property
    def failed(self) -> bool:
        return self.response == ERR_RESPONSE

# ----------------------- Main Driver Class -----------------------

@dataclass(slots=True)
class TVDriver:
    """Single-session controller for one TV on one serial port."""
    settings: SerialSettings = field(default_factory=SerialSettings)
    serial_factory: Callable[..., Any] = serial.Serial
    sleep: Callable[[float], None] = time.sleep
    _writer: Optional[Any] = field(default=None, init=False, repr=False)
    _reader: Optional[Any] = field(default=None, init=False, repr=False)

    # --- Magic Methods & Connection Handling ---
    def __enter__(self) -> "TVDriver":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    @property
    def is_open(self) -> bool:
        return self._writer is not None and self._reader is not None

    def check_device(self) -> None:
        try:
            is_device = Path(self.settings.port).is_char_device()
        except OSError as e:
            raise DeviceNotFoundError(f"{self.settings.port} is not accessible: {e}") from e
        if not is_device:
            raise DeviceNotFoundError(f"{self.settings.port} is not a character device")

    def _open_handle(self) -> Any:
        s = self.settings
        try:
            return self.serial_factory(
                port=s.port, baudrate=s.baudrate, bytesize=s.bytesize,
                parity=s.parity, stopbits=s.stopbits,
                timeout=s.timeout, write_timeout=s.timeout,
            )
        except (serial.SerialException, OSError) as e:
            raise TVCommunicationError(f"Could not open {s.port}") from e

    def connect(self) -> None:
        if self.is_open: return
        self.check_device()
        logger.info("Connecting to TV on %s @ %d bps…", self.settings.port, self.settings.baudrate)
        try:
            self._writer = self._open_handle()
            self._reader = self._open_handle()
        except TVCommunicationError:
            self.disconnect()
            raise
        logger.info("Connection established.")

    def disconnect(self) -> None:
        was_open = self._writer is not None or self._reader is not None
        for handle in (self._writer, self._reader):
            if handle is None: continue
            try:
                handle.close()
            except (serial.SerialException, OSError) as e:
                logger.warning("Error closing %s: %s", self.settings.port, e)
        self._writer = self._reader = None
        if was_open: logger.info("Serial connection closed.")

    # --- Core Protocol Layer ---
    def _attempt(self, frame: bytes) -> str:
        """One write+read cycle. Any failure raises; partial replies are dropped."""
        try:
            self._reader.reset_input_buffer()
            logger.debug("TX -> %r", frame)
            self._writer.write(frame)
            self._writer.flush()
            resp = self._reader.read_until(_TERMINATOR_BYTES)
        except Exception as e:  # termios.error and driver-specific errors are not OSError
            raise TVCommunicationError(f"I/O error on {self.settings.port}: {e}") from e
        logger.debug("RX <- %r", resp)
        if not resp.endswith(_TERMINATOR_BYTES):
            raise TVCommunicationError(f"Timeout waiting for reply on {self.settings.port}")
        return resp[:-len(_TERMINATOR_BYTES)].decode("ascii", errors="replace")

    def exchange(self, body: str) -> ExchangeResult:
        """Send an encoded command body and return the reply, retrying failed attempts."""
        if not self.is_open:
            raise TVCommunicationError("Port not open.")
        frame = encode_frame(body)
        budget = self.settings.retries
        attempts = 0
        while True:
            attempts += 1
            try:
                return ExchangeResult(self._attempt(frame), attempts)
            except TVCommunicationError as e:
                budget -= 1
                logger.warning("Attempt %d/%d for %r failed: %s",
                               attempts, self.settings.retries, body, e)
                if budget <= 0:
                    logger.error("No reply to %r after %d attempts.", body, attempts)
                    return ExchangeResult(ERR_RESPONSE, attempts)
                self.sleep(self.settings.retry_delay)

    def send(self, domain: Domain, action: str,
             argument: Optional[Union[int, str]] = None) -> ExchangeResult:
        return self.exchange(encode_command(domain, action, argument))

    # ----------------------- High-Level API -----------------------
    def power_on(self) -> str:
        """Turns the TV on."""
        return self.send(Domain.POWER, "on").response

    def power_off(self) -> str:
        """Puts the TV in standby."""
        return self.send(Domain.POWER, "off").response

    def set_volume(self, level: int) -> str:
        """Set the volume. ``level`` must be within 0-60."""
        return self.send(Domain.VOLUME, "set", level).response

    def get_name(self) -> str:
        """Returns the name the TV reports for itself."""
        return self.send(Domain.NAME, "get").response

    def get_model(self) -> str:
        """Returns the TV model number."""
        return self.send(Domain.MODEL, "get").response

    def mute_on(self) -> str:
        """Mutes the audio."""
        return self.send(Domain.MUTE, "on").response

    def mute_off(self) -> str:
        """Unmutes the audio."""
        return self.send(Domain.MUTE, "off").response

    def mute_toggle(self) -> str:
        """Toggles mute."""
        return self.send(Domain.MUTE, "toggle").response

    def toggle_input(self) -> str:
        """Switch to the next input source."""
        return self.send(Domain.INPUT, "toggle").response
