# tests/conftest.py
from __future__ import annotations

from collections import deque

import pytest
import serial

from tvcontrol.config_tv import SerialSettings

CHAR_DEVICE = "/dev/null"


class FakeLine:
    """
    Shared state behind a pair of fake serial handles.

    ``replies`` is consumed one entry per read: bytes are returned as read,
    an exception instance is raised. ``write_errors`` and ``flush_errors``
    are raised, one per call, by the write side until they run out.
    """

    def __init__(self, replies=()):
        self.replies = deque(replies)
        self.written: list[bytes] = []
        self.opened: list["FakeSerial"] = []
        self.open_kwargs: list[dict] = []
        self.fail_open_at: int | None = None
        self.write_errors: deque = deque()
        self.flush_errors: deque = deque()

    def factory(self, **kwargs):
        if self.fail_open_at is not None and len(self.open_kwargs) == self.fail_open_at:
            self.open_kwargs.append(kwargs)
            raise serial.SerialException("could not open port")
        self.open_kwargs.append(kwargs)
        handle = FakeSerial(self)
        self.opened.append(handle)
        return handle


class FakeSerial:
    def __init__(self, line: FakeLine):
        self.line = line
        self.closed = False

    def reset_input_buffer(self) -> None:
        pass

    def write(self, data: bytes) -> int:
        self.line.written.append(data)
        if self.line.write_errors:
            raise self.line.write_errors.popleft()
        return len(data)

    def flush(self) -> None:
        if self.line.flush_errors:
            raise self.line.flush_errors.popleft()

    def read_until(self, expected: bytes = b"\n") -> bytes:
        if not self.line.replies:
            return b""
        reply = self.line.replies.popleft()
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self) -> None:
        self.closed = True


class SleepRecorder:
    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def char_device() -> str:
    return CHAR_DEVICE


@pytest.fixture
def settings() -> SerialSettings:
    return SerialSettings(port=CHAR_DEVICE)


@pytest.fixture
def make_line():
    return FakeLine
