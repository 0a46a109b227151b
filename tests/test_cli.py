"""End-to-end tests for the tvctl command line."""

import functools
import termios

import pytest

from tvcontrol import cli
from tvcontrol.tv_driver import TVDriver


@pytest.fixture
def run(monkeypatch, sleeps, char_device):
    def invoke(line, *argv):
        monkeypatch.setattr(
            cli, "TVDriver",
            functools.partial(TVDriver, serial_factory=line.factory, sleep=sleeps),
        )
        return cli.main(["--port", char_device, *argv])
    return invoke


def test_power_on_prints_reply(run, make_line, capsys):
    line = make_line([b"OK\r"])
    assert run(line, "power", "on") == 0
    assert capsys.readouterr().out == "OK\n"
    assert line.written == [b"POWR1   \r"]


def test_name_get(run, make_line, capsys):
    line = make_line([b"LIVING ROOM\r"])
    assert run(line, "name", "get") == 0
    assert capsys.readouterr().out == "LIVING ROOM\n"
    assert line.written == [b"TVNM1   \r"]


def test_volume_out_of_range_never_touches_device(run, make_line, capsys):
    line = make_line([b"OK\r"])
    assert run(line, "volume", "set", "75") == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "error:" in captured.err
    assert line.open_kwargs == []


@pytest.mark.parametrize("level", ["-5", "loud"])
def test_volume_rejects_non_levels(run, make_line, level):
    line = make_line([b"OK\r"])
    assert run(line, "volume", "set", level) == 1
    assert line.open_kwargs == []


def test_volume_set(run, make_line):
    line = make_line([b"OK\r"])
    assert run(line, "volume", "set", "25") == 0
    assert line.written == [b"VOLM25  \r"]


def test_mute_toggle_times_out(run, make_line, sleeps, capsys):
    line = make_line()
    assert run(line, "mute", "toggle") == 1
    assert capsys.readouterr().out == "ERR\n"
    assert len(line.written) == 6
    assert sum(sleeps.calls) == pytest.approx(10.0)


def test_missing_device(monkeypatch, make_line, tmp_path, capsys):
    line = make_line([b"OK\r"])
    monkeypatch.setattr(cli, "TVDriver", functools.partial(TVDriver, serial_factory=line.factory))
    assert cli.main(["--port", str(tmp_path / "ttyUSB9"), "input", "toggle"]) == 1
    assert "not a character device" in capsys.readouterr().err
    assert line.open_kwargs == []


def test_unknown_action_is_a_usage_error(run, make_line):
    with pytest.raises(SystemExit) as exc:
        run(make_line(), "power", "toggle")
    assert exc.value.code == 2


def test_volume_requires_level(run, make_line):
    with pytest.raises(SystemExit):
        run(make_line(), "volume", "set")


def test_flaky_flush_is_retried(run, make_line, sleeps, capsys):
    line = make_line([b"OK\r"])
    line.flush_errors.append(termios.error(5, "Input/output error"))
    assert run(line, "power", "on") == 0
    assert capsys.readouterr().out == "OK\n"
    assert len(line.written) == 2
    assert sleeps.calls == [2.0]


@pytest.mark.parametrize("level", ["3_0", "+30", "\u0663\u0660", " 30"])
def test_volume_rejects_loose_integer_spellings(run, make_line, level):
    line = make_line([b"OK\r"])
    assert run(line, "volume", "set", level) == 1
    assert line.open_kwargs == []
