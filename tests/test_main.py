"""Tests for the console entry point."""

from unittest import mock

import pytest

from reaper import main as cli
from reaper.local.supervisor import Liveness, TerminationSupervisor, TerminationTimeout
from tests.conftest import FakeControl


@pytest.fixture
def control(monkeypatch):
    """Routes the CLI's supervisor to a scripted control without real sleeps."""
    fake = FakeControl([Liveness.RUNNING, Liveness.ABSENT])

    def build(logger=None):
        return TerminationSupervisor(control=fake, logger=logger, loop_count=3,
                                     initial_interval=0.001, label="gvproxy", sleep=lambda s: None)

    monkeypatch.setattr(cli, "TerminationSupervisor", build)
    monkeypatch.setattr(cli, "setup_logging", mock.Mock())
    monkeypatch.setattr(cli.setproctitle, "setproctitle", mock.Mock())
    return fake


def test_stop_pid(control):
    assert cli.main(["stop", "4242"]) == cli.EXIT_OK
    assert control.stop_calls == [("stop", 4242, False)]


def test_stop_force(control):
    assert cli.main(["stop", "4242", "--force"]) == cli.EXIT_OK
    assert control.stop_calls == [("stop", 4242, True)]


def test_stop_from_pid_file(control, tmp_path):
    pid_path = tmp_path / "gvproxy.pid"
    pid_path.write_text("31337")

    assert cli.main(["stop", "--pid-file", str(pid_path)]) == cli.EXIT_OK
    assert control.stop_calls == [("stop", 31337, False)]
    assert not pid_path.exists()


def test_stop_without_pid_file_is_noop(control, tmp_path):
    assert cli.main(["stop", "--pid-file", str(tmp_path / "none.pid")]) == cli.EXIT_OK
    assert control.events == []


def test_timeout_exit_code(control):
    control.states = [Liveness.RUNNING]
    assert cli.main(["stop", "4242"]) == cli.EXIT_FAILURE


@pytest.mark.parametrize("argv", [
    ["stop", "abc"],
    ["stop", "0"],
    ["stop", "1", "2"],
    ["stop", "1", "--pid-file", "x.pid"],
    ["stop", "--pid-file"],
    ["status"],
    ["bogus"],
    [],
])
def test_usage_errors(control, argv, capsys):
    assert cli.main(argv) == cli.EXIT_USAGE
    captured = capsys.readouterr()
    assert "Usage:" in captured.err + captured.out
    assert control.stop_calls == []


def test_status(control, capsys):
    control.states = [Liveness.RUNNING]
    assert cli.main(["status", "10"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "running"

    control.states = [Liveness.ABSENT]
    assert cli.main(["status", "10"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "stopped"


def test_help(control, capsys):
    assert cli.main(["help"]) == cli.EXIT_OK
    assert "reaper stop" in capsys.readouterr().out


def test_verbose_enables_debug(control):
    cli.main(["--verbose", "help"])
    cli.setup_logging.assert_called_once_with(cli.logging.DEBUG)


def test_bad_budget_exits_without_signalling(monkeypatch, caplog):
    monkeypatch.setattr(cli, "setup_logging", mock.Mock())
    monkeypatch.setattr(cli.setproctitle, "setproctitle", mock.Mock())
    monkeypatch.setattr(cli.config, "STOP_LOOP_COUNT", 0)
    control = mock.Mock()
    monkeypatch.setattr("reaper.local.supervisor.supervisor.get_process_control", lambda: control)

    assert cli.main(["stop", "4242"]) == cli.EXIT_FAILURE
    assert control.method_calls == []
    assert "Invalid stop budget" in caplog.text
