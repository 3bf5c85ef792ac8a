import pytest

from printing.commands import run_command
from printing.printer_base import CommandError, PrinterError, wrap_error, PrinterNotFoundError
from tests.fakes.fake_cups import FakeProc


def test_run_command_returns_stdout_and_pins_locale(monkeypatch):
    seen = {}

    def fake_run(cmd, capture_output, text, env):
        seen.update(cmd=cmd, capture_output=capture_output, text=text, env=env)
        return FakeProc(stdout="printer A is idle.\n")

    monkeypatch.setattr("subprocess.run", fake_run)

    assert run_command(["lpstat", "-p"]) == "printer A is idle.\n"
    assert seen["cmd"] == ["lpstat", "-p"]
    assert seen["capture_output"] is True and seen["text"] is True
    assert seen["env"]["LC_ALL"] == "C"


def test_run_command_raises_on_nonzero_exit(monkeypatch):
    monkeypatch.setattr("subprocess.run", lambda *a, **k: FakeProc(returncode=1, stderr="lpstat: No destinations added."))

    with pytest.raises(CommandError, match=r"lpstat -p failed \(rc=1\): lpstat: No destinations added\."):
        run_command(["lpstat", "-p"])


def test_run_command_raises_when_binary_missing(monkeypatch):
    def fake_run(*args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "cupsenable")

    monkeypatch.setattr("subprocess.run", fake_run)

    with pytest.raises(CommandError, match="could not run 'cupsenable'"):
        run_command(["cupsenable", "P"])


def test_wrap_error_keeps_printer_error_type():
    err = wrap_error("print", PrinterNotFoundError("Printer not found: X"))
    assert isinstance(err, PrinterNotFoundError)
    assert str(err) == "Failed to print: Printer not found: X"


def test_wrap_error_generalizes_other_exceptions():
    err = wrap_error("print", OSError("disk full"))
    assert type(err) is PrinterError
    assert str(err) == "Failed to print: disk full"
