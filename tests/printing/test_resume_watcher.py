import threading
import time

from printing.directory import PrinterRecord
from printing.resume_watcher import PrinterResumeWatcher, watch_and_resume_printers
from tests.fakes.fake_cups import FakeCups
from tests.helpers import wait_for

FOUR_PRINTERS = (
    "printer HP_Office is idle.  enabled since today\n"
    "printer Canon_TS3300 is idle.  enabled since today\n"
    "printer Brother_Label disabled since today -\n"
    "printer Epson_Spare disabled since today -\n"
    "system default destination: Canon_TS3300\n"
)


def test_allow_list_resumes_only_listed_disabled_printer(monkeypatch):
    fake = FakeCups(status_report=FOUR_PRINTERS)
    monkeypatch.setattr("subprocess.run", fake)

    resumed = []
    watcher = PrinterResumeWatcher(
        printer_names=["HP_Office", "Canon_TS3300", "Brother_Label"],
        on_resume=resumed.append,
    )

    assert watcher.check_once() == ["Brother_Label"]
    assert resumed == ["Brother_Label"]
    assert fake.commands("cupsenable") == [["cupsenable", "Brother_Label"]]

    # Epson_Spare is disabled too, but outside the allow-list: never inspected.
    assert ["lpstat", "-p", "Epson_Spare"] not in fake.calls


def test_each_tick_resumes_again_while_printer_stays_disabled(monkeypatch):
    fake = FakeCups(status_report=FOUR_PRINTERS)
    monkeypatch.setattr("subprocess.run", fake)

    resumed = []
    watcher = PrinterResumeWatcher(
        printer_names=["HP_Office", "Canon_TS3300", "Brother_Label"],
        on_resume=resumed.append,
    )
    watcher.check_once()
    watcher.check_once()

    assert resumed == ["Brother_Label", "Brother_Label"]
    assert len(fake.commands("cupsenable")) == 2


def test_without_allow_list_all_printers_are_checked(monkeypatch):
    fake = FakeCups(status_report=FOUR_PRINTERS)
    monkeypatch.setattr("subprocess.run", fake)

    assert PrinterResumeWatcher().check_once() == ["Brother_Label", "Epson_Spare"]


def test_start_is_idempotent(monkeypatch):
    watcher = PrinterResumeWatcher()

    thread_created = 0

    class SpyThread:
        def __init__(self, *args, **kwargs):
            nonlocal thread_created
            thread_created += 1

        def start(self):
            pass

    monkeypatch.setattr(threading, "Thread", SpyThread)

    watcher.start()
    watcher.start()
    assert thread_created == 1


def test_tick_errors_go_to_callback_and_polling_continues(monkeypatch):
    ticks = {"n": 0}

    def flaky_printers():
        ticks["n"] += 1
        if ticks["n"] == 1:
            raise RuntimeError("lpstat exploded")
        return [PrinterRecord("Canon_TS3300", "usb://Canon", "idle", True, True)]

    monkeypatch.setattr("printing.directory.get_all_printers", flaky_printers)
    monkeypatch.setattr("printing.printer_state.is_printer_enabled", lambda name: True)

    errors = []
    watcher = watch_and_resume_printers(interval=0.01, on_error=errors.append)
    try:
        wait_for(lambda: ticks["n"] >= 3)
    finally:
        watcher.stop()

    assert len(errors) == 1
    assert "lpstat exploded" in str(errors[0])


def test_stop_prevents_further_ticks(monkeypatch):
    ticks = {"n": 0}

    def count_ticks():
        ticks["n"] += 1
        return []

    monkeypatch.setattr("printing.directory.get_all_printers", count_ticks)

    watcher = watch_and_resume_printers(interval=0.01)
    assert watcher.running is True
    wait_for(lambda: ticks["n"] >= 2)

    watcher.stop()
    watcher._thread.join(timeout=1)
    seen = ticks["n"]
    time.sleep(0.05)

    assert watcher.running is False
    assert ticks["n"] == seen


def test_single_printer_name_is_not_split_into_characters(monkeypatch):
    fake = FakeCups(status_report=FOUR_PRINTERS)
    monkeypatch.setattr("subprocess.run", fake)

    watcher = PrinterResumeWatcher(printer_names="Brother_Label")

    assert watcher.check_once() == ["Brother_Label"]
    assert ["lpstat", "-p", "Epson_Spare"] not in fake.calls


def test_restart_during_tick_never_overlaps_ticks(monkeypatch):
    lock = threading.Lock()
    state = {"active": 0, "max_active": 0, "ticks": 0}
    in_tick = threading.Event()

    def slow_printers():
        with lock:
            state["active"] += 1
            state["max_active"] = max(state["max_active"], state["active"])
        in_tick.set()
        time.sleep(0.05)
        with lock:
            state["active"] -= 1
            state["ticks"] += 1
        return []

    monkeypatch.setattr("printing.directory.get_all_printers", slow_printers)

    watcher = watch_and_resume_printers(interval=0.01)
    try:
        assert in_tick.wait(timeout=1)
        watcher.stop()
        watcher.start()
        wait_for(lambda: state["ticks"] >= 5)
    finally:
        watcher.stop()

    assert state["max_active"] == 1
