import logging
import threading
from typing import Callable, Iterable, Optional

from printing import directory, printer_state

logger = logging.getLogger(__name__)


class PrinterResumeWatcher:
    """
    Polls CUPS and resumes any paused/disabled printer.

    IMPORTANT:
    - One thread, one tick at a time. A tick (list, then check + resume each
      printer in turn) always runs to completion before the next is scheduled.
    - stop() is cooperative: it prevents the next tick, it never interrupts one.
    - A failing tick is reported and the loop keeps going.
    """

    def __init__(
            self,
            interval: float = 1.0,
            printer_names: Optional[Iterable[str]] = None,
            on_resume: Optional[Callable[[str], None]] = None,
            on_error: Optional[Callable[[Exception], None]] = None,
    ):
        self._interval = interval
        if isinstance(printer_names, str):
            printer_names = [printer_names]
        self._printer_names = set(printer_names or ())
        self._on_resume = on_resume
        self._on_error = on_error

        self._thread: Optional[threading.Thread] = None
        # One event per run, so a stale thread from an earlier start() stays stopped.
        self._stop_event = threading.Event()
        self._tick_lock = threading.Lock()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> "PrinterResumeWatcher":
        if self._running:
            return self
        self._running = True
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run, args=(self._stop_event,), daemon=True)
        self._thread.start()
        return self

    def stop(self) -> None:
        self._running = False
        self._stop_event.set()

    def check_once(self) -> list[str]:
        """Run a single tick and return the names of the printers it resumed."""
        printers = directory.get_all_printers()
        if self._printer_names:
            printers = [p for p in printers if p.name in self._printer_names]

        resumed = []
        for printer in printers:
            if printer_state.is_printer_enabled(printer.name):
                continue
            printer_state.enable_printer(printer.name)
            resumed.append(printer.name)
            if self._on_resume:
                self._on_resume(printer.name)
        return resumed

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            try:
                # Serializes with a previous run that is still finishing its tick.
                with self._tick_lock:
                    if stop_event.is_set():
                        break
                    self.check_once()
            except Exception as e:
                if self._on_error:
                    self._on_error(e)
                else:
                    logger.exception("Printer resume check failed")

            if stop_event.wait(self._interval):
                break


def watch_and_resume_printers(**kwargs) -> PrinterResumeWatcher:
    """Start a watcher and return it; call .stop() on it to end polling."""
    return PrinterResumeWatcher(**kwargs).start()
