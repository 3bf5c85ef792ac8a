# printing/jobs.py

from __future__ import annotations

from typing import Optional

from printing.commands import run_command
from printing.printer_base import PrinterError, wrap_error


def get_print_job_status(job_id: Optional[str] = None) -> str:
    """Raw `lpq` output, for one job or the whole queue."""
    cmd = ["lpq", job_id] if job_id else ["lpq"]
    try:
        return run_command(cmd)
    except PrinterError as e:
        raise wrap_error("get job status", e) from e


def cancel_print_job(job_id: str) -> None:
    # Only tells us `cancel` accepted the request, not that the job stopped.
    try:
        run_command(["cancel", job_id])
    except PrinterError as e:
        raise wrap_error("cancel job", e) from e
