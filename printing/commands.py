# printing/commands.py

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import Sequence

from printing.printer_base import CommandError

logger = logging.getLogger(__name__)

# Output is scraped with English regexes, so pin the locale.
_C_LOCALE = {"LANG": "C", "LC_ALL": "C"}


def run_command(argv: Sequence[str]) -> str:
    """
    Run one CUPS command and return its stdout.

    Arguments go straight to the process (no shell), so printer names and
    paths are never re-parsed. There is no timeout: a hung command blocks.
    """
    cmd = list(argv)
    logger.debug("Running %s", shlex.join(cmd))

    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            env={**os.environ, **_C_LOCALE},
        )
    except OSError as e:
        raise CommandError(f"could not run '{cmd[0]}': {e}") from e

    if proc.returncode != 0:
        out = (proc.stderr or "").strip() or (proc.stdout or "").strip()
        raise CommandError(f"{shlex.join(cmd)} failed (rc={proc.returncode}): {out}")

    return proc.stdout or ""
