"""
Runtime configuration.

Values come from the environment, with a `.env` in the working directory
loaded first (it never overrides variables that are already set).
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str] = None
    imagen_model: str = "imagen-4.0-generate-001"
    output_dir: Path = Path("output")
    printer_name: Optional[str] = None
    watch_printers: bool = False
    watch_interval: float = 1.0
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "Settings":
        load_dotenv()
        return Settings(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
            imagen_model=os.getenv("IMAGEN_MODEL", "imagen-4.0-generate-001"),
            output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            printer_name=os.getenv("PRINTER_NAME") or None,
            watch_printers=_env_flag("WATCH_PRINTERS", False),
            watch_interval=float(os.getenv("WATCH_INTERVAL", "1.0")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
