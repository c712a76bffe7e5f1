"""Konfiguracja pcx — zmienne środowiskowe z wartościami domyślnymi."""

from __future__ import annotations

import logging
import os
import pathlib

from rich.console import Console
from rich.logging import RichHandler

ROOT            = pathlib.Path(__file__).resolve().parent.parent
DEFAULT_RULESET = ROOT / "data" / "Policies.json"


def ruleset_path() -> pathlib.Path:
    return pathlib.Path(os.getenv("PCX_RULESET", str(DEFAULT_RULESET)))


def primary_source() -> str:
    return os.getenv("PCX_PRIMARY_SOURCE", "base")


def log_level() -> str:
    return os.getenv("PCX_LOG_LEVEL", "WARNING").upper()


def setup_logging(level: str | None = None) -> None:
    """Logi na stderr przez RichHandler; poziom z argumentu lub PCX_LOG_LEVEL."""
    logging.basicConfig(
        level=(level or log_level()).upper(),
        format="%(name)s: %(message)s",
        handlers=[RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
        )],
        force=True,
    )
