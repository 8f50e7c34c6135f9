from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[2]
DEFAULT_DB_PATH = ROOT / "data" / "catalog.db"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    return default


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    items = tuple(part.strip() for part in raw.split(",") if part.strip())
    return items or default


@dataclass(frozen=True)
class Settings:
    db_path: Path = DEFAULT_DB_PATH
    seed_on_start: bool = True
    cors_origins: Tuple[str, ...] = ("*",)
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    monitor_budget_max: int = 4_500_000


def load_settings(env_file: Path | None = None) -> Settings:
    """Read settings from the environment, after loading ``.env`` from the project root."""
    load_dotenv(env_file or ROOT / ".env")
    db_path = os.getenv("RAKITPC_DB_PATH")
    return Settings(
        db_path=Path(db_path) if db_path else DEFAULT_DB_PATH,
        seed_on_start=_env_bool("RAKITPC_SEED_ON_START", True),
        cors_origins=_env_list("RAKITPC_CORS_ORIGINS", ("*",)),
        host=os.getenv("RAKITPC_HOST", "127.0.0.1").strip() or "127.0.0.1",
        port=_env_int("RAKITPC_PORT", 8000),
        log_level=os.getenv("RAKITPC_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        monitor_budget_max=_env_int("RAKITPC_MONITOR_BUDGET_MAX", 4_500_000),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="[rakitpc] %(levelname)s %(name)s: %(message)s",
    )
