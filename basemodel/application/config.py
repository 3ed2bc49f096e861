from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _default_save_dir() -> Path:
    data_home = os.getenv("XDG_DATA_HOME", "").strip()
    base = Path(data_home) if data_home else Path.home() / ".local" / "share"
    return base / "basemodel"


@dataclass(frozen=True)
class Settings:
    resource_dir: Path = field(default_factory=lambda: Path("resources"))
    save_dir: Path = field(default_factory=_default_save_dir)
    atomic_writes: bool = True
    metrics_enabled: bool = True
    log_level: str = "INFO"


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in {"0", "false", "no"}


def load_settings(*, dotenv: bool = True) -> Settings:
    if dotenv:
        load_dotenv()
    resource_dir = os.getenv("BASEMODEL_RESOURCE_DIR", "").strip()
    save_dir = os.getenv("BASEMODEL_SAVE_DIR", "").strip()
    settings = Settings(
        resource_dir=Path(resource_dir) if resource_dir else Path("resources"),
        save_dir=Path(save_dir) if save_dir else _default_save_dir(),
        atomic_writes=_flag("BASEMODEL_ATOMIC_WRITES", "1"),
        metrics_enabled=_flag("BASEMODEL_METRICS", "1"),
        log_level=os.getenv("BASEMODEL_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
    logger.info(
        "Settings loaded: resource_dir=%s, save_dir=%s, atomic_writes=%s, metrics=%s",
        settings.resource_dir,
        settings.save_dir,
        settings.atomic_writes,
        settings.metrics_enabled,
    )
    return settings


def configure_logging(level: str | int = "INFO") -> None:
    logging.basicConfig(
        level=level.upper() if isinstance(level, str) else level,
        format=LOG_FORMAT,
    )
