"""Runtime settings read from ``ACHIEVEMENTS_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .models import SUBMIT_DELAY_MS

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@dataclass
class AppConfig:
    store_path: Path
    data_dir: Path
    log_file: Path
    log_level: str = "INFO"
    submit_delay_ms: int = SUBMIT_DELAY_MS


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("%s=%r is not an integer, using %d", name, raw, default)
        return default
    if value < 0:
        logger.warning("%s=%d is negative, using %d", name, value, default)
        return default
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    env = os.environ if env is None else env
    level = env.get("ACHIEVEMENTS_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Unknown log level %r, using INFO", level)
        level = "INFO"
    return AppConfig(
        store_path=Path(
            env.get("ACHIEVEMENTS_STORE_PATH", str(Path.home() / ".achievement_dashboard.json"))
        ).expanduser(),
        data_dir=Path(env.get("ACHIEVEMENTS_DATA_DIR", str(PROJECT_ROOT / "data"))).expanduser(),
        log_file=Path(env.get("ACHIEVEMENTS_LOG_FILE", "logs/achievements.log")).expanduser(),
        log_level=level,
        submit_delay_ms=_int_setting(env, "ACHIEVEMENTS_SUBMIT_DELAY_MS", SUBMIT_DELAY_MS),
    )
