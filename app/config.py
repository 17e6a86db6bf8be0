from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class AppConfig:
    host: str
    port: int
    reload: bool
    log_level: str


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def load_config_from_env() -> AppConfig:
    """
    Параметры HTTP-процесса. Настройки MongoDB живут в infrastructure/db/mongo.py.
    """
    return AppConfig(
        host=os.getenv("APP_HOST", "0.0.0.0"),
        port=int(os.getenv("APP_PORT", "8080")),
        reload=_env_flag("APP_RELOAD"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
