"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .models.debt import STRATEGIES

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_positive_int(name: str, default: int) -> int:
    """Read a positive integer from the environment."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a positive integer, got {value!r}") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return parsed


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "PayoffSage"
    DEFAULT_MAX_MONTHS = 1200

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("PAYOFFSAGE_DEV_MODE", default=True)
        self.MAX_MONTHS = _env_positive_int("PAYOFFSAGE_MAX_MONTHS", self.DEFAULT_MAX_MONTHS)
        self.DEFAULT_STRATEGY = os.getenv("PAYOFFSAGE_DEFAULT_STRATEGY", "snowball").strip().lower()
        if self.DEFAULT_STRATEGY not in STRATEGIES:
            raise ValueError(
                f"PAYOFFSAGE_DEFAULT_STRATEGY must be one of {', '.join(STRATEGIES)}."
            )

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and exports live."""

        data_root = os.getenv("PAYOFFSAGE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path
