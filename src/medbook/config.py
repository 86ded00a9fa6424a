"""Settings read from the environment (.env is loaded by the entry point)."""

import os
from dataclasses import dataclass
from pathlib import Path

from medbook.infrastructure.phone import is_supported_region

DEFAULT_PHONE_REGION = "SG"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    phone_region: str | None = DEFAULT_PHONE_REGION
    seed_path: Path | None = None


def load_settings(environ=None) -> Settings:
    """Build Settings from MEDBOOK_* variables. Raises ValueError on bad values."""
    env = os.environ if environ is None else environ

    log_level = (env.get("MEDBOOK_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(f"MEDBOOK_LOG_LEVEL must be a logging level name, got {log_level!r}")

    region = env.get("MEDBOOK_PHONE_REGION", DEFAULT_PHONE_REGION).strip().upper() or None
    if not is_supported_region(region):
        raise ValueError(f"MEDBOOK_PHONE_REGION {region!r} is not a known region code")

    seed = (env.get("MEDBOOK_SEED_PATH") or "").strip()
    return Settings(
        log_level=log_level,
        phone_region=region,
        seed_path=Path(seed).resolve() if seed else None,
    )
