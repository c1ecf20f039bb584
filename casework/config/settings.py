# casework/config/settings.py

from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGED_POLICY_PACKS = Path(__file__).resolve().parent.parent / "policy_packs"


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CASEWORK_",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "snap-casework-sim"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    version: str = "0.1.0"

    # --- Policy pack ---
    policy_pack_dir: Path = PACKAGED_POLICY_PACKS / "snap-illinois-fy2026-v1"

    # --- Simulation ---
    simulation_start_date: date = date(2026, 1, 1)
    max_workers: int = Field(1, ge=1, le=64)
    default_run_count: int = Field(100, ge=1)
    max_run_count: int = Field(1000, ge=1)

    # --- Observability ---
    enable_metrics: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()
