"""Application configuration from environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    tilegen_env: str = "development"
    tilegen_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Persisted parameter set; empty = store default location
    tilegen_parameters_file: Path | None = None

    # Canvas is (aspect, 1), matching a scene normalised to height 1
    tilegen_aspect_ratio: float = 1.0
    # Fixed seed for reproducible output; unset = fresh entropy per request
    tilegen_seed: int | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
