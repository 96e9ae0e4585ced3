"""Process configuration from environment variables (CLI only)."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from svgsketch.models.requests import OutputFormat


class Settings(BaseSettings):
    svgsketch_log_level: str = "info"

    # 1 user unit (px) = 1 mm when the sketch is in metres
    default_scale: float = 0.001
    default_output_format: OutputFormat = "btm"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

