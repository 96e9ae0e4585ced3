"""Serialized conversion result handed to the transport layer."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ConvertResponse(BaseModel):
    format: str = "btm"
    # BTM entity dicts, for every output format
    entities: list[dict[str, Any]] = Field(default_factory=list)
    intermediate: str | None = None
    count: int = 0
    patterns: list[dict[str, Any]] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    processing_time_ms: float = 0.0
