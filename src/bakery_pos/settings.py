from __future__ import annotations

import json
from decimal import Decimal
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "http://127.0.0.1:5173"]


def _parse_cors(v: Optional[str | List[str]]) -> List[str]:
    """
    Accept JSON array (e.g. '["http://localhost:5173"]') or
    comma-separated string ('http://localhost:5173,http://127.0.0.1:5173').
    """
    if v is None:
        return list(DEFAULT_CORS_ORIGINS)
    if isinstance(v, list):
        return v
    s = v.strip()
    if not s:
        return list(DEFAULT_CORS_ORIGINS)
    if s.startswith("["):
        try:
            parsed = json.loads(s)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list) and all(isinstance(x, str) for x in parsed):
            return parsed
    return [p.strip() for p in s.split(",") if p.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
        populate_by_name=True,
    )

    # --- API ---
    api_host: str = Field(default="127.0.0.1", validation_alias=AliasChoices("API_HOST",))
    api_port: int = Field(default=8000, validation_alias=AliasChoices("API_PORT",))
    cors_origins_raw: Optional[str | List[str]] = Field(
        default=None, validation_alias=AliasChoices("CORS_ORIGINS",)
    )
    log_level: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL",))

    # --- Store ---
    tax_rate: Decimal = Field(
        default=Decimal("8.5"), ge=0, validation_alias=AliasChoices("TAX_RATE",)
    )
    currency: str = Field(default="USD", validation_alias=AliasChoices("CURRENCY",))
    order_number_start: int = Field(
        default=3000, ge=0, validation_alias=AliasChoices("ORDER_NUMBER_START",)
    )
    strict_transitions: bool = Field(
        default=False, validation_alias=AliasChoices("STRICT_TRANSITIONS",)
    )
    seed_demo_data: bool = Field(
        default=True, validation_alias=AliasChoices("SEED_DEMO_DATA",)
    )

    @property
    def cors_origins(self) -> List[str]:
        return _parse_cors(self.cors_origins_raw)
