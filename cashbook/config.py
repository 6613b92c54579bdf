"""Environment-driven configuration for the cashbook front ends."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from .exceptions import ConfigurationError


@dataclass(frozen=True)
class Settings:
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    table: str = "transactions"
    data_dir: Path = Path("data")
    request_timeout: float = 10.0
    env_name: str = "prod"
    allowed_origins: List[str] = field(default_factory=list)

    @property
    def uses_remote(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def is_development(self) -> bool:
        return self.env_name in {"dev", "development"}

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        url = (env.get("CASHBOOK_SUPABASE_URL") or "").strip() or None
        key = (env.get("CASHBOOK_SUPABASE_KEY") or "").strip() or None
        if bool(url) != bool(key):
            raise ConfigurationError(
                "CASHBOOK_SUPABASE_URL and CASHBOOK_SUPABASE_KEY must be set together"
            )

        raw_timeout = env.get("CASHBOOK_REQUEST_TIMEOUT", "10")
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(
                f"CASHBOOK_REQUEST_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            ) from exc
        if timeout <= 0:
            raise ConfigurationError("CASHBOOK_REQUEST_TIMEOUT must be greater than zero")

        origins = env.get("CASHBOOK_ALLOWED_ORIGINS", "")
        return cls(
            supabase_url=url,
            supabase_key=key,
            table=(env.get("CASHBOOK_TABLE") or "transactions").strip(),
            data_dir=Path(env.get("CASHBOOK_DATA_DIR") or "data"),
            request_timeout=timeout,
            env_name=(env.get("CASHBOOK_ENV") or "prod").lower(),
            allowed_origins=[origin.strip() for origin in origins.split(",") if origin.strip()],
        )
