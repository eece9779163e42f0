from __future__ import annotations
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_SCHEMA_OUT = "./auth-schema.ts"


class Settings:
    LOG_LEVEL: str
    SCHEMA_OUT: str
    DRIZZLE_PROVIDER: Optional[str]
    SCHEMA_FORMATTER: str
    PRETTIER_BIN: str
    FORMATTER_TIMEOUT: float

    def __init__(self) -> None:
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.SCHEMA_OUT = os.getenv("SCHEMA_OUT", DEFAULT_SCHEMA_OUT)
        self.DRIZZLE_PROVIDER = os.getenv("DRIZZLE_PROVIDER") or None
        self.SCHEMA_FORMATTER = os.getenv("SCHEMA_FORMATTER", "compact").lower()
        self.PRETTIER_BIN = os.getenv("PRETTIER_BIN", "npx prettier")
        self.FORMATTER_TIMEOUT = float(os.getenv("FORMATTER_TIMEOUT", "30"))


@lru_cache
def get_settings() -> Settings:
    return Settings()
