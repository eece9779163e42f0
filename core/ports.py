# core/ports.py
from __future__ import annotations
from typing import Protocol

from codegen.meta_models import DbSchema


class SchemaLoader(Protocol):
    def load(self) -> DbSchema: ...


class CodeFormatter(Protocol):
    """
    Lays out generated source. Implementations may only change
    whitespace/layout and must be idempotent.
    """
    async def format(self, code: str) -> str: ...
