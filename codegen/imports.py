# codegen/imports.py
from __future__ import annotations
from typing import List

from codegen.meta_models import DbSchema, GenerationOptions, Provider


def has_bigint(schema: DbSchema) -> bool:
    return any(f.bigint for t in schema.tables() for f in t.fields.values())


def resolve_imports(schema: DbSchema, options: GenerationOptions) -> List[str]:
    """
    Drizzle symbols needed by the whole schema, in emission order:
    table constructor, string columns, bigint, timestamp/boolean,
    integer, serial. The order is part of the output and is not sorted.
    """
    provider = options.provider
    candidates = [
        f"{provider.value}Table",
        "varchar, text" if provider is Provider.MYSQL else "text",
        "bigint" if provider is not Provider.SQLITE and has_bigint(schema) else "",
        "timestamp, boolean" if provider is not Provider.SQLITE else "",
        "int" if provider is Provider.MYSQL else "integer",
        "serial" if provider is Provider.PG and options.useNumberId else "",
    ]
    symbols: List[str] = []
    for c in candidates:
        symbols.extend(s.strip() for s in c.split(",") if s.strip())
    return symbols


def generate_import(schema: DbSchema, options: GenerationOptions) -> str:
    symbols = ", ".join(resolve_imports(schema, options))
    return f'import {{ {symbols} }} from "drizzle-orm/{options.provider.value}-core";\n'
