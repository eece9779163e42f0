# codegen/generate_schema.py
from __future__ import annotations
import asyncio
import logging
from functools import reduce
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from adapters.formatters import CompactFormatter
from codegen.errors import InvalidSchemaError, UnsupportedFieldTypeError
from codegen.meta_models import (
    AdapterConfig,
    AuthOptions,
    DbSchema,
    GeneratedSchema,
    GenerationOptions,
)
from codegen.imports import generate_import
from codegen.settings import get_settings
from codegen.table_builder import build_table
from core.ports import CodeFormatter

logger = logging.getLogger(__name__)


def validate_tables(schema: DbSchema | Mapping[str, Any], provider: Optional[str] = None) -> DbSchema:
    """
    Build a DbSchema, turning pydantic failures into SchemaGenerationError
    subclasses. An unknown field `type` becomes UnsupportedFieldTypeError.
    """
    try:
        return DbSchema.model_validate(schema)
    except ValidationError as e:
        for err in e.errors():
            loc = err["loc"]
            # ..., "fields", <field>, "type"
            if len(loc) >= 3 and loc[-3] == "fields" and loc[-1] == "type" and err["type"] == "enum":
                raise UnsupportedFieldTypeError(str(loc[-2]), err.get("input"), provider) from e
        raise InvalidSchemaError(f"Schema model validation failed: {e}") from e


def render_schema(schema: DbSchema, options: GenerationOptions) -> str:
    """Unformatted Drizzle source: import header then one declaration per table."""
    return reduce(
        lambda acc, table: acc + f"\n{build_table(table, options)}\n",
        schema.tables(),
        generate_import(schema, options),
    )


async def generate_drizzle_schema(
    schema: DbSchema | Mapping[str, Any],
    adapter: AdapterConfig | Mapping[str, Any] | None,
    options: AuthOptions | Mapping[str, Any] | None = None,
    file: Optional[str] = None,
    formatter: Optional[CodeFormatter] = None,
) -> GeneratedSchema:
    """
    Generate a Drizzle schema module for `schema`.

    Raises MissingProviderError before doing any work when the adapter
    config has no provider. The returned `overwrite` flag reports whether
    `fileName` already exists; nothing is written here.
    """
    resolved = GenerationOptions.resolve(adapter, options)
    db_schema = validate_tables(schema, resolved.provider.value)
    file_path = file or get_settings().SCHEMA_OUT

    logger.info(
        "Generating Drizzle schema: provider=%s tables=%d useNumberId=%s",
        resolved.provider.value, len(db_schema), resolved.useNumberId,
    )
    code = render_schema(db_schema, resolved)

    formatter = formatter or CompactFormatter()
    formatted = await formatter.format(code)

    file_exists = Path(file_path).exists()
    if file_exists:
        logger.info("Target %s already exists; result marked for overwrite", file_path)

    return GeneratedSchema(code=formatted, fileName=file_path, overwrite=file_exists)


def generate_drizzle_schema_sync(*args: Any, **kwargs: Any) -> GeneratedSchema:
    return asyncio.run(generate_drizzle_schema(*args, **kwargs))
