# generate/cli.py
import copy
import logging
from pathlib import Path
from typing import Optional

import typer

from adapters.formatters import get_formatter
from adapters.json_loader import JsonSchemaLoader
from codegen.errors import InvalidSchemaError, SchemaGenerationError
from codegen.generate_schema import generate_drizzle_schema_sync
from codegen.meta_models import DbSchema
from codegen.settings import get_settings
from core.ports import SchemaLoader

app = typer.Typer(help="Drizzle auth-schema generator CLI")
logger = logging.getLogger("generate.cli")


@app.callback()
def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))


# ---------------------------
# Core utilities
# ---------------------------
def _require_valid_document(loader: JsonSchemaLoader) -> dict:
    try:
        return loader.document()
    except InvalidSchemaError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)


def _load_tables(loader: SchemaLoader) -> DbSchema:
    try:
        return loader.load()
    except InvalidSchemaError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)


def _adapter_config(doc: dict, provider: Optional[str], camel_case: Optional[bool],
                    plural: Optional[bool]) -> dict:
    # CLI flags win over the document's adapter block, which wins over env
    base = dict(doc.get("adapter") or {})
    if provider is not None:
        base["provider"] = provider
    elif not base.get("provider") and get_settings().DRIZZLE_PROVIDER:
        base["provider"] = get_settings().DRIZZLE_PROVIDER
    if camel_case is not None:
        base["camelCase"] = camel_case
    if plural is not None:
        base["usePlural"] = plural
    return base


def _auth_options(doc: dict, number_id: Optional[bool]) -> dict:
    opts = copy.deepcopy(doc.get("options") or {})
    if number_id is not None:
        opts.setdefault("advanced", {}).setdefault("database", {})["useNumberId"] = number_id
    return opts


# ---------------------------
# Commands
# ---------------------------
@app.command(help="Validate a schema document against the bundled JSON-Schema.")
def validate(schema: str = typer.Argument(..., help="Path to the schema JSON document")):
    loader = JsonSchemaLoader(schema)
    _require_valid_document(loader)
    tables = _load_tables(loader)
    typer.echo(f"✅ {schema} is valid ({len(tables)} tables).")


@app.command(help="Generate a Drizzle schema module from a schema document.")
def drizzle(
    schema: str = typer.Argument(..., help="Path to the schema JSON document"),
    provider: Optional[str] = typer.Option(None, help="Target provider: sqlite | pg | mysql"),
    out: Optional[str] = typer.Option(None, help="Output .ts file path"),
    camel_case: Optional[bool] = typer.Option(None, "--camel-case/--snake-case", help="Keep camelCase identifiers"),
    plural: Optional[bool] = typer.Option(None, "--plural/--singular", help="Pluralize table names"),
    number_id: Optional[bool] = typer.Option(None, "--number-id/--text-id", help="Use auto-increment integer ids"),
    formatter: Optional[str] = typer.Option(None, help="Formatter: compact | prettier"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Overwrite an existing file without asking"),
    stdout: bool = typer.Option(False, "--stdout", help="Print the code instead of writing it"),
):
    loader = JsonSchemaLoader(schema)
    doc = _require_valid_document(loader)
    tables = _load_tables(loader)
    try:
        result = generate_drizzle_schema_sync(
            tables,
            _adapter_config(doc, provider, camel_case, plural),
            _auth_options(doc, number_id),
            file=out,
            formatter=get_formatter(formatter),
        )
    except SchemaGenerationError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    if stdout:
        typer.echo(result.code, nl=False)
        return

    if result.overwrite and not yes:
        typer.confirm(f"{result.fileName} already exists. Overwrite?", abort=True)

    target = Path(result.fileName)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(result.code, encoding="utf-8")
    logger.info("Wrote %s (%d bytes)", target, len(result.code))
    typer.echo(f"✅ Drizzle schema written to {result.fileName}")


if __name__ == "__main__":
    app()
