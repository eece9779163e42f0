# generate/loader.py
import json
from pathlib import Path

from jsonschema import ValidationError
from jsonschema.validators import Draft7Validator
from pydantic import ValidationError as ModelValidationError

from codegen.errors import InvalidSchemaError
from codegen.meta_models import DbSchema

SPEC_PATH = Path(__file__).resolve().parent / "schema_definitions" / "auth_schema.json"


def _load_spec() -> dict:
    try:
        spec = json.loads(SPEC_PATH.read_text(encoding="utf-8"))
    except Exception as e:
        raise InvalidSchemaError(f"Failed to read spec at {SPEC_PATH}: {e}") from e
    Draft7Validator.check_schema(spec)
    return spec


def load_document(path: str = "auth-schema.json") -> dict:
    """
    Read a schema document and validate it against the bundled JSON-Schema.
    Returns the raw document ({"tables": ..., "adapter"?: ..., "options"?: ...}).
    """
    doc_path = Path(path)
    if not doc_path.exists():
        raise InvalidSchemaError(f"Schema file not found at {path}")

    try:
        data = json.loads(doc_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidSchemaError(f"Schema file {path} is not valid JSON: {e}") from e

    try:
        Draft7Validator(_load_spec()).validate(data)
    except ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise InvalidSchemaError(f"Schema validation failed at {where}: {e.message}") from e

    return data


def schema_from_document(data: dict) -> DbSchema:
    """Tables of an already validated document."""
    try:
        return DbSchema.model_validate(data["tables"])
    except ModelValidationError as e:
        raise InvalidSchemaError(f"Schema model validation failed: {e}") from e


def load_schema(path: str = "auth-schema.json") -> DbSchema:
    return schema_from_document(load_document(path))
