# codegen/errors.py
from __future__ import annotations

DRIZZLE_ADAPTER_DOCS = "https://better-auth.com/docs/adapters/drizzle"


class SchemaGenerationError(Exception):
    pass


class MissingProviderError(SchemaGenerationError):
    """Raised when the Drizzle adapter config carries no `provider`."""

    def __init__(self) -> None:
        super().__init__(
            "Database provider type is undefined during Drizzle schema generation. "
            "Please define a `provider` in the Drizzle adapter config. "
            f"Read more at {DRIZZLE_ADAPTER_DOCS}"
        )


class UnsupportedFieldTypeError(SchemaGenerationError):
    def __init__(self, field_key: str, field_type: object, provider: object = None) -> None:
        self.field_key = field_key
        self.field_type = field_type
        self.provider = provider
        where = f" for provider '{provider}'" if provider is not None else ""
        super().__init__(f"Unsupported field type '{field_type}' on field '{field_key}'{where}")


class FormatterError(SchemaGenerationError):
    pass


class InvalidSchemaError(SchemaGenerationError):
    """Schema document or tables that fail JSON-Schema or model validation."""


class InvalidConfigError(SchemaGenerationError):
    pass


class InvalidDefaultValueError(SchemaGenerationError):
    def __init__(self, field_key: str, value: object, reason: str) -> None:
        self.field_key = field_key
        self.value = value
        super().__init__(f"Invalid default value {value!r} on field '{field_key}': {reason}")
