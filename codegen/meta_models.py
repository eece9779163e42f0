from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Iterator, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator

from codegen.errors import InvalidConfigError, MissingProviderError


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    STRING_ARRAY = "string[]"
    NUMBER_ARRAY = "number[]"


class Provider(str, Enum):
    SQLITE = "sqlite"
    PG = "pg"
    MYSQL = "mysql"


PROVIDER_ALIASES = {
    "postgres": "pg",
    "postgresql": "pg",
}


def _normalize_provider(value: Any) -> Any:
    if isinstance(value, str):
        v = value.strip().lower()
        if not v:
            return None
        return PROVIDER_ALIASES.get(v, v)
    return value


class DefaultFn(BaseModel):
    """A default produced by a generator function, e.g. `() => new Date()`."""
    fn: str


OnDelete = Literal["cascade", "restrict", "no action", "set null", "set default"]


class FieldReference(BaseModel):
    model: str
    field: str
    onDelete: Optional[OnDelete] = None


class FieldAttribute(BaseModel):
    type: FieldType
    required: bool = False
    unique: bool = False
    bigint: bool = False
    defaultValue: Optional[Any] = None
    references: Optional[FieldReference] = None

    @field_validator("defaultValue", mode="before")
    @classmethod
    def _coerce_default_fn(cls, v: Any) -> Any:
        # JSON documents spell generator defaults as {"fn": "..."}
        if isinstance(v, dict) and set(v) == {"fn"}:
            return DefaultFn(fn=v["fn"])
        return v


class AuthTable(BaseModel):
    modelName: str
    fields: Dict[str, FieldAttribute] = Field(default_factory=dict)


class DbSchema(RootModel[Dict[str, AuthTable]]):
    """Table key -> table. Insertion order is the emitted order."""

    def items(self) -> Iterator[Tuple[str, AuthTable]]:
        return iter(self.root.items())

    def tables(self) -> Iterator[AuthTable]:
        return iter(self.root.values())

    def __len__(self) -> int:
        return len(self.root)


class AdapterConfig(BaseModel):
    provider: Optional[Provider] = None
    camelCase: bool = False
    usePlural: bool = False

    @field_validator("provider", mode="before")
    @classmethod
    def _alias_provider(cls, v: Any) -> Any:
        return _normalize_provider(v)


class DatabaseOptions(BaseModel):
    useNumberId: bool = False


class AdvancedOptions(BaseModel):
    database: DatabaseOptions = Field(default_factory=DatabaseOptions)


class AuthOptions(BaseModel):
    advanced: AdvancedOptions = Field(default_factory=AdvancedOptions)


class GenerationOptions(BaseModel):
    """Fully resolved generation settings, built once per run."""
    model_config = ConfigDict(frozen=True)

    provider: Provider
    camelCase: bool = False
    usePlural: bool = False
    useNumberId: bool = False

    @classmethod
    def resolve(
        cls,
        adapter: AdapterConfig | dict | None,
        options: AuthOptions | dict | None = None,
    ) -> "GenerationOptions":
        try:
            adapter = AdapterConfig.model_validate(adapter or {})
            options = AuthOptions.model_validate(options or {})
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid adapter or auth options: {e}") from e
        if adapter.provider is None:
            raise MissingProviderError()
        return cls(
            provider=adapter.provider,
            camelCase=adapter.camelCase,
            usePlural=adapter.usePlural,
            useNumberId=options.advanced.database.useNumberId,
        )


class GeneratedSchema(BaseModel):
    code: str
    fileName: str
    overwrite: bool
