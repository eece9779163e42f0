# codegen/type_mapping.py
from __future__ import annotations
import logging
from typing import Optional

from codegen.errors import MissingProviderError, UnsupportedFieldTypeError
from codegen.meta_models import FieldAttribute, FieldType, GenerationOptions, Provider
from codegen.naming import convert_to_snake_case

logger = logging.getLogger(__name__)


def _text(name: str) -> str:
    return f"text('{name}')"


def _varchar(name: str, length: int) -> str:
    return f"varchar('{name}', {{ length: {length} }})"


def _integer(name: str, mode: Optional[str] = None) -> str:
    if mode:
        return f"integer('{name}', {{ mode: '{mode}' }})"
    return f"integer('{name}')"


def _bigint(name: str) -> str:
    return f"bigint('{name}', {{ mode: 'number' }})"


def primary_key(provider: Provider, use_number_id: bool) -> str:
    """
    Drizzle `id` column for a table. Depends only on the provider and
    whether numeric ids are in use.
    """
    if use_number_id:
        match provider:
            case Provider.PG:
                return "serial('id').primaryKey()"
            case Provider.MYSQL:
                return "int('id').autoincrement().primaryKey()"
            case Provider.SQLITE:
                return "integer('id', { mode: 'number' }).primaryKey({ autoIncrement: true })"
    else:
        match provider:
            case Provider.MYSQL:
                return "varchar('id', { length: 36 }).primaryKey()"
            case Provider.PG | Provider.SQLITE:
                return "text('id').primaryKey()"
    raise MissingProviderError()


def _id_reference_type(name: str, provider: Provider, use_number_id: bool) -> str:
    # columns pointing at another table's `id` follow the primary key type
    if use_number_id:
        return f"int('{name}')" if provider is Provider.MYSQL else _integer(name)
    if provider is Provider.MYSQL:
        return _varchar(name, 36)
    return _text(name)


def _scalar_type(name: str, field_type: FieldType, field: FieldAttribute, provider: Provider) -> Optional[str]:
    match (field_type, provider):
        case (FieldType.STRING, Provider.SQLITE | Provider.PG):
            return _text(name)
        case (FieldType.STRING, Provider.MYSQL):
            if field.unique:
                return _varchar(name, 255)
            if field.references:
                return _varchar(name, 36)
            return _text(name)
        case (FieldType.BOOLEAN, Provider.SQLITE):
            return _integer(name, "boolean")
        case (FieldType.BOOLEAN, Provider.PG | Provider.MYSQL):
            return f"boolean('{name}')"
        case (FieldType.NUMBER, Provider.SQLITE):
            return _integer(name)
        case (FieldType.NUMBER, Provider.PG):
            return _bigint(name) if field.bigint else _integer(name)
        case (FieldType.NUMBER, Provider.MYSQL):
            return _bigint(name) if field.bigint else f"int('{name}')"
        case (FieldType.DATE, Provider.SQLITE):
            return _integer(name, "timestamp")
        case (FieldType.DATE, Provider.PG | Provider.MYSQL):
            return f"timestamp('{name}')"
    return None


def drizzle_type(field_key: str, field: FieldAttribute, options: GenerationOptions) -> str:
    """
    Map a logical field to its Drizzle column constructor, e.g.
    `text('user_id')` or `integer('created_at', { mode: 'timestamp' })`.

    Array types get `.array()` appended on every provider, mysql included.
    """
    provider = options.provider
    if provider is None:
        raise MissingProviderError()

    name = convert_to_snake_case(field_key, options.camelCase)

    if field.references is not None and field.references.field == "id":
        return _id_reference_type(name, provider, options.useNumberId)

    try:
        field_type = FieldType(field.type)
    except ValueError:
        raise UnsupportedFieldTypeError(field_key, field.type, provider.value) from None

    match field_type:
        case FieldType.STRING_ARRAY:
            # never varchar, even for unique/reference columns on mysql
            fragment = f"{_text(name)}.array()"
        case FieldType.NUMBER_ARRAY:
            base = _scalar_type(name, FieldType.NUMBER, field, provider)
            fragment = f"{base}.array()" if base else None
        case _:
            fragment = _scalar_type(name, field_type, field, provider)

    if fragment is None:
        raise UnsupportedFieldTypeError(field_key, field_type.value, provider.value)
    logger.debug("Mapped %s (%s) -> %s", field_key, field_type.value, fragment)
    return fragment
