# codegen/table_builder.py
from __future__ import annotations
import json
import logging
import math
from typing import Any, List

from codegen.errors import InvalidDefaultValueError
from codegen.meta_models import AuthTable, DefaultFn, FieldAttribute, GenerationOptions
from codegen.naming import convert_to_snake_case, get_model_name
from codegen.type_mapping import drizzle_type, primary_key

logger = logging.getLogger(__name__)

DEFAULT_ON_DELETE = "cascade"


def _js_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    if isinstance(value, (int, float)):
        return repr(value)
    # json.dumps spells non-finite floats inside containers as NaN/Infinity too
    return json.dumps(value)


def _default_modifier(field_key: str, value: Any) -> str:
    if isinstance(value, DefaultFn):
        return f".$defaultFn({value.fn})"
    if callable(value):
        name = getattr(value, "__name__", None)
        if not isinstance(name, str) or not name.isidentifier():
            raise InvalidDefaultValueError(
                field_key, value, "callable defaults need a named function; use DefaultFn for expressions"
            )
        return f".$defaultFn({name})"
    if isinstance(value, str):
        return f".default({json.dumps(value)})"
    return f".default({_js_literal(value)})"


def build_column(field_key: str, field: FieldAttribute, options: GenerationOptions) -> str:
    """
    Column expression for one field: the mapped type followed by
    default, notNull, unique and references, in that order.
    """
    col = drizzle_type(field_key, field, options)

    if field.defaultValue is not None:
        col += _default_modifier(field_key, field.defaultValue)
    if field.required:
        col += ".notNull()"
    if field.unique:
        col += ".unique()"
    if field.references is not None:
        ref = field.references
        target = get_model_name(ref.model, options.usePlural)
        on_delete = ref.onDelete or DEFAULT_ON_DELETE
        col += f".references(() => {target}.{ref.field}, {{ onDelete: '{on_delete}' }})"
    return col


def build_table(table: AuthTable, options: GenerationOptions) -> str:
    model_name = get_model_name(table.modelName, options.usePlural)
    table_name = convert_to_snake_case(model_name, options.camelCase)

    props: List[str] = [f"id: {primary_key(options.provider, options.useNumberId)}"]
    for key, field in table.fields.items():
        props.append(f"{key}: {build_column(key, field, options)}")

    logger.debug("Built table %s with %d columns", table_name, len(props))
    body = ",\n  ".join(props)
    return (
        f'export const {model_name} = {options.provider.value}Table("{table_name}", {{\n'
        f"  {body}\n"
        f"}});"
    )
