# codegen/naming.py
from __future__ import annotations
import re

_UPPER = re.compile(r"[A-Z]")


def convert_to_snake_case(name: str, camel_case: bool = False) -> str:
    """
    userId -> user_id. Only ASCII capitals are touched; leading
    underscores, digits and existing underscores pass through as-is.
    """
    if camel_case:
        return name
    return _UPPER.sub(lambda m: f"_{m.group(0).lower()}", name)


def get_model_name(model_name: str, use_plural: bool = False) -> str:
    return f"{model_name}s" if use_plural else model_name
