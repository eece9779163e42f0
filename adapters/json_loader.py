# adapters/json_loader.py
from __future__ import annotations
from typing import Optional

from codegen.meta_models import DbSchema
from generate.loader import load_document, schema_from_document


class JsonSchemaLoader:
    """
    Loads a JSON schema document validated against the bundled auth_schema.json.
    The document is read and validated once; `load()` reuses it.
    """
    def __init__(self, path: str = "auth-schema.json") -> None:
        self.path = path
        self._document: Optional[dict] = None

    def document(self) -> dict:
        if self._document is None:
            self._document = load_document(self.path)
        return self._document

    def load(self) -> DbSchema:
        return schema_from_document(self.document())
