from pathlib import Path

import pytest

from codegen.meta_models import GenerationOptions, Provider

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def schema_path() -> Path:
    return FIXTURES / "auth_schema.json"


@pytest.fixture
def make_options():
    def _make(provider="pg", **kwargs) -> GenerationOptions:
        return GenerationOptions(provider=Provider(provider), **kwargs)
    return _make
