"""Tests for the Drizzle import header."""

import pytest

from codegen.imports import generate_import, resolve_imports
from codegen.meta_models import DbSchema


def _schema(**fields) -> DbSchema:
    return DbSchema.model_validate({"user": {"modelName": "user", "fields": fields}})


PLAIN = {"name": {"type": "string"}}
BIG = {"count": {"type": "number", "bigint": True}}


def test_sqlite_is_minimal(make_options):
    symbols = resolve_imports(_schema(**BIG), make_options("sqlite", useNumberId=True))
    assert symbols == ["sqliteTable", "text", "integer"]
    assert not {"bigint", "timestamp", "serial", "boolean"} & set(symbols)


def test_pg_order(make_options):
    assert resolve_imports(_schema(**PLAIN), make_options("pg")) == [
        "pgTable", "text", "timestamp", "boolean", "integer",
    ]


def test_pg_bigint_and_serial(make_options):
    assert resolve_imports(_schema(**BIG), make_options("pg", useNumberId=True)) == [
        "pgTable", "text", "bigint", "timestamp", "boolean", "integer", "serial",
    ]


def test_mysql_order(make_options):
    assert resolve_imports(_schema(**BIG), make_options("mysql", useNumberId=True)) == [
        "mysqlTable", "varchar", "text", "bigint", "timestamp", "boolean", "int",
    ]


def test_bigint_detected_across_tables(make_options):
    schema = DbSchema.model_validate({
        "user": {"modelName": "user", "fields": PLAIN},
        "rateLimit": {"modelName": "rateLimit", "fields": BIG},
    })
    assert "bigint" in resolve_imports(schema, make_options("mysql"))


@pytest.mark.parametrize(
    "provider, expected",
    [
        ("pg", 'import { pgTable, text, timestamp, boolean, integer } from "drizzle-orm/pg-core";\n'),
        ("sqlite", 'import { sqliteTable, text, integer } from "drizzle-orm/sqlite-core";\n'),
        ("mysql", 'import { mysqlTable, varchar, text, timestamp, boolean, int } from "drizzle-orm/mysql-core";\n'),
    ],
)
def test_generate_import(make_options, provider, expected):
    assert generate_import(_schema(**PLAIN), make_options(provider)) == expected
