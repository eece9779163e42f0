"""Tests for per-table declaration output."""

import functools

import pytest
from pydantic import ValidationError

from codegen.errors import InvalidDefaultValueError
from codegen.meta_models import AuthTable, DefaultFn, FieldAttribute, FieldReference
from codegen.table_builder import build_column, build_table


def _field(**kwargs) -> FieldAttribute:
    return FieldAttribute.model_validate(kwargs)


class TestModifiers:
    def test_order_default_notnull_unique_references(self, make_options):
        field = _field(
            type="string", required=True, unique=True, defaultValue="member",
            references={"model": "role", "field": "name", "onDelete": "set null"},
        )
        assert build_column("role", field, make_options("pg")) == (
            "text('role').default(\"member\").notNull().unique()"
            ".references(() => role.name, { onDelete: 'set null' })"
        )

    def test_cascade_is_default_policy(self, make_options):
        field = _field(type="string", references={"model": "user", "field": "id"})
        assert build_column("userId", field, make_options("pg")).endswith(
            ".references(() => user.id, { onDelete: 'cascade' })"
        )

    def test_reference_target_is_pluralized(self, make_options):
        field = _field(type="string", references={"model": "user", "field": "id"})
        col = build_column("userId", field, make_options("sqlite", usePlural=True))
        assert "() => users.id" in col

    @pytest.mark.parametrize(
        "value, expected",
        [
            (False, ".default(false)"),
            (True, ".default(true)"),
            (0, ".default(0)"),
            (2.5, ".default(2.5)"),
            ("it's \"quoted\"", '.default("it\'s \\"quoted\\"")'),
            (["a", "b"], '.default(["a", "b"])'),
        ],
    )
    def test_literal_defaults(self, make_options, value, expected):
        col = build_column("flag", _field(type="string", defaultValue=value), make_options("pg"))
        assert col == f"text('flag'){expected}"

    def test_function_defaults(self, make_options):
        def generate_id():
            return "x"

        by_name = build_column("token", _field(type="string", defaultValue=generate_id), make_options("pg"))
        assert by_name == "text('token').$defaultFn(generate_id)"

        expr = _field(type="date", defaultValue=DefaultFn(fn="() => new Date()"))
        assert build_column("createdAt", expr, make_options("pg")) == (
            "timestamp('created_at').$defaultFn(() => new Date())"
        )

    @pytest.mark.parametrize(
        "value, expected",
        [
            (float("inf"), ".default(Infinity)"),
            (float("-inf"), ".default(-Infinity)"),
            (float("nan"), ".default(NaN)"),
        ],
    )
    def test_non_finite_number_defaults(self, make_options, value, expected):
        col = build_column("score", _field(type="number", defaultValue=value), make_options("sqlite"))
        assert col == f"integer('score'){expected}"

    @pytest.mark.parametrize(
        "value",
        [lambda: "x", functools.partial(str, "x")],
        ids=["lambda", "partial"],
    )
    def test_unnamed_callable_defaults_rejected(self, make_options, value):
        with pytest.raises(InvalidDefaultValueError) as exc:
            build_column("token", _field(type="string", defaultValue=value), make_options("pg"))
        assert exc.value.field_key == "token"
        assert "DefaultFn" in str(exc.value)

    def test_multiline_fn_default_kept_verbatim(self, make_options):
        fn = "() => {\n  const d = new Date()\n  return d\n}"
        col = build_column("createdAt", _field(type="date", defaultValue=DefaultFn(fn=fn)), make_options("pg"))
        assert col == f"timestamp('created_at').$defaultFn({fn})"

    def test_on_delete_is_restricted(self):
        with pytest.raises(ValidationError):
            FieldReference(model="user", field="id", onDelete="cascade' }); drop()")
        assert FieldReference(model="user", field="id", onDelete="no action").onDelete == "no action"

    def test_json_fn_default_is_coerced(self):
        field = _field(type="date", defaultValue={"fn": "() => new Date()"})
        assert isinstance(field.defaultValue, DefaultFn)


class TestBuildTable:
    def test_declaration(self, make_options):
        table = AuthTable.model_validate({
            "modelName": "verificationToken",
            "fields": {
                "identifier": {"type": "string", "required": True},
                "expiresAt": {"type": "date"},
            },
        })
        assert build_table(table, make_options("mysql")) == (
            'export const verificationToken = mysqlTable("verification_token", {\n'
            "  id: varchar('id', { length: 36 }).primaryKey(),\n"
            "  identifier: text('identifier').notNull(),\n"
            "  expiresAt: timestamp('expires_at')\n"
            "});"
        )

    def test_plural_and_camel_case(self, make_options):
        table = AuthTable.model_validate({"modelName": "apiKey", "fields": {}})
        out = build_table(table, make_options("pg", usePlural=True, camelCase=True, useNumberId=True))
        assert out.startswith('export const apiKeys = pgTable("apiKeys", {')
        assert "id: serial('id').primaryKey()" in out

    def test_field_order_preserved(self, make_options):
        fields = {k: {"type": "string"} for k in ["zeta", "alpha", "mid"]}
        table = AuthTable.model_validate({"modelName": "t", "fields": fields})
        out = build_table(table, make_options("sqlite"))
        assert out.index("zeta:") < out.index("alpha:") < out.index("mid:")
