# tests/unit/core/test_naming.py
"""Tests for display-name to storage-name translation."""

import pytest

from glide_tables.contracts.schema import ROW_ID_COLUMN, STASH_ID_KEY, parse_column_schema
from glide_tables.core.naming import SchemaTranslator, build_name_map, translate_row, translate_rows


@pytest.fixture
def translator() -> SchemaTranslator:
    return SchemaTranslator(
        parse_column_schema(
            {
                "First Name": "string",
                "Age": {"type": "number", "name": "age_col"},
            }
        )
    )


class TestBuildNameMap:
    def test_identity_and_aliased_entries(self, translator: SchemaTranslator) -> None:
        assert dict(translator.name_map) == {
            "First Name": "First Name",
            "Age": "age_col",
            ROW_ID_COLUMN: ROW_ID_COLUMN,
        }

    def test_row_id_present_for_empty_schema(self) -> None:
        assert dict(build_name_map(parse_column_schema({}))) == {ROW_ID_COLUMN: ROW_ID_COLUMN}

    def test_name_map_is_read_only(self, translator: SchemaTranslator) -> None:
        with pytest.raises(TypeError):
            translator.name_map["Age"] = "other"  # type: ignore[index]

    def test_storage_name_lookup_falls_back_to_display_name(self, translator: SchemaTranslator) -> None:
        assert translator.storage_name("Age") == "age_col"
        assert translator.storage_name("Unknown") == "Unknown"


class TestTranslate:
    def test_renames_mapped_keys(self, translator: SchemaTranslator) -> None:
        rows = translator.translate([{"First Name": "Ann", "Age": 30}])

        assert rows == [{"First Name": "Ann", "age_col": 30}]

    def test_aliased_display_name_translates_to_storage_name(self) -> None:
        translator = SchemaTranslator(parse_column_schema({"First Name": {"name": "first_name"}, "Age": {"name": "age_col"}}))

        assert translator.translate([{"First Name": "Ann", "Age": 30}]) == [{"first_name": "Ann", "age_col": 30}]

    def test_none_becomes_empty_string(self, translator: SchemaTranslator) -> None:
        rows = translator.translate([{"First Name": None, "Age": None}])

        assert rows == [{"First Name": "", "age_col": ""}]

    def test_falsy_values_are_not_lowered(self, translator: SchemaTranslator) -> None:
        rows = translator.translate([{"First Name": "", "Age": 0}])

        assert rows == [{"First Name": "", "age_col": 0}]

    def test_unknown_keys_pass_through(self, translator: SchemaTranslator) -> None:
        rows = translator.translate([{"Age": 1, "Nickname": "A", STASH_ID_KEY: "s-1"}])

        assert rows == [{"age_col": 1, "Nickname": "A", STASH_ID_KEY: "s-1"}]

    def test_row_id_is_kept(self, translator: SchemaTranslator) -> None:
        assert translator.translate([{ROW_ID_COLUMN: "r-1", "Age": 2}]) == [{ROW_ID_COLUMN: "r-1", "age_col": 2}]

    def test_input_rows_are_not_mutated(self, translator: SchemaTranslator) -> None:
        row = {"First Name": None, "Age": 30}

        translated = translator.translate([row])

        assert row == {"First Name": None, "Age": 30}
        assert translated[0] is not row

    def test_preserves_row_order(self, translator: SchemaTranslator) -> None:
        rows = [{"Age": n} for n in range(5)]

        assert [r["age_col"] for r in translator.translate(rows)] == [0, 1, 2, 3, 4]

    def test_accepts_any_iterable(self, translator: SchemaTranslator) -> None:
        assert translator.translate(iter([{"Age": 1}])) == [{"age_col": 1}]


class TestStorageNameCollision:
    """A display name equal to another column's storage name is not detected."""

    def test_collision_does_not_crash_and_last_write_wins(self) -> None:
        # "b" is both a display name and the storage name of "a"
        name_map = build_name_map(parse_column_schema({"a": {"name": "b"}, "b": "string"}))

        row = translate_row({"a": 1, "b": 2}, name_map)

        assert row == {"b": 2}

    def test_collision_order_reversed(self) -> None:
        name_map = build_name_map(parse_column_schema({"a": {"name": "b"}, "b": "string"}))

        assert translate_rows([{"b": 2, "a": 1}], name_map) == [{"b": 1}]
