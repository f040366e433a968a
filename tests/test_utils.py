"""Unit tests for utility functions (src.utils).

Tests cover:
- dump_json formatting (indent, slashes, empty objects)
- save_json (use tmp_path)
- file_contains
- Rich output helpers (smoke tests)
"""

from __future__ import annotations

import json

import pytest

from src.utils import (
    dump_json,
    file_contains,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
    save_json,
)


# ---------------------------------------------------------------------------
# dump_json
# ---------------------------------------------------------------------------


class TestDumpJson:
    @pytest.mark.unit
    def test_four_space_indent(self):
        assert dump_json({"private": True}) == '{\n    "private": true\n}'

    @pytest.mark.unit
    def test_slashes_unescaped(self):
        assert dump_json({"@symfony/webpack-encore": "^0.17.0"}).count("\\") == 0

    @pytest.mark.unit
    def test_empty_mapping_stays_object(self):
        assert dump_json({"dependencies": {}}) == '{\n    "dependencies": {}\n}'

    @pytest.mark.unit
    def test_keeps_insertion_order_by_default(self):
        text = dump_json({"b": 1, "a": 2})
        assert text.index('"b"') < text.index('"a"')

    @pytest.mark.unit
    def test_sort_keys(self):
        text = dump_json({"b": 1, "a": 2}, sort_keys=True)
        assert text.index('"a"') < text.index('"b"')


# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


class TestSaveJson:
    @pytest.mark.unit
    def test_creates_parents_and_ends_with_newline(self, tmp_path):
        path = tmp_path / "nested" / "state.json"
        assert save_json({"webpack-generated": True}, path) == path
        text = path.read_text()
        assert text.endswith("}\n")
        assert json.loads(text) == {"webpack-generated": True}

    @pytest.mark.unit
    def test_sort_keys(self, tmp_path):
        path = save_json({"b": 1, "a": 2}, tmp_path / "state.json", sort_keys=True)
        text = path.read_text()
        assert text.index('"a"') < text.index('"b"')


class TestFileContains:
    @pytest.mark.unit
    def test_contains(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{"devDependencies": {"@symfony/webpack-encore": "*"}}')
        assert file_contains(path, "@symfony/webpack-encore")
        assert not file_contains(path, "node-sass")


# ---------------------------------------------------------------------------
# Rich output helpers (smoke tests - verify they don't raise)
# ---------------------------------------------------------------------------


class TestRichOutputHelpers:
    @pytest.mark.unit
    def test_print_summary_table(self):
        print_summary_table({"Order": "webpack -> make"}, title="Test Summary")

    @pytest.mark.unit
    def test_print_info(self):
        print_info("Created package.json.")

    @pytest.mark.unit
    def test_print_success(self):
        print_success("Environment configured.")

    @pytest.mark.unit
    def test_print_error(self):
        print_error("Something failed")

    @pytest.mark.unit
    def test_print_warning(self):
        print_warning("Check your package.json")
