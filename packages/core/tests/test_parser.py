"""Tests for report parsing and record extraction."""

import json

import pytest

from auditview_core.errors import FileParseError, ListingCancelled, MalformedEntry, UnknownCategory
from auditview_core.models import Category, ReportRecord
from auditview_core.parser import extract_record, parse_report_file, parse_reports, parse_tree


def _write(path, data):
    path.write_text(json.dumps(data) if not isinstance(data, str) else data, encoding="utf-8")
    return path


class _SetEvent:
    def is_set(self):
        return True


class TestExtractRecord:
    def test_accessibility_uses_type_and_message(self):
        record = extract_record(Category.ACCESSIBILITY, "a.html", {"type": "warning", "message": "Missing alt"})
        assert record == ReportRecord(
            file="a.html", category=Category.ACCESSIBILITY, level="warning", message="Missing alt"
        )

    def test_html5_uses_type_and_message(self):
        record = extract_record(Category.HTML5, "a.html", {"type": "error", "message": "Stray end tag"})
        assert record.level == "error"
        assert record.message == "Stray end tag"

    def test_link_level_is_always_error(self):
        record = extract_record(Category.LINK, "a.html", {"type": "info", "error": "404 not found"})
        assert record.level == "error"
        assert record.message == "404 not found"

    def test_file_is_basename(self):
        record = extract_record(Category.LINK, "site/pages/a.html", {"error": "timeout"})
        assert record.file == "a.html"

    def test_missing_message_raises(self):
        with pytest.raises(MalformedEntry):
            extract_record(Category.HTML5, "a.html", {"type": "error"})

    def test_non_string_level_raises(self):
        with pytest.raises(MalformedEntry):
            extract_record(Category.ACCESSIBILITY, "a.html", {"type": 3, "message": "x"})

    def test_link_ignores_message_field(self):
        with pytest.raises(MalformedEntry):
            extract_record(Category.LINK, "a.html", {"message": "not the error field"})


class TestParseTree:
    def test_one_record_per_entry(self):
        tree = {
            "accessibility": {"a.html": [{"type": "error", "message": "m1"}, {"type": "notice", "message": "m2"}]},
            "html5": {"b.html": [{"type": "warning", "message": "m3"}]},
            "link": {"a.html": [{"error": "404"}], "c.html": [{"error": "500"}]},
        }
        result = parse_tree(tree)
        assert len(result.records) == 5
        assert result.warnings == []
        assert [r.message for r in result.records] == ["m1", "m2", "m3", "404", "500"]

    def test_misspelled_accessibility_key_accepted(self):
        result = parse_tree({"assessibility": {"a.html": [{"type": "error", "message": "m"}]}})
        assert result.records[0].category is Category.ACCESSIBILITY

    def test_unknown_category_yields_nothing(self):
        result = parse_tree({"foo": {"a.html": [{"type": "error", "message": "m"}]}})
        assert result.records == []
        assert result.warnings == []

    def test_unknown_category_warns_in_strict_mode(self):
        result = parse_tree({"foo": {}}, strict=True)
        assert result.records == []
        assert len(result.warnings) == 1
        assert isinstance(result.warnings[0], UnknownCategory)

    def test_non_object_top_level_raises(self):
        with pytest.raises(FileParseError):
            parse_tree([1, 2, 3])

    def test_bad_entry_skipped_siblings_kept(self):
        tree = {"html5": {"a.html": [{"type": "error"}, "junk", {"type": "error", "message": "ok"}]}}
        result = parse_tree(tree, source="x-report.json")
        assert [r.message for r in result.records] == ["ok"]
        assert len(result.warnings) == 2
        assert all(isinstance(w, MalformedEntry) for w in result.warnings)

    def test_bad_blocks_skipped(self):
        tree = {"html5": ["not", "an", "object"], "link": {"a.html": "not a list", "b.html": [{"error": "e"}]}}
        result = parse_tree(tree)
        assert [r.file for r in result.records] == ["b.html"]
        assert len(result.warnings) == 2

    def test_records_carry_source(self):
        result = parse_tree({"link": {"a.html": [{"error": "e"}]}}, source="home-report.json")
        assert result.records[0].source == "home-report.json"


class TestParseReportFiles:
    def test_parse_single_file(self, tmp_path):
        path = _write(tmp_path / "home-report.json", {"link": {"a.html": [{"error": "404 not found"}]}})
        result = parse_report_file(path)
        assert len(result.records) == 1
        assert result.records[0].category is Category.LINK

    def test_invalid_json_raises(self, tmp_path):
        path = _write(tmp_path / "bad-report.json", "{not json")
        with pytest.raises(FileParseError) as exc:
            parse_report_file(path)
        assert "bad-report.json" in str(exc.value)

    def test_invalid_utf8_raises(self, tmp_path):
        path = tmp_path / "bin-report.json"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(FileParseError):
            parse_report_file(path)

    def test_malformed_file_does_not_stop_others(self, tmp_path):
        a = _write(tmp_path / "a-report.json", {"link": {"a.html": [{"error": "e1"}]}})
        b = _write(tmp_path / "b-report.json", "{{{")
        c = _write(tmp_path / "c-report.json", {"html5": {"c.html": [{"type": "error", "message": "e3"}]}})
        result = parse_reports([a, b, c])
        assert [r.message for r in result.records] == ["e1", "e3"]
        assert len(result.warnings) == 1
        assert isinstance(result.warnings[0], FileParseError)

    def test_cancel_stops_before_reading(self, tmp_path):
        a = _write(tmp_path / "a-report.json", {"link": {"a.html": [{"error": "e1"}]}})
        with pytest.raises(ListingCancelled):
            parse_reports([a], cancel=_SetEvent())

    def test_deeply_nested_json_raises(self, tmp_path):
        path = _write(tmp_path / "deep-report.json", "[" * 200000)
        with pytest.raises(FileParseError) as exc:
            parse_report_file(path)
        assert "nested too deeply" in str(exc.value)

    def test_deeply_nested_file_does_not_stop_others(self, tmp_path):
        a = _write(tmp_path / "a-report.json", {"link": {"a.html": [{"error": "e1"}]}})
        b = _write(tmp_path / "b-report.json", "[" * 200000)
        result = parse_reports([a, b])
        assert [r.message for r in result.records] == ["e1"]
        assert isinstance(result.warnings[0], FileParseError)
