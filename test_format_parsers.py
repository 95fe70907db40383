"""
CSV / JSON parsers and format detection — unit tests.
"""
import pytest

from contact_directory.models.domain import FormatHint, RawRecord
from contact_directory.services.format_detector import detect_format, parse, parse_as, sniff_format
from contact_directory.services.format_parsers import FormatError, RecordFormat, parse_csv, parse_json


# ═══════════════════════════════════════════════════════════════════════════
# CSV
# ═══════════════════════════════════════════════════════════════════════════
class TestCsvParser:
    def test_single_line(self):
        records = parse_csv("박영희, matilda@clovf.com, 01087654321, 2021.04.28")
        assert records == [RawRecord(name="박영희", email="matilda@clovf.com",
                                     phone="01087654321", joined="2021.04.28")]

    def test_blank_lines_skipped_and_crlf_handled(self):
        content = "A, a@x.com, 0101234567, 2020-01-01\r\n\r\n   \r\nB, b@x.com, 0101234568, 2020-01-02\r\n"
        assert [r.name for r in parse_csv(content)] == ["A", "B"]

    def test_extra_fields_ignored(self):
        records = parse_csv("A, a@x.com, 0101234567, 2020-01-01, extra, more")
        assert records[0].joined == "2020-01-01"

    def test_malformed_values_still_parse(self):
        records = parse_csv("A, a@x.com, 123, bad-date")
        assert records == [RawRecord(name="A", email="a@x.com", phone="123", joined="bad-date")]

    def test_short_line_reports_line_and_count(self):
        content = "A, a@x.com, 0101234567, 2020-01-01\nB, b@x.com, 0101234568"
        with pytest.raises(FormatError) as exc_info:
            parse_csv(content)
        assert exc_info.value.line == 2
        assert exc_info.value.field_count == 3
        assert "line 2" in exc_info.value.message
        assert "got 3" in exc_info.value.message

    def test_line_numbers_count_blank_lines(self):
        with pytest.raises(FormatError) as exc_info:
            parse_csv("\nA, a@x.com\n")
        assert exc_info.value.line == 2
        assert exc_info.value.field_count == 2

    @pytest.mark.parametrize("content", ["", "   ", "\n\n \t\n"])
    def test_empty_input(self, content):
        assert parse_csv(content) == []


# ═══════════════════════════════════════════════════════════════════════════
# JSON
# ═══════════════════════════════════════════════════════════════════════════
class TestJsonParser:
    def test_array(self):
        records = parse_json('[{"name":"A","email":"a@x.com","tel":"01012345678","joined":"2020-01-01"}]')
        assert records == [RawRecord(name="A", email="a@x.com", phone="01012345678", joined="2020-01-01")]

    def test_single_object_wrapped(self):
        records = parse_json(' {"name":"A","email":"a@x.com","tel":"01012345678","joined":"2020-01-01"} ')
        assert len(records) == 1

    def test_keys_case_insensitive(self):
        records = parse_json('{"NAME":"A","Email":"a@x.com","TEL":"0101234567","Joined":"2020-01-01"}')
        assert records[0] == RawRecord(name="A", email="a@x.com", phone="0101234567", joined="2020-01-01")

    def test_missing_and_null_fields_default_to_empty(self):
        records = parse_json('[{"name":"A","tel":null}]')
        assert records == [RawRecord(name="A")]

    def test_unknown_keys_ignored(self):
        assert parse_json('{"name":"A","department":"R&D"}') == [RawRecord(name="A")]

    def test_syntax_error_carries_diagnostic(self):
        with pytest.raises(FormatError) as exc_info:
            parse_json('[{"name": "A",]')
        assert exc_info.value.diagnostic
        assert exc_info.value.message.startswith("Invalid JSON format")

    @pytest.mark.parametrize("content", ['"just a string"', "42", '["A"]', '[{"name": 5}]'])
    def test_wrong_shapes_rejected(self, content):
        with pytest.raises(FormatError):
            parse_json(content)

    def test_deep_nesting_is_format_error(self):
        with pytest.raises(FormatError) as exc_info:
            parse_json("[" * 100000)
        assert exc_info.value.diagnostic

    def test_oversized_integer_is_format_error(self):
        with pytest.raises(FormatError) as exc_info:
            parse_json('{"tel": ' + "1" * 5000 + "}")
        assert exc_info.value.message.startswith("Invalid JSON format")
        assert exc_info.value.diagnostic

    @pytest.mark.parametrize("content", ["", "  \n"])
    def test_empty_input(self, content):
        assert parse_json(content) == []

    def test_empty_array(self):
        assert parse_json("[]") == []


# ═══════════════════════════════════════════════════════════════════════════
# DETECTION
# ═══════════════════════════════════════════════════════════════════════════
JSON_TEXT = '[{"name":"A","email":"a@x.com","tel":"01012345678","joined":"2020-01-01"}]'
CSV_TEXT = "A, a@x.com, 01012345678, 2020-01-01"


class TestFormatDetection:
    @pytest.mark.parametrize("content,expected", [
        ("  [", RecordFormat.JSON), ("\n{", RecordFormat.JSON),
        ("A, b", RecordFormat.CSV), ("", RecordFormat.CSV),
    ])
    def test_sniffing(self, content, expected):
        assert sniff_format(content) is expected

    def test_extension_beats_content_type(self):
        hint = FormatHint(filename="people.CSV", content_type="application/json")
        assert detect_format(JSON_TEXT, hint) is RecordFormat.CSV

    def test_content_type_beats_sniffing(self):
        assert detect_format(JSON_TEXT, FormatHint(content_type="text/csv")) is RecordFormat.CSV
        assert detect_format(CSV_TEXT, FormatHint(content_type="application/json; charset=utf-8")) is RecordFormat.JSON

    def test_unknown_extension_falls_through(self):
        hint = FormatHint(filename="people.txt", content_type="text/plain")
        assert detect_format(JSON_TEXT, hint) is RecordFormat.JSON
        assert detect_format(CSV_TEXT, hint) is RecordFormat.CSV

    def test_no_hint(self):
        assert detect_format(JSON_TEXT) is RecordFormat.JSON

    def test_parse_dispatches(self):
        assert parse(JSON_TEXT) == parse(CSV_TEXT, FormatHint(filename="x.csv"))

    def test_parse_as_ignores_content_shape(self):
        with pytest.raises(FormatError):
            parse_as(RecordFormat.JSON, CSV_TEXT)
