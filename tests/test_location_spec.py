"""Tests for location parsing utilities."""

import pytest

from aldoc.buffer import StringBuffer
from aldoc.errors import InvalidLineRangeError, InvalidLocationError
from aldoc.utils import line_index, parse_attr_filter, parse_location


class TestParseLocation:
    """Tests for parse_location function."""

    def test_single_line(self):
        path, line = parse_location("src/Codeunit/SalesMgt.Codeunit.al:42")
        assert path == "src/Codeunit/SalesMgt.Codeunit.al"
        assert line == 42

    def test_path_with_colon(self):
        path, line = parse_location("C:/src/Sales.al:7")
        assert path == "C:/src/Sales.al"
        assert line == 7

    def test_invalid_format_no_colon(self):
        with pytest.raises(InvalidLocationError) as exc_info:
            parse_location("Sales.al")
        assert "expected format" in str(exc_info.value)

    def test_invalid_format_range(self):
        with pytest.raises(InvalidLocationError):
            parse_location("Sales.al:1-3")

    def test_invalid_line_zero(self):
        with pytest.raises(InvalidLineRangeError) as exc_info:
            parse_location("Sales.al:0")
        assert "line must be >= 1" in str(exc_info.value)


class TestParseAttrFilter:
    def test_filter(self):
        assert parse_attr_filter("name=Customer") == ("name", "Customer")

    def test_quoted_value(self):
        assert parse_attr_filter('name="Sales Header"') == ("name", "Sales Header")

    def test_no_filter(self):
        assert parse_attr_filter(None) == ("", "")

    def test_missing_equals(self):
        with pytest.raises(InvalidLocationError):
            parse_attr_filter("name")


class TestLineIndex:
    def test_converts_to_zero_based(self):
        assert line_index(StringBuffer("a\nb"), 2) == 1

    def test_past_end(self):
        with pytest.raises(InvalidLineRangeError) as exc_info:
            line_index(StringBuffer("a\nb"), 3)
        assert "buffer has 2 lines" in str(exc_info.value)
