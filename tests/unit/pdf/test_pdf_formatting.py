"""Unit tests for document text formatting"""

from datetime import datetime

from src.adapter.services.pdf.formatting import (
    DASH,
    format_date_long,
    format_date_short,
    format_datetime_long,
    format_record_stamp,
)
from src.adapter.services.pdf.renderer import printable


class TestDateFormatting:
    def test_long_date(self):
        assert format_date_long(datetime(2025, 3, 6, 9, 45)) == "March 6, 2025"

    def test_short_date(self):
        assert format_date_short(datetime(2025, 3, 6)) == "Mar 6, 2025"

    def test_long_datetime(self):
        assert format_datetime_long(datetime(2025, 3, 6, 9, 45)) == "Mar 6, 2025 at 9:45 AM"
        assert format_datetime_long(datetime(2025, 3, 6, 0, 5)) == "Mar 6, 2025 at 12:05 AM"

    def test_record_stamp(self):
        assert format_record_stamp(datetime(2025, 3, 6, 9, 45)) == "03-06-25 0945"

    def test_missing_values(self):
        assert format_date_long(None) == DASH
        assert format_datetime_long(None) == DASH
        assert format_record_stamp(None) == DASH


class TestPrintable:
    def test_keeps_latin_text(self):
        assert printable("Café — 25.00 $") == "Café — 25.00 $"

    def test_replaces_unencodable_characters(self):
        assert printable("Box ┌┐ ✓") == "Box ?? ?"
