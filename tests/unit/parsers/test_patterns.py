"""
test_patterns.py
----------------
Unit tests for the glyph tables and normalizers in onediary.parsers.patterns.
"""
import pytest

from onediary.parsers import patterns


class TestGlyphTables:
    """Every variant maps to a canonical ideograph."""

    def test_month_and_day_radicals_are_markers(self):
        """Kangxi radical forms count as date markers."""
        assert "\u2f49" in patterns.DATE_MARKERS
        assert "\u2f47" in patterns.DATE_MARKERS

    def test_canonical_markers_map_to_themselves(self):
        """Canonical glyphs are their own canonical form."""
        assert patterns.YEAR_MARKERS["年"] == "年"
        assert patterns.MONTH_MARKERS["月"] == "月"
        assert patterns.DAY_MARKERS["日"] == "日"

    def test_weekday_variants_are_canonical_ideographs(self):
        """Weekday variants map into the ordinary weekday set."""
        assert set(patterns.WEEKDAY_VARIANTS.values()) <= set("一二三四五六日")


class TestNormalizeWeekday:
    """Test normalize_weekday()."""

    def test_kangxi_one(self):
        """\u2f00 becomes 一."""
        assert patterns.normalize_weekday("周\u2f00") == "周一"

    def test_kangxi_sun(self):
        """\u2f47 becomes 日."""
        assert patterns.normalize_weekday("周\u2f47") == "周日"

    def test_compatibility_six(self):
        """The compatibility form of 六 becomes 六."""
        assert patterns.normalize_weekday("周\uf9d1") == "周六"

    def test_plain_weekday_unchanged(self):
        """Canonical text is returned as is."""
        assert patterns.normalize_weekday("星期三") == "星期三"


class TestNormalizeMarkers:
    """Test normalize_markers()."""

    def test_radicals_folded(self):
        """Month and day radicals become 月 and 日."""
        assert patterns.normalize_markers("2025年02\u2f4908\u2f47") == "2025年02月08日"


class TestNormalizeTemperature:
    """Test normalize_temperature()."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("4℃", "4°C"),
            ("4°C", "4°C"),
            ("-3 ° c", "-3°C"),
            ("12.5℃", "12.5°C"),
        ],
    )
    def test_units_canonicalized(self, raw, expected):
        """All unit spellings end in °C."""
        assert patterns.normalize_temperature(raw) == expected

    def test_none_and_empty(self):
        """Missing temperatures stay missing."""
        assert patterns.normalize_temperature(None) is None
        assert patterns.normalize_temperature("") is None


class TestNormalizeTime:
    """Test normalize_time()."""

    def test_zero_pads_hour(self):
        """9:05 becomes 09:05."""
        assert patterns.normalize_time("9:05") == "09:05"

    def test_full_width_colon(self):
        """A full-width colon is accepted."""
        assert patterns.normalize_time("21：30") == "21:30"
