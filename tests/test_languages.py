"""
Tests for the language catalog.

Run with: pytest tests/test_languages.py -v
"""

from litconnect.translate.languages import (
    AUTO_DETECT,
    LANGUAGES,
    get_all_languages,
    get_language_name,
    is_cjk,
    is_rtl,
    is_supported,
)


class TestLanguages:
    """Tests for the language table."""

    def test_names(self):
        """Codes map to display names."""
        assert get_language_name("es") == "Spanish"
        assert get_language_name("zh-CN") == "Chinese (Simplified)"
        assert get_language_name(AUTO_DETECT) == "Auto-detect"

    def test_unknown_code_returned_unchanged(self):
        """Unknown codes are returned as is."""
        assert get_language_name("xx") == "xx"

    def test_sorted_by_name(self):
        """The list is sorted by display name."""
        names = [name for _, name in get_all_languages()]
        assert names == sorted(names, key=str.casefold)
        assert len(names) == len(LANGUAGES)

    def test_support(self):
        """Known codes and auto are supported."""
        assert is_supported("fr")
        assert is_supported(AUTO_DETECT)
        assert not is_supported("xx")

    def test_script_groups(self):
        """RTL and CJK codes are recognised."""
        assert is_rtl("ar") and is_rtl("he")
        assert not is_rtl("es")
        assert is_cjk("ja") and is_cjk("zh-TW")
        assert not is_cjk("zh")
