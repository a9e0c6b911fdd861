"""Tests for shared utility functions."""

from slotbook.utils import normalize_contact, normalize_phone


class TestNormalizePhone:
    def test_strips_spaces(self):
        assert normalize_phone("0912 345 678") == "0912345678"

    def test_strips_dashes(self):
        assert normalize_phone("0912-345-678") == "0912345678"

    def test_preserves_leading_plus(self):
        assert normalize_phone("+886 912 345 678") == "+886912345678"

    def test_mixed_separators(self):
        assert normalize_phone("+886 (912) 345-678") == "+886912345678"


class TestNormalizeContact:
    def test_phone(self):
        assert normalize_contact("phone", " 0912-345-678 ") == "0912345678"

    def test_email_lowercased(self):
        assert normalize_contact("email", "Lin@Example.COM") == "lin@example.com"

    def test_instagram_handle(self):
        assert normalize_contact("ig", "@your_ig_name") == "your_ig_name"

    def test_line_id_untouched(self):
        assert normalize_contact("line", "  LineID_01 ") == "LineID_01"
