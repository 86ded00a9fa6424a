"""Tests for phone number normalization (E.164) and region checks."""


from medbook.infrastructure.phone import is_supported_region, normalize_phone


def test_normalize_with_country_code_returns_e164():
    assert normalize_phone("+65 9123 4567", default_region=None) == "+6591234567"
    assert normalize_phone("+1 202 555 1234", default_region="SG") == "+12025551234"


def test_normalize_without_country_code_uses_default_region():
    assert normalize_phone("9123 4567", default_region="SG") == "+6591234567"
    assert normalize_phone("202 555 1234", default_region="US") == "+12025551234"


def test_normalize_invalid_returns_none():
    assert normalize_phone("", default_region="SG") is None
    assert normalize_phone("   ", default_region="SG") is None
    assert normalize_phone("abc", default_region="SG") is None
    assert normalize_phone("+1", default_region=None) is None
    assert normalize_phone("123", default_region="SG") is None  # too short
    assert normalize_phone("91234567", default_region=None) is None  # no region to read it in


def test_supported_regions():
    assert is_supported_region("SG")
    assert is_supported_region("us")
    assert is_supported_region(None)
    assert not is_supported_region("XX")


def test_normalize_accepts_lowercase_region():
    assert normalize_phone("9123 4567", default_region="sg") == "+6591234567"
    assert normalize_phone(None, default_region="SG") is None
