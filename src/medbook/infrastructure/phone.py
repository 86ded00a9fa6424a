"""Patient phone numbers: E.164 normalization so the same number is always stored the same way."""

import phonenumbers


def is_supported_region(region: str | None) -> bool:
    """True for None (international numbers only) or a region phonenumbers knows, e.g. "SG"."""
    if region is None:
        return True
    return region.upper() in phonenumbers.SUPPORTED_REGIONS


def normalize_phone(raw: str, default_region: str | None = None) -> str | None:
    """E.164 form of a number typed at the prompt or found in seed data, or None.

    Local numbers ("9123 4567") are read in default_region, which may be given
    in either case. A leading + always wins over the region.
    """
    text = str(raw or "").strip()
    if not text:
        return None
    region = default_region.upper() if default_region else None
    try:
        number = phonenumbers.parse(text, region)
    except phonenumbers.NumberParseException:
        return None
    if phonenumbers.is_valid_number(number):
        return phonenumbers.format_number(number, phonenumbers.PhoneNumberFormat.E164)
    return None
