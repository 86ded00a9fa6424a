"""Command-line prefixes shared by the parser and the usage strings."""

PREFIX_NAME = "n/"
PREFIX_PHONE = "p/"
PREFIX_EMAIL = "e/"
PREFIX_ADDRESS = "a/"
PREFIX_GENDER = "g/"
PREFIX_BIRTHDATE = "b/"
PREFIX_BLOOD_TYPE = "bt/"
PREFIX_REMARK = "r/"
PREFIX_TAG = "t/"

PREFIX_START = "s/"
PREFIX_END = "en/"
PREFIX_PATIENT = "pt/"
PREFIX_DESCRIPTION = "d/"

PATIENT_PREFIXES = (
    PREFIX_NAME,
    PREFIX_PHONE,
    PREFIX_EMAIL,
    PREFIX_ADDRESS,
    PREFIX_GENDER,
    PREFIX_BIRTHDATE,
    PREFIX_BLOOD_TYPE,
    PREFIX_REMARK,
    PREFIX_TAG,
)

APPOINTMENT_PREFIXES = (
    PREFIX_START,
    PREFIX_END,
    PREFIX_PATIENT,
    PREFIX_DESCRIPTION,
    PREFIX_TAG,
)
