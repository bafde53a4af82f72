from idcard_ocr.models import FieldKind
from idcard_ocr.parsing import (
    clean_address,
    is_valid_address,
    is_valid_name,
    normalize_blood_group,
    normalize_date_of_birth,
    validate_field,
)


def test_register_number():
    assert validate_field(FieldKind.REGISTER_NUMBER, "AB12345678") == "AB12345678"
    assert validate_field(FieldKind.REGISTER_NUMBER, " RA2111003010 ") == "RA2111003010"
    assert validate_field(FieldKind.REGISTER_NUMBER, "ab1234567890") == ""
    assert validate_field(FieldKind.REGISTER_NUMBER, "AB1234567") == ""
    assert validate_field(FieldKind.REGISTER_NUMBER, "A12345678") == ""


def test_blood_group():
    assert normalize_blood_group("4VE") == "B +ve"
    assert normalize_blood_group("B+ve") == "B +ve"
    assert normalize_blood_group("0+") == "O +ve"
    assert normalize_blood_group("AB -") == "AB -ve"
    assert normalize_blood_group("xyz") == "xyz"
    assert normalize_blood_group("") == ""


def test_date_of_birth():
    assert normalize_date_of_birth("15-Aug-2003") == "15-Aug-2003"
    assert normalize_date_of_birth("15/08/2003") == "15-Aug-2003"
    assert normalize_date_of_birth("15\\Aug\\2003") == "15-Aug-2003"
    assert normalize_date_of_birth("5 January 2001") == "05-Jan-2001"
    assert normalize_date_of_birth("not a date") == "not a date"
    assert normalize_date_of_birth(None) == ""


def test_address():
    assert not is_valid_address("123")
    assert not is_valid_address("1234567890 12")
    assert is_valid_address("12 Main Street, Springfield")
    assert validate_field(FieldKind.ADDRESS, "123") == ""


def test_clean_address():
    assert clean_address("12 Main St\\\\Springfield,  , Chennai ") == "12 Main St, Springfield, Chennai"
    assert clean_address(None) == ""


def test_names():
    assert is_valid_name("RAHUL KUMAR")
    assert is_valid_name("Rahul")
    assert not is_valid_name("RAHUL")
    assert not is_valid_name("Al")
    assert not is_valid_name("John 3")
    assert validate_field(FieldKind.NAME, "  RAHUL KUMAR ") == "RAHUL KUMAR"


def test_phone_keeps_digits():
    assert validate_field(FieldKind.PHONE, "98765-43210") == "9876543210"
    assert validate_field(FieldKind.PHONE, "12345") == ""


def test_email_lowercased():
    assert validate_field(FieldKind.EMAIL, "John@Example.COM") == "john@example.com"
    assert validate_field(FieldKind.EMAIL, "not-an-email") == ""


def test_pin_code():
    assert validate_field(FieldKind.PIN_CODE, "600040") == "600040"
    assert validate_field(FieldKind.PIN_CODE, "60004") == ""


def test_blank_values():
    for kind in FieldKind:
        assert validate_field(kind, None) == ""
        assert validate_field(kind, "   ") == ""
    assert validate_field(FieldKind.GENERIC, "  x ") == "x"
