from idcard_ocr.config import CardConfig, ParserConfig, reset_config
from idcard_ocr.models import BACK_FIELDS, CardField, CardType
from idcard_ocr.parsing import CardParser, parse_card_text


def test_front_side(front_text):
    side = parse_card_text(front_text)

    assert side.card_type is CardType.FRONT
    assert side.get(CardField.NAME) == "RAHUL KUMAR"
    assert side.get(CardField.PROGRAMME) == "B.Tech (CSE)"
    assert side.get(CardField.REGISTER_NUMBER) == "RA2111003010"
    assert side.get(CardField.VALID_FROM) == "Aug 2021"
    assert side.get(CardField.VALID_TO) == "May 2025"
    assert side.get(CardField.INSTITUTION) == "SRM INSTITUTE OF SCIENCE & TECHNOLOGY"
    assert side.get(CardField.FACULTY) == "FACULTY OF ENGINEERING & TECHNOLOGY"
    assert not any(side.has_field(f) for f in BACK_FIELDS)
    assert side.raw_text == front_text


def test_back_side(back_text):
    side = parse_card_text(back_text)

    assert side.card_type is CardType.BACK
    assert side.get(CardField.BLOOD_GROUP) == "B +ve"
    assert side.get(CardField.DATE_OF_BIRTH) == "15-Aug-2003"
    assert side.get(CardField.ADDRESS) == "12 Gandhi Street, Anna Nagar, Chennai"
    assert side.get(CardField.PIN) == "600040"
    assert side.get(CardField.PERMANENT_CONTACT) == "9876543210"
    assert side.get(CardField.EMERGENCY_CONTACT) == "9123456780"
    assert side.get(CardField.EMAIL) == "rahul.kumar@srmist.edu.in"
    assert not side.has_field(CardField.NAME)
    assert side.to_dict()["card_type"] == "BACK"
    assert side.to_dict()["pin"] == "600040"


def test_ocr_noise_on_back():
    side = parse_card_text("Blood Group © 4VE\nPin © 603203")

    assert side.card_type is CardType.BACK
    assert side.get(CardField.BLOOD_GROUP) == "B +ve"
    assert side.get(CardField.PIN) == "603203"
    assert side.get(CardField.EMAIL) == ""


def test_unknown_side():
    side = parse_card_text("lorem ipsum dolor")

    assert side.card_type is CardType.UNKNOWN
    assert side.fields == {}
    assert side.raw_text == "lorem ipsum dolor"


def test_empty_input():
    for text in (None, "", "   "):
        side = parse_card_text(text)
        assert side.card_type is CardType.UNKNOWN
        assert side.fields == {}
    assert parse_card_text(None).raw_text == ""


def test_invalid_register_number_is_dropped():
    side = parse_card_text("FACULTY Name : RAHUL KUMAR Programme : B.Tech Register No : 12345")

    assert side.card_type is CardType.FRONT
    assert side.get(CardField.REGISTER_NUMBER) == ""
    assert side.get(CardField.NAME) == "RAHUL KUMAR"


def test_long_input_is_truncated():
    text = "x" * 50 + " FACULTY Register"
    parser = CardParser(parser_config=ParserConfig(max_text_length=40))

    side = parser.parse(text)

    assert side.card_type is CardType.UNKNOWN
    assert side.raw_text == text
    assert CardParser().parse(text).card_type is CardType.FRONT


def test_institution_from_config(front_text):
    parser = CardParser(card_config=CardConfig(institution="TEST UNIVERSITY", faculty="FACULTY OF SCIENCE"))

    side = parser.parse(front_text)

    assert side.get(CardField.INSTITUTION) == "TEST UNIVERSITY"
    assert side.get(CardField.FACULTY) == "FACULTY OF SCIENCE"


def test_institution_from_environment(monkeypatch, front_text):
    monkeypatch.setenv("CARD_INSTITUTION", "ANOTHER COLLEGE")
    reset_config()

    side = CardParser().parse(front_text)

    assert side.get(CardField.INSTITUTION) == "ANOTHER COLLEGE"
