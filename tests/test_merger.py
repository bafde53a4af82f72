from idcard_ocr.models import CardField, CardType, SideRecord
from idcard_ocr.parsing import merge_sides, parse_card_text


def test_merge_parsed_sides(front_text, back_text):
    record = merge_sides(parse_card_text(front_text), parse_card_text(back_text))

    assert record.name == "RAHUL KUMAR"
    assert record.register_number == "RA2111003010"
    assert record.blood_group == "B +ve"
    assert record.email == "rahul.kumar@srmist.edu.in"
    assert record.card_type == "MERGED"
    assert record.id is None
    assert record.verified is False
    assert record.raw_text == f"FRONT:\n{front_text}\n\nBACK:\n{back_text}"


def test_sides_cannot_overwrite_each_other():
    front = SideRecord(
        CardType.FRONT,
        {CardField.NAME: "ASHA DEVI", CardField.BLOOD_GROUP: "O +ve"},
        "front",
    )
    back = SideRecord(
        CardType.BACK,
        {CardField.BLOOD_GROUP: "A -ve", CardField.NAME: "SOMEONE ELSE"},
        "back",
    )

    record = merge_sides(front, back)

    assert record.name == "ASHA DEVI"
    assert record.blood_group == "A -ve"


def test_front_only():
    front = SideRecord(CardType.FRONT, {CardField.NAME: "ASHA DEVI"}, "front")

    record = merge_sides(front, None)

    assert record.name == "ASHA DEVI"
    assert record.address == ""
    assert record.raw_text == "FRONT:\nfront\n\n"


def test_back_only():
    back = SideRecord(CardType.BACK, {CardField.PIN: "600040"}, "back")

    record = merge_sides(back=back)

    assert record.pin == "600040"
    assert record.name == ""
    assert record.raw_text == "BACK:\nback"


def test_both_absent():
    record = merge_sides()

    assert record.raw_text == ""
    assert record.card_type == "MERGED"
    assert all(value == "" for value in (record.name, record.register_number, record.email))
