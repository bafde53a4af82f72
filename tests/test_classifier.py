from idcard_ocr.models import CardType
from idcard_ocr.parsing import classify, normalize_text, score_card_side


def test_front_text(front_text):
    text = normalize_text(front_text)
    assert score_card_side(text) == (9, 0)
    assert classify(text) is CardType.FRONT


def test_back_text(back_text):
    text = normalize_text(back_text)
    # "Perm. Cont. No" has a space, so the contact label does not fire
    assert score_card_side(text) == (0, 9)
    assert classify(text) is CardType.BACK


def test_tie_goes_to_back():
    assert score_card_side("FACULTY Blood Group") == (3, 3)
    assert classify("FACULTY Blood Group") is CardType.BACK


def test_no_labels_is_unknown():
    assert classify("hello world") is CardType.UNKNOWN
    assert classify("") is CardType.UNKNOWN


def test_pin_needs_six_digits():
    assert score_card_side("Pin : 1234") == (0, 0)
    assert score_card_side("Pin : 600040") == (0, 2)


def test_labels_are_case_sensitive():
    assert classify("faculty register programme") is CardType.UNKNOWN


def test_deterministic(front_text):
    text = normalize_text(front_text)
    assert {classify(text) for _ in range(5)} == {CardType.FRONT}
