from idcard_ocr.parsing import normalize_text


def test_empty_input():
    assert normalize_text(None) == ""
    assert normalize_text("") == ""
    assert normalize_text(" \n\t ") == ""


def test_collapses_whitespace():
    assert normalize_text("Name ©  RAHUL\n\nKUMAR\n") == "Name : RAHUL KUMAR"


def test_ocr_corrections():
    assert normalize_text("Programme € 8 Tech") == "Programme : B.Tech"
    assert normalize_text("8Tech") == "B.Tech"
    assert normalize_text("Blood Group : 4ve") == "Blood Group : B +ve"
    assert normalize_text("Valid From : apri1 2021") == "Valid From : April 2021"
    assert normalize_text("Valid To : 0CT 2025") == "Valid To : Oct 2025"


def test_idempotent(front_text, back_text):
    for text in (front_text, back_text, "Blood Group © 4VE\nDOB 01-apri1-2000"):
        once = normalize_text(text)
        assert normalize_text(once) == once
