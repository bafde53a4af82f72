from idcard_ocr.models import CardField
from idcard_ocr.parsing import (
    calculate_confidence,
    compile_pattern,
    extract_best,
    extract_first_valid,
    patterns_for,
)


def test_register_number_confidence():
    best = extract_best("Register No: AB1234567890", patterns_for(CardField.REGISTER_NUMBER))

    assert best.value == "AB1234567890"
    assert best.confidence == 85
    assert best.pattern_index == 0


def test_bare_pattern_scores_lower():
    bare = compile_pattern(r"([A-Z]{2}\d{10})")
    assert calculate_confidence("AB1234567890", bare) == 75


def test_blank_value_scores_zero():
    pattern = compile_pattern(r"(x)")
    assert calculate_confidence("", pattern) == 0
    assert calculate_confidence("   ", pattern) == 0
    assert calculate_confidence(None, pattern) == 0


def test_untrimmed_and_odd_characters():
    pattern = compile_pattern(r"(x)")
    assert calculate_confidence(" ab", pattern) == 70
    assert calculate_confidence("ab#c", pattern) == 65


def test_tie_keeps_earlier_pattern():
    best = extract_best("abc", [r"(a)bc", r"a(b)c"])
    assert best.value == "a"
    assert best.pattern_index == 0


def test_higher_confidence_wins():
    best = extract_best("abc", [r"(a)bc", r"(abc)"])
    assert best.value == "abc"
    assert best.pattern_index == 1


def test_malformed_pattern_is_skipped():
    best = extract_best("Name: X", ["(unclosed", r"(X)"])
    assert best.value == "X"
    assert best.pattern_index == 1


def test_no_match():
    assert extract_best("nothing here", patterns_for(CardField.EMAIL)) is None
    assert extract_best("", patterns_for(CardField.PIN)) is None


def test_first_valid_skips_rejected_values():
    value = extract_first_valid(
        "a=1 b=22",
        [r"a=(\d+)", r"b=(\d+)"],
        clean=str.strip,
        accept=lambda v: len(v) > 1,
    )
    assert value == "22"
