import pytest

from idcard_ocr.config import get_config, reset_config
from idcard_ocr.exceptions import DuplicateRecordError, RecordNotFoundError
from idcard_ocr.models import CardType, IDCardRecord
from idcard_ocr.persistence import JSONCardStore
from idcard_ocr.processors import (
    AUTH_INVALID,
    AUTH_MISMATCH,
    AUTH_NOT_FOUND,
    AUTH_SUCCESS,
    CardProcessor,
    ProcessingContext,
    authenticate_card,
    register_card,
    verify_record,
)


@pytest.fixture
def store(tmp_path):
    return JSONCardStore(tmp_path / "records.json")


def test_register_card(store, front_text, back_text):
    record = register_card(front_text, back_text, store, file_names=("front.jpg", "back.jpg"))

    assert record.id == 1
    assert record.name == "RAHUL KUMAR"
    assert record.pin == "600040"
    assert record.file_name == "front.jpg & back.jpg"
    assert record.verified is False
    assert record.raw_text.startswith("FRONT:\n")
    assert store.find_by_register_number("RA2111003010").id == 1


def test_register_duplicate(store, front_text, back_text):
    register_card(front_text, back_text, store)

    with pytest.raises(DuplicateRecordError):
        register_card(front_text, back_text, store)


def test_login_success(store, front_text, back_text):
    register_card(front_text, back_text, store)

    result = authenticate_card(front_text, store)

    assert result.status == AUTH_SUCCESS
    assert result.authenticated
    assert result.record.register_number == "RA2111003010"


def test_login_unknown_card(store, front_text):
    result = authenticate_card(front_text, store)

    assert result.status == AUTH_NOT_FOUND
    assert result.record is None


def test_login_without_register_number(store):
    result = authenticate_card("FACULTY Name : RAHUL KUMAR Programme : B.Tech", store)

    assert result.status == AUTH_INVALID
    assert not result.authenticated


def test_login_name_mismatch(store, front_text):
    store.save(IDCardRecord(register_number="RA2111003010", name="PRIYA SHARMA"))

    result = authenticate_card(front_text, store)

    assert result.status == AUTH_MISMATCH
    assert result.record is None


def test_login_without_scanned_name(store):
    store.save(IDCardRecord(register_number="RA2111003010", name="PRIYA SHARMA"))

    result = authenticate_card("FACULTY Register No : RA2111003010", store)

    assert result.status == AUTH_MISMATCH


def test_verify_record(store, front_text, back_text):
    record = register_card(front_text, back_text, store)

    verified = verify_record(record.id, store)

    assert verified.verified is True
    assert store.get(record.id).verified is True

    with pytest.raises(RecordNotFoundError):
        verify_record(999, store)


@pytest.mark.parametrize("parallel", ["1", "0"])
def test_card_processor(monkeypatch, parallel, front_text, back_text):
    monkeypatch.setenv("PARSER_PARALLEL_SIDES", parallel)
    reset_config()
    context = ProcessingContext(
        config=get_config(),
        front_text=front_text,
        back_text=back_text,
        front_name="front.png",
    )

    assert CardProcessor(context).run() is True
    assert context.front_record.card_type is CardType.FRONT
    assert context.record.register_number == "RA2111003010"
    assert context.record.email == "rahul.kumar@srmist.edu.in"
    assert context.record.file_name == "front.png"


def test_card_processor_without_text():
    context = ProcessingContext(config=get_config())

    assert CardProcessor(context).run() is False
    assert context.record is None
