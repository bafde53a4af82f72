import json

import pytest

from idcard_ocr.cli import main
from idcard_ocr.config import get_config
from idcard_ocr.persistence import JSONCardStore
from idcard_ocr.processors import register_card


@pytest.fixture
def text_files(tmp_path, front_text, back_text):
    front = tmp_path / "front.txt"
    back = tmp_path / "back.txt"
    front.write_text(front_text, encoding="utf-8")
    back.write_text(back_text, encoding="utf-8")
    return str(front), str(back)


def test_parse(text_files, capsys):
    assert main(["parse", text_files[0]]) == 0

    out = capsys.readouterr().out
    assert "FRONT" in out
    assert "RA2111003010" in out


def test_merge(text_files, capsys):
    assert main(["merge", *text_files]) == 0

    out = capsys.readouterr().out
    record = json.loads(out[out.index("{"):out.rindex("}") + 1])
    assert record["name"] == "RAHUL KUMAR"
    assert record["blood_group"] == "B +ve"


def test_list_show_verify_delete(front_text, back_text, capsys):
    store = JSONCardStore(get_config().store_path)
    saved = register_card(front_text, back_text, store)

    assert main(["list"]) == 0
    assert main(["show", "RA2111003010"]) == 0
    assert main(["verify", str(saved.id)]) == 0
    assert store.get(saved.id).verified is True
    assert main(["delete", str(saved.id)]) == 0
    assert main(["delete", str(saved.id)]) == 1
    assert main(["show", "RA2111003010"]) == 1


def test_verify_missing_record():
    assert main(["verify", "7"]) == 2


def test_postgres_requires_configuration(monkeypatch):
    monkeypatch.delenv("DB_HOST", raising=False)

    assert main(["--postgres", "list"]) == 2


def test_missing_text_file(tmp_path):
    assert main(["parse", str(tmp_path / "nope.txt")]) == 2
