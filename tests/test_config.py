from pathlib import Path

from idcard_ocr.config import Config, OCRConfig, get_config, reset_config


def test_defaults(monkeypatch):
    for key in ("CARD_INSTITUTION", "PARSER_MAX_TEXT_LENGTH", "OCR_PSM", "DEBUG"):
        monkeypatch.delenv(key, raising=False)
    reset_config()

    config = get_config()

    assert config.card.institution == "SRM INSTITUTE OF SCIENCE & TECHNOLOGY"
    assert config.parser.max_text_length == 10000
    assert config.ocr.languages == "eng"
    assert config.ocr.psm == 6
    assert config.debug is False


def test_singleton():
    assert get_config() is get_config()
    first = get_config()
    reset_config()
    assert get_config() is not first


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("PARSER_MAX_TEXT_LENGTH", "500")
    monkeypatch.setenv("PARSER_PARALLEL_SIDES", "no")
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "store"))

    config = Config()

    assert config.parser.max_text_length == 500
    assert config.parser.parallel_sides is False
    assert config.debug is True
    assert config.dump_raw_ocr is True
    assert config.store_path == tmp_path / "store" / "id_card_records.json"


def test_malformed_values_fall_back(monkeypatch):
    monkeypatch.setenv("PARSER_MAX_TEXT_LENGTH", "lots")
    monkeypatch.setenv("DEBUG", "maybe")

    config = Config()

    assert config.parser.max_text_length == 10000
    assert config.debug is False


def test_relative_data_dir(monkeypatch):
    monkeypatch.setenv("DATA_DIR", "records")

    config = Config(base_dir=Path("/srv/idcard"))

    assert config.data_dir == Path("/srv/idcard/records")


def test_tesseract_args():
    assert OCRConfig(psm=6, dpi=300, tessdata_dir="").tesseract_args() == "--psm 6 -c user_defined_dpi=300"
    assert OCRConfig(psm=4, dpi=200, tessdata_dir="/share/tessdata").tesseract_args() == (
        '--tessdata-dir "/share/tessdata" --psm 4 -c user_defined_dpi=200'
    )


def test_database_not_configured(monkeypatch):
    monkeypatch.delenv("DB_HOST", raising=False)

    assert not Config().db.is_configured
