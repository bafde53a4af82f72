import pytest

from idcard_ocr.config import reset_config

FRONT_TEXT = """
SRM INSTITUTE OF SCIENCE & TECHNOLOGY
FACULTY OF ENGINEERING & TECHNOLOGY
Name : RAHUL KUMAR
Programme : B.Tech (CSE)
Register No : RA2111003010
Valid From : Aug 2021
Valid To : May 2025
"""

BACK_TEXT = """
Blood Group : B+ve
Date of Birth : 15-Aug-2003
Address : 12 Gandhi Street, Anna Nagar, Chennai
Pin : 600040
Perm. Cont. No : 9876543210
Emg. Cont. No : 9123456780
E-mail ID : Rahul.Kumar@srmist.edu.in
"""


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("LOG_TO_FILE", "0")
    reset_config()
    yield
    reset_config()


@pytest.fixture
def front_text():
    return FRONT_TEXT


@pytest.fixture
def back_text():
    return BACK_TEXT
