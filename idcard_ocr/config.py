"""
Centralized configuration management.

Configuration is loaded from:
1. Environment variables
2. .env file (if present)
3. Default values

Usage:
    from idcard_ocr.config import get_config
    config = get_config()
    print(config.card.institution)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Load .env on module import (existing environment variables win)
load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=False)


_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_bool_env(key: str, default: bool = False) -> bool:
    """Read a yes/no flag; unrecognised values fall back to `default`."""
    value = os.getenv(key, "").strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def _get_int_env(key: str, default: int) -> int:
    """Read an integer; blank or malformed values fall back to `default`."""
    try:
        return int(os.getenv(key, "").strip())
    except ValueError:
        return default



@dataclass
class CardConfig:
    """
    Issuer details printed on the card front.

    These are not read from OCR text; the parser copies them onto every
    front-side record.
    """
    institution: str = field(
        default_factory=lambda: os.getenv("CARD_INSTITUTION", "SRM INSTITUTE OF SCIENCE & TECHNOLOGY")
    )
    faculty: str = field(
        default_factory=lambda: os.getenv("CARD_FACULTY", "FACULTY OF ENGINEERING & TECHNOLOGY")
    )


@dataclass
class ParserConfig:
    """Field extraction limits."""
    # Input longer than this is truncated before any pattern runs
    max_text_length: int = field(default_factory=lambda: _get_int_env("PARSER_MAX_TEXT_LENGTH", 10000))
    # Parse front and back concurrently in CardProcessor
    parallel_sides: bool = field(default_factory=lambda: _get_bool_env("PARSER_PARALLEL_SIDES", True))


@dataclass
class OCRConfig:
    """OCR (Tesseract) configuration."""
    languages: str = field(default_factory=lambda: os.getenv("OCR_LANGUAGES", "eng"))
    tesseract_path: str = field(default_factory=lambda: os.getenv("TESSERACT_PATH", ""))
    tessdata_dir: str = field(default_factory=lambda: os.getenv("TESSDATA_DIR", ""))
    psm: int = field(default_factory=lambda: _get_int_env("OCR_PSM", 6))
    dpi: int = field(default_factory=lambda: _get_int_env("OCR_DPI", 300))

    def tesseract_args(self) -> str:
        """Build the extra command-line arguments passed to Tesseract."""
        args = f"--psm {self.psm} -c user_defined_dpi={self.dpi}"
        if self.tessdata_dir:
            args = f'--tessdata-dir "{self.tessdata_dir}" {args}'
        return args


@dataclass
class DBConfig:
    """PostgreSQL connection settings, used only when records go to a database."""
    host: str = field(default_factory=lambda: os.getenv("DB_HOST", ""))
    port: int = field(default_factory=lambda: _get_int_env("DB_PORT", 5432))
    name: str = field(default_factory=lambda: os.getenv("DB_NAME", ""))
    user: str = field(default_factory=lambda: os.getenv("DB_USER", ""))
    password: str = field(default_factory=lambda: os.getenv("DB_PASSWORD", ""))
    schema: str = field(default_factory=lambda: os.getenv("DB_SCHEMA", "public"))
    ssl_mode: str = field(default_factory=lambda: os.getenv("DB_SSL_MODE", "prefer"))

    @property
    def is_configured(self) -> bool:
        """Host, database and user are all set."""
        return all((self.host, self.name, self.user))


@dataclass
class Config:
    """
    Application configuration.

    Built from environment variables (after .env is loaded); every value
    has a default so an empty environment works. DEBUG=1 turns on verbose
    logging.
    """

    # Base directory (project root)
    base_dir: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    # Directory paths
    data_dir: Path = field(default=None)
    logs_dir: Path = field(default=None)

    # Debug mode (enables verbose logging and raw OCR dumps)
    debug: bool = field(default_factory=lambda: _get_bool_env("DEBUG", False))
    log_to_file: bool = field(default_factory=lambda: _get_bool_env("LOG_TO_FILE", False))

    # Sub-configurations
    card: CardConfig = field(default_factory=CardConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    ocr: OCRConfig = field(default_factory=OCRConfig)
    db: DBConfig = field(default_factory=DBConfig)

    def __post_init__(self):
        """Relative DATA_DIR / LOG_DIR are resolved against base_dir."""
        base_dir = Path(self.base_dir)
        self.data_dir = base_dir / (self.data_dir or os.getenv("DATA_DIR", "data"))
        self.logs_dir = base_dir / (self.logs_dir or os.getenv("LOG_DIR", "logs"))

    @property
    def dump_raw_ocr(self) -> bool:
        """Whether to dump raw OCR output (enabled in debug mode)."""
        return self.debug or _get_bool_env("DUMP_RAW_OCR", False)

    @property
    def store_path(self) -> Path:
        """Location of the JSON record store."""
        return self.data_dir / "id_card_records.json"


# Process-wide instance, created on first use
_config: Optional[Config] = None


def get_config() -> Config:
    """Return the shared configuration, reading the environment on first call."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Forget the shared configuration so the next get_config() re-reads the environment."""
    global _config
    _config = None
