"""
Command-line interface for the ID card parser.

Usage:
    idcard-ocr parse front.txt
    idcard-ocr merge front.txt back.txt
    idcard-ocr register --front front.jpg --back back.jpg
    idcard-ocr login --front front.jpg
    idcard-ocr list
    idcard-ocr --postgres verify 3
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from .config import Config, get_config
from .exceptions import ConfigurationError, IDCardError
from .logger import get_logger
from .models import IDCardRecord, SideRecord
from .parsing import CardParser, merge_sides
from .persistence import CardRepository, JSONCardStore, PostgresCardRepository
from .processors import (
    OCRProcessor,
    ProcessingContext,
    authenticate_card,
    register_card,
    verify_record,
)

console = Console()
logger = get_logger("idcard_ocr.cli")


def _read_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _open_repository(args: argparse.Namespace, config: Config) -> CardRepository:
    if args.postgres:
        if not config.db.is_configured:
            raise ConfigurationError(
                "PostgreSQL storage requested but DB_HOST, DB_NAME and DB_USER are not set",
                config_key="DB_HOST",
            )
        repository = PostgresCardRepository(config.db)
        repository.init_db()
        return repository
    return JSONCardStore(config.store_path)


def _ocr_images(config: Config, front: Optional[str], back: Optional[str]) -> ProcessingContext:
    context = ProcessingContext(
        config=config,
        front_image=Path(front) if front else None,
        back_image=Path(back) if back else None,
        front_name=Path(front).name if front else "",
        back_name=Path(back).name if back else "",
    )
    OCRProcessor(context).process()
    return context


def _side_table(side: SideRecord, title: str) -> Table:
    table = Table(title=f"{title} ({side.card_type.value})")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for card_field, value in side.fields.items():
        table.add_row(card_field.attr, value)
    return table


def _records_table(records: Sequence[IDCardRecord]) -> Table:
    table = Table(title=f"ID card records ({len(records)})")
    for column in ("ID", "Register No", "Name", "Programme", "Verified", "Created"):
        table.add_column(column)
    for record in records:
        table.add_row(
            str(record.id),
            record.register_number,
            record.name,
            record.programme,
            "yes" if record.verified else "no",
            record.created_at,
        )
    return table


def _print_record(record: IDCardRecord) -> None:
    data = record.to_dict()
    data.pop("raw_text", None)
    console.print_json(json.dumps(data, ensure_ascii=False))


def cmd_parse(args: argparse.Namespace, config: Config) -> int:
    parser = CardParser(config.card, config.parser)
    side = parser.parse(_read_text(args.text_file))
    console.print(_side_table(side, args.text_file))
    return 0


def cmd_merge(args: argparse.Namespace, config: Config) -> int:
    parser = CardParser(config.card, config.parser)
    front = parser.parse(_read_text(args.front_text))
    back = parser.parse(_read_text(args.back_text))
    record = merge_sides(front, back)
    console.print_json(json.dumps(record.to_dict(), ensure_ascii=False))
    return 0


def cmd_register(args: argparse.Namespace, config: Config) -> int:
    repository = _open_repository(args, config)
    context = _ocr_images(config, args.front, args.back)
    record = register_card(
        context.front_text,
        context.back_text,
        repository,
        file_names=(context.front_name, context.back_name),
        config=config,
    )
    console.print(f"[green]Registered record {record.id}[/green] (pending verification)")
    _print_record(record)
    return 0


def cmd_login(args: argparse.Namespace, config: Config) -> int:
    repository = _open_repository(args, config)
    context = _ocr_images(config, args.front, None)
    result = authenticate_card(context.front_text, repository, CardParser(config.card, config.parser))

    if not result.authenticated:
        console.print(f"[red]{result.message}[/red]")
        return 1

    console.print(f"[green]{result.message}[/green]")
    _print_record(result.record)
    return 0


def cmd_show(args: argparse.Namespace, config: Config) -> int:
    repository = _open_repository(args, config)
    record = repository.find_by_register_number(args.register_number)
    if record is None:
        console.print(f"[red]No record with register number {args.register_number}[/red]")
        return 1
    _print_record(record)
    return 0


def cmd_list(args: argparse.Namespace, config: Config) -> int:
    repository = _open_repository(args, config)
    if args.unverified:
        records = repository.find_by_verified(False)
    elif args.name:
        records = repository.search_by_name(args.name)
    else:
        records = repository.list_all()
    console.print(_records_table(records))
    return 0


def cmd_verify(args: argparse.Namespace, config: Config) -> int:
    repository = _open_repository(args, config)
    record = verify_record(args.record_id, repository)
    console.print(f"[green]Record {record.id} verified[/green]")
    return 0


def cmd_delete(args: argparse.Namespace, config: Config) -> int:
    repository = _open_repository(args, config)
    if not repository.delete(args.record_id):
        console.print(f"[red]Record {args.record_id} not found[/red]")
        return 1
    console.print(f"Deleted record {args.record_id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="idcard-ocr", description="ID card OCR parser")
    parser.add_argument("--postgres", action="store_true", help="Store records in PostgreSQL")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="Parse one side from an OCR text file")
    p.add_argument("text_file")
    p.set_defaults(func=cmd_parse)

    p = sub.add_parser("merge", help="Parse and merge front and back OCR text files")
    p.add_argument("front_text")
    p.add_argument("back_text")
    p.set_defaults(func=cmd_merge)

    p = sub.add_parser("register", help="Register a card from front and back images")
    p.add_argument("--front", required=True, help="Front side image")
    p.add_argument("--back", required=True, help="Back side image")
    p.set_defaults(func=cmd_register)

    p = sub.add_parser("login", help="Log in with a scanned card front")
    p.add_argument("--front", required=True, help="Front side image")
    p.set_defaults(func=cmd_login)

    p = sub.add_parser("show", help="Show the record for a register number")
    p.add_argument("register_number")
    p.set_defaults(func=cmd_show)

    p = sub.add_parser("list", help="List stored records")
    p.add_argument("--unverified", action="store_true", help="Only records pending verification")
    p.add_argument("--name", help="Only records whose name contains this text")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("verify", help="Mark a record verified")
    p.add_argument("record_id", type=int)
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("delete", help="Delete a record")
    p.add_argument("record_id", type=int)
    p.set_defaults(func=cmd_delete)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()

    try:
        return args.func(args, config)
    except IDCardError as e:
        logger.error(str(e))
        console.print(f"[red]Error:[/red] {e}")
        return 2
    except OSError as e:
        logger.error(f"File error: {e}")
        console.print(f"[red]Error:[/red] {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
