from __future__ import annotations
import json
import logging
import pathlib
from typing import Any

import tomli
import typer
from rich import print as rprint
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .engine import Validator
from .errors import SchemaError, ValidationError
from .reflect import MessageType
from .toml_parser import load_schema

app = typer.Typer(add_completion=False)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _load_message(schema: str, type_name: str) -> MessageType:
    try:
        types = load_schema(schema)
    except (SchemaError, OSError) as exc:
        raise typer.BadParameter(f"Cannot load schema {schema}: {exc}")
    if type_name not in types:
        raise typer.BadParameter(f"Unknown message type {type_name!r}, known: {', '.join(types)}")
    return types[type_name]


def _load_data(path: str) -> Any:
    try:
        text = pathlib.Path(path).read_text(encoding="utf-8")
        if path.endswith(".toml"):
            return tomli.loads(text)
        return json.loads(text)
    # JSONDecodeError, TOMLDecodeError and UnicodeDecodeError are all ValueErrors
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"Cannot load data {path}: {exc}")


@app.command()
def check(
    schema: str,
    data: str,
    type_name: str = typer.Option(..., "-t", "--type"),
    collect_all: bool = typer.Option(False, "--all"),
    values: bool = typer.Option(True, "--values/--no-values"),
    verbose: bool = typer.Option(False, "-v", "--verbose"),
):
    _setup_logging(verbose)
    message = _load_message(schema, type_name)
    payload = _load_data(data)

    errors: list[ValidationError] = []
    validator = Validator(message, on_error=errors.append if collect_all else None)
    try:
        validator.validate(payload).has_required_fields()
        if values:
            validator.has_valid_values()
    except ValidationError as err:
        errors.append(err)

    if errors:
        for err in errors:
            rprint(f"[red]{err.kind}[/red] {escape(err.message)}")
        raise typer.Exit(code=1)
    rprint("[green]OK[/green]")


@app.command()
def fields(schema: str, type_name: str = typer.Option(..., "-t", "--type")):
    message = _load_message(schema, type_name)
    table = Table(title=message.name)
    table.add_column("field")
    table.add_column("type")
    table.add_column("rule")
    for f in message.get_fields():
        table.add_row(f.name, f.type, f.rule)
    rprint(table)
