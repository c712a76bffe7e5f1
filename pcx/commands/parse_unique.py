"""Komenda: pcx parse-unique — parsuje pojedyncze zdanie unique."""

from __future__ import annotations

import argparse
import json
import sys

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from uniques import MalformedUnique, UniqueParser, UniqueStatement

console = Console()


def _add_rows(table: Table, statement: UniqueStatement, depth: int = 0) -> None:
    indent = "  " * depth
    params = ", ".join(f"[{p}]" for p in statement.parameters) or "—"
    table.add_row(f"{indent}{statement.kind}", Text(params), Text(statement.text))
    for conditional in statement.conditionals:
        _add_rows(table, conditional, depth + 1)


def run(args: argparse.Namespace) -> None:
    parser = UniqueParser()
    try:
        statement = parser.parse(args.sentence)
    except MalformedUnique as exc:
        if args.json_output:
            out = {
                "error": type(exc).__name__,
                "sentence": exc.sentence,
                "reason": exc.reason,
                "cause": exc.root_cause.reason,
            }
            print(json.dumps(out, ensure_ascii=False, indent=2))
        else:
            console.print(Text.assemble((type(exc).__name__, "red"), "  ", exc.reason))
            if exc.nested is not None:
                console.print(Text.assemble(("  przyczyna: ", "dim"), str(exc.root_cause)))
        sys.exit(1)

    if args.json_output:
        print(json.dumps(statement.to_dict(), ensure_ascii=False, indent=2))
        return

    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white")
    table.add_column("RODZAJ",    no_wrap=True, style="bold")
    table.add_column("PARAMETRY", style="cyan")
    table.add_column("TEKST",     style="dim")
    _add_rows(table, statement)
    console.print(table)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "parse-unique",
        help="Parsuje zdanie unique i pokazuje rodzaj, parametry i warunki.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Parsuje jedno zdanie unique względem wbudowanej tabeli szablonów.
Kod wyjścia 1, gdy zdanie jest niepoprawne.

Przykłady:
  pcx parse-unique "[+15]% Production when constructing [Melee] units [in all cities]"
  pcx parse-unique "[+1 Culture] [in all cities] <when at war>" --json-output
        """,
    )
    p.add_argument(
        "sentence",
        metavar="ZDANIE",
        help="Zdanie unique (w cudzysłowie).",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz wynik jako JSON.",
    )
    p.set_defaults(func=run)
