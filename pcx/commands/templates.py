"""Komenda: pcx templates — listowanie tabeli szablonów unique."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from uniques import default_table

console = Console(width=220)


def run(args: argparse.Namespace) -> None:
    templates = [
        t for t in default_table()
        if t.conditional == args.conditional
        and (not args.search or args.search.lower() in t.text.lower() or args.search.lower() in t.kind.lower())
    ]

    if not templates:
        console.print("[yellow]Brak szablonów spełniających kryteria.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("RODZAJ",   no_wrap=True, style="bold")
    table.add_column("SZABLON",  no_wrap=False, max_width=90)
    table.add_column("ARNOŚĆ",   no_wrap=True, justify="right")
    table.add_column("TYPY",     no_wrap=False, style="cyan")

    for t in templates:
        table.add_row(
            t.kind,
            Text(t.text),
            str(t.arity),
            ", ".join(t.parameter_types),
        )

    console.print()
    console.print(table)
    label = "szablonów warunków" if args.conditional else "szablonów"
    console.print(f"  [dim]{len(templates)} {label}[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "templates",
        help="Listuje szablony zdań unique.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje wbudowane szablony zdań unique (lub warunków <...>).

Przykłady:
  pcx templates
  pcx templates --conditional
  pcx templates --search Production
        """,
    )
    p.add_argument(
        "--conditional", "-c",
        action="store_true",
        help="Pokaż szablony warunków <...> zamiast zdań głównych.",
    )
    p.add_argument(
        "--search", "-s",
        metavar="TEKST",
        help="Filtruj po rodzaju lub treści szablonu.",
    )
    p.set_defaults(func=run)
