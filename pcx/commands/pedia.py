"""Komenda: pcx pedia — złożona dokumentacja gałęzi lub polityki."""

from __future__ import annotations

import argparse
import json

from rich.console import Console
from rich.rule import Rule
from rich.text import Text

from civilopedia import assemble
from data_model import DocumentationLine
from pcx.commands._ruleset import add_ruleset_arguments, load, require_ruleset

console = Console()


def _render(line: DocumentationLine) -> Text | Rule:
    if line.is_separator:
        return Rule(style="dim")

    style = ""
    if line.is_header:
        style = "bold underline"
    color = line.styling.get("color")
    if color:
        style = f"{style} {color}".strip()

    indent = "  " * int(line.styling.get("indent", 0))
    star = "★ " if line.styling.get("starred") else ""
    text = Text(f"{indent}{star}{line.text}", style=style)
    if line.link and not line.is_header:
        text.append(f"  → {line.link}", style="dim cyan")
    return text


def run(args: argparse.Namespace) -> None:
    ruleset = require_ruleset(load(args))
    graph = ruleset.graph

    node = graph.branch(args.name) or graph.policy(args.name)
    if node is None:
        console.print(f"[red]Brak gałęzi ani polityki o nazwie:[/red] {args.name}")
        raise SystemExit(1)

    if args.json_output:
        lines = [line.to_dict() for line in assemble(node, ruleset)]
        print(json.dumps(lines, ensure_ascii=False, indent=2))
        return

    console.print()
    for line in assemble(node, ruleset):
        console.print(_render(line))
    console.print()


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "pedia",
        help="Wyświetla dokumentację (civilopedia) gałęzi lub polityki.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Składa linie dokumentacji napisane przez autora treści z liniami
generowanymi z grafu (wymagania, co odblokowuje, uniques).

Przykłady:
  pcx pedia Tradition
  pcx pedia "Landed Elite"
  pcx pedia "Landed Elite" --json-output
        """,
    )
    p.add_argument(
        "name",
        metavar="NAZWA",
        help="Nazwa gałęzi lub polityki.",
    )
    add_ruleset_arguments(p)
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz linie jako JSON (rekordy civilopediaText).",
    )
    p.set_defaults(func=run)
