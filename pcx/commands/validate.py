"""Komenda: pcx validate — ładuje zestaw reguł i waliduje graf polityk."""

from __future__ import annotations

import argparse
import dataclasses
import json
import sys

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from pcx.commands._ruleset import add_ruleset_arguments, load
from validator import GraphValidator, ValidationReport

console = Console()


def _report_json(report: ValidationReport) -> str:
    out: dict = {
        "is_valid": report.is_valid,
        "errors": [dataclasses.asdict(e) for e in report.errors],
        "warnings": report.warnings,
    }
    return json.dumps(out, ensure_ascii=False, indent=2)


def run(args: argparse.Namespace) -> None:
    result = load(args)
    report = result.report
    if result.ruleset is not None:
        report = report.merge(GraphValidator(result.ruleset).validate())

    if args.json_output:
        print(_report_json(report))
        if not report.is_valid:
            sys.exit(1)
        return

    # --- Wynik na konsoli ------------------------------------------------
    if result.ruleset is not None:
        graph = result.ruleset.graph
        summary = f"{len(graph.branches)} gałęzi, {len(graph)} polityk"
    else:
        summary = "graf nie został zbudowany"

    if report.is_valid:
        console.print(f"[green]OK[/green]  Zestaw reguł jest poprawny ({summary}).")
    else:
        console.print(
            f"[red]BŁĄD[/red]  {len(report.errors)} błąd(ów) ({summary})."
        )

        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Kod",      style="yellow", no_wrap=True)
        table.add_column("Ścieżka", style="cyan",   no_wrap=True)
        table.add_column("Komunikat")
        table.add_column("Poprawka", style="dim")

        for e in report.errors:
            table.add_row(e.code, Text(e.path), Text(e.message), Text(e.expected_fix))

        console.print(table)

    if report.warnings:
        console.print("[yellow]Ostrzeżenia:[/yellow]")
        for w in report.warnings:
            console.print(Text.assemble(("  · ", "yellow"), w))

    if not report.is_valid:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "validate",
        help="Waliduje zestaw reguł (gałęzie, polityki, uniques).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Ładuje gałęzie polityk i sprawdza:

  A  JSON Schema           (kształt rekordów)
  B  Zdania unique         (nawiasy, rodzaj, arność, warunki)
  C  Klucze                (unikalność nazw gałęzi i polityk)
  D  Graf                  (cykle, wiszące requires, węzeł ukończenia,
                            osiągalność, priorytety)

Kod wyjścia 1, gdy jest choć jeden błąd.

Przykłady:
  pcx validate
  pcx validate data/Policies.json
  pcx validate data/Policies.json --mod mojmod=mod/Policies.json
  pcx validate --json-output
        """,
    )
    add_ruleset_arguments(p)
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz raport walidacji jako JSON na stdout.",
    )
    p.set_defaults(func=run)
