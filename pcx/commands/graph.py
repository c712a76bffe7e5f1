"""Komenda: pcx graph — wymagania i krawędzie odwrotne polityk."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from pcx.commands._ruleset import add_ruleset_arguments, load, require_ruleset

console = Console(width=220)


def run(args: argparse.Namespace) -> None:
    ruleset = require_ruleset(load(args))
    graph = ruleset.graph

    branches = graph.branches
    if args.branch:
        branch = graph.branch(args.branch)
        if branch is None:
            console.print(f"[red]Brak gałęzi:[/red] {args.branch}")
            raise SystemExit(1)
        branches = (branch,)

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("GAŁĄŹ",     no_wrap=True)
    table.add_column("POLITYKA",  no_wrap=True, style="bold")
    table.add_column("POZYCJA",   no_wrap=True)
    table.add_column("WYMAGA")
    table.add_column("ODBLOKOWUJE")
    table.add_column("UNIQUES",   justify="right")

    total = 0
    for branch in branches:
        for policy in branch.policies:
            position = (
                Text("ukończenie", style="magenta")
                if policy.is_completion
                else f"{policy.row},{policy.column}"
            )
            errors = len(policy.unique_errors)
            uniques = f"{len(policy.uniques)}" + (f" [red](+{errors} ✗)[/red]" if errors else "")
            table.add_row(
                branch.name,
                policy.name,
                position,
                ", ".join(graph.prerequisites(policy.name)) or "[dim]—[/dim]",
                ", ".join(graph.unlocks(policy.name)) or "[dim]—[/dim]",
                uniques,
            )
            total += 1

    console.print()
    console.print(table)
    console.print(f"  [dim]{total} polityk w {len(branches)} gałęzi(ach)[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "graph",
        help="Listuje polityki z wymaganiami i tym, co odblokowują.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje polityki gałęzi: pozycję w siatce, requires i krawędzie odwrotne.

Przykłady:
  pcx graph
  pcx graph --branch Tradition
        """,
    )
    add_ruleset_arguments(p)
    p.add_argument(
        "--branch", "-b",
        metavar="NAZWA",
        help="Pokaż tylko jedną gałąź.",
    )
    p.set_defaults(func=run)
