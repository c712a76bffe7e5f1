"""Wspólne dla komend: wczytanie zestawu reguł wskazanego argumentami."""

from __future__ import annotations

import argparse
import json
import pathlib

from rich.console import Console

from data_model import Ruleset
from data_model.loader import LoadResult, load_ruleset_file
from pcx import _config

console = Console()


def add_ruleset_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "ruleset",
        nargs="?",
        default=None,
        metavar="PLIK",
        help=f"Plik JSON z gałęziami polityk (domyślnie: $PCX_RULESET lub {_config.DEFAULT_RULESET.name}).",
    )
    p.add_argument(
        "--mod",
        action="append",
        default=[],
        metavar="NAZWA=PLIK",
        help="Dodatkowe źródło treści (mod); można podać kilka razy.",
    )
    p.add_argument(
        "--source",
        default=None,
        metavar="NAZWA",
        help="Nazwa głównego źródła treści (domyślnie: $PCX_PRIMARY_SOURCE lub 'base').",
    )


def _parse_mods(items: list[str]) -> dict[str, pathlib.Path]:
    mods: dict[str, pathlib.Path] = {}
    for item in items:
        name, sep, path = item.partition("=")
        if not sep or not name or not path:
            console.print(f"[red]Niepoprawny --mod:[/red] '{item}' (oczekiwano NAZWA=PLIK)")
            raise SystemExit(2)
        mods[name] = pathlib.Path(path)
    return mods


def load(args: argparse.Namespace) -> LoadResult:
    """Ładuje zestaw reguł; brak pliku lub zły JSON kończą komendę kodem 1."""
    path = pathlib.Path(args.ruleset) if args.ruleset else _config.ruleset_path()
    mods = _parse_mods(args.mod)

    for p in (path, *mods.values()):
        if not p.exists():
            console.print(f"[red]Brak pliku treści:[/red] {p}")
            raise SystemExit(1)

    try:
        return load_ruleset_file(
            path,
            primary_source=args.source or _config.primary_source(),
            mods=mods,
        )
    except json.JSONDecodeError as exc:
        console.print(f"[red]Błąd parsowania JSON:[/red] {exc}")
        raise SystemExit(1)


def require_ruleset(result: LoadResult) -> Ruleset:
    """Ruleset albo koniec komendy, gdy ładowanie nie zbudowało grafu."""
    if result.ruleset is None:
        console.print(
            f"[red]Nie można zbudować grafu[/red] — {len(result.report.errors)} błąd(ów) "
            f"ładowania. Uruchom [bold]pcx validate[/bold], aby zobaczyć szczegóły."
        )
        raise SystemExit(1)
    return result.ruleset
