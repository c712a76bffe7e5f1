"""
pcx — narzędzie CLI dla PolicyCodex.

Użycie:
  pcx <komenda> [opcje]

Komendy:
  validate      Ładuje gałęzie polityk i waliduje graf oraz zdania unique.
  pedia         Wyświetla złożoną dokumentację gałęzi lub polityki.
  parse-unique  Parsuje pojedyncze zdanie unique.
  templates     Listuje szablony zdań unique (i warunków).
  graph         Listuje polityki z wymaganiami i krawędziami odwrotnymi.

Zmienne środowiskowe:
  PCX_RULESET         domyślny plik treści (data/Policies.json)
  PCX_PRIMARY_SOURCE  nazwa głównego źródła treści (base)
  PCX_LOG_LEVEL       poziom logowania (WARNING)
"""

from __future__ import annotations

import argparse
import sys

# Windows: terminal może używać cp1252 — wymuszamy UTF-8, żeby polskie znaki
# i znaczniki (⚠, ★) były wypisywane poprawnie.
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from pcx import _config
from pcx.commands import graph as cmd_graph
from pcx.commands import parse_unique as cmd_parse_unique
from pcx.commands import pedia as cmd_pedia
from pcx.commands import templates as cmd_templates
from pcx.commands import validate as cmd_validate


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pcx",
        description="PolicyCodex — gałęzie polityk, zdania unique, civilopedia.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="pcx 0.1.0"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        metavar="POZIOM",
        help="Poziom logowania: DEBUG, INFO, WARNING, ERROR (domyślnie: $PCX_LOG_LEVEL lub WARNING).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_validate.add_parser(subparsers)
    cmd_pedia.add_parser(subparsers)
    cmd_parse_unique.add_parser(subparsers)
    cmd_templates.add_parser(subparsers)
    cmd_graph.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _config.setup_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
