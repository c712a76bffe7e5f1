"""
data_model/loader.py — budowa Ruleset z rekordów treści.

Publiczne API:
  load_ruleset(records, primary_source, parser)         -> LoadResult
  load_ruleset_file(path, primary_source, parser)       -> LoadResult
  read_records(path)                                    -> list[dict]

Rekordy są w pełni zdeserializowane przed parsowaniem. Problemy z treścią
nie są rzucane do wywołującego — trafiają do raportu:
  A — JSON Schema      (per rekord gałęzi: błędny rekord jest pomijany,
                        pozostałe gałęzie trafiają do grafu i walidacji)
  B — zdania unique    (błędy zbierane per węzeł; węzeł ładuje się z resztą)
  C — klucze           (DuplicateKey → E_DUPLICATE_KEY, ruleset=None)

Błędy zdań unique z etapu B są zapisane w węzłach (unique_errors) i
raportowane przez GraphValidator; tu tylko logowane.
"""

from __future__ import annotations

import json
import logging
import pathlib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import jsonschema

from uniques import UniqueParser
from validator.types import ErrorCode, ValidationError, ValidationReport

from .documentation import DocumentationLine
from .graph import DuplicateKey, PolicyGraph
from .policies import Policy, PolicyBranch
from .ruleset import Ruleset
from .schema import RULESET_SCHEMA

log = logging.getLogger(__name__)

DEFAULT_SOURCE = "base"

Records = Sequence[Mapping[str, Any]]


@dataclass(slots=True)
class LoadResult:
    """
    Wynik ładowania.

    - ruleset: zbudowany kontekst (None tylko przy kolizji kluczy)
    - report:  błędy kształtu rekordów i kolizji nazw (rekordy z błędem
               schematu nie wchodzą do grafu)
    """

    ruleset: Ruleset | None
    report: ValidationReport


# ---------------------------------------------------------------------------
# Rekordy z pliku
# ---------------------------------------------------------------------------

def read_records(path: str | pathlib.Path) -> list[dict[str, Any]]:
    """
    Wczytuje rekordy gałęzi z pliku JSON.

    Akceptowane formaty::

        [ {"name": "Tradition", ...}, ... ]
        {"branches": [ {"name": "Tradition", ...}, ... ]}

    Raises:
        json.JSONDecodeError, OSError — błędy pliku są sprawą wywołującego.
    """
    raw = json.loads(pathlib.Path(path).read_text(encoding="utf-8"))
    if isinstance(raw, dict) and "branches" in raw:
        return raw["branches"]
    return raw


def load_ruleset_file(
    path: str | pathlib.Path,
    primary_source: str = DEFAULT_SOURCE,
    parser: UniqueParser | None = None,
    mods: Mapping[str, str | pathlib.Path] | None = None,
) -> LoadResult:
    """Ładuje główny plik treści i opcjonalne pliki modów (nazwa → ścieżka)."""
    sources: dict[str, Records] = {primary_source: read_records(path)}
    for name, mod_path in (mods or {}).items():
        sources[name] = read_records(mod_path)
    return load_ruleset(sources, primary_source=primary_source, parser=parser)


# ---------------------------------------------------------------------------
# Budowa Ruleset
# ---------------------------------------------------------------------------

def load_ruleset(
    records: Records | Mapping[str, Records],
    primary_source: str = DEFAULT_SOURCE,
    parser: UniqueParser | None = None,
) -> LoadResult:
    """
    Buduje Ruleset z rekordów.

    Args:
        records:        lista rekordów gałęzi (jedno źródło = primary_source)
                        albo słownik źródło → lista rekordów
        primary_source: nazwa głównego źródła treści
        parser:         parser uniques (domyślnie z wbudowaną tabelą szablonów)
    """
    parser = parser if parser is not None else UniqueParser()
    by_source: dict[str, Records] = (
        dict(records) if isinstance(records, Mapping) else {primary_source: records}
    )

    # A — JSON Schema
    errors: list[ValidationError] = []
    accepted: dict[str, list[Mapping[str, Any]]] = {}
    for source, source_records in by_source.items():
        accepted[source] = _stage_schema(source, source_records, errors)
    if errors:
        log.warning("schemat: %d błąd(ów), błędne rekordy gałęzi pominięte", len(errors))

    # B — węzły
    branches: list[PolicyBranch] = []
    for source, source_records in accepted.items():
        for record in source_records:
            branches.append(_build_branch(record, source, parser))

    # C — graf
    try:
        graph = PolicyGraph(branches)
    except DuplicateKey as exc:
        errors.append(ValidationError(
            code=ErrorCode.DUPLICATE_KEY,
            path=f"/{exc.name}",
            message=str(exc),
            expected_fix=f"Zmień nazwę jednego z węzłów '{exc.name}' — nazwy muszą być unikalne.",
            details={"kind": exc.kind, "name": exc.name, "branches": list(exc.where)},
        ))
        return LoadResult(ruleset=None, report=ValidationReport.build(errors))

    sources = (primary_source, *(s for s in by_source if s != primary_source))
    log.debug(
        "załadowano %d gałęzi, %d polityk ze źródeł %s",
        len(graph.branches), len(graph), ", ".join(sources),
    )
    ruleset = Ruleset(
        graph=graph,
        templates=parser.templates,
        primary_source=primary_source,
        sources=sources,
    )
    return LoadResult(ruleset=ruleset, report=ValidationReport.build(errors))


def _stage_schema(
    source: str,
    records: Records,
    errors: list[ValidationError],
) -> list[Mapping[str, Any]]:
    """
    Sprawdza kształt rekordów i zwraca te, które przeszły.

    Błąd bez ścieżki (np. źródło nie jest tablicą) odrzuca całe źródło;
    błąd pod /<i>/... odrzuca tylko rekord i.
    """
    validator = jsonschema.Draft202012Validator(RULESET_SCHEMA)
    rejected: set[int] = set()
    whole_source = False
    for e in validator.iter_errors(records):
        path = (
            "/" + "/".join(str(p) for p in e.absolute_path)
            if e.absolute_path
            else "/"
        )
        details: dict[str, Any] = {"source": source}
        if e.absolute_path:
            index = e.absolute_path[0]
            rejected.add(index)
            record = records[index]
            if isinstance(record, Mapping) and isinstance(record.get("name"), str):
                details["branch"] = record["name"]
        else:
            whole_source = True
        errors.append(ValidationError(
            code=ErrorCode.SCHEMA_VIOLATION,
            path=path,
            message=e.message,
            expected_fix=f"Popraw naruszenie schematu JSON na ścieżce {path}.",
            details=details,
        ))

    if whole_source:
        log.debug("źródło '%s' odrzucone przez schemat", source)
        return []
    if rejected:
        log.debug("źródło '%s': pominięte rekordy %s", source, sorted(rejected))
    return [r for i, r in enumerate(records) if i not in rejected]


def _parse_uniques(parser: UniqueParser, texts: Sequence[str], where: str):
    statements, failures = parser.parse_many(texts)
    for exc in failures:
        log.warning("%s: %s", where, exc)
    return statements, failures


def _lines(record: Mapping[str, Any]) -> tuple[DocumentationLine, ...]:
    return tuple(DocumentationLine.from_record(r) for r in record.get("civilopediaText", []))


def _build_policy(record: Mapping[str, Any], branch: str, source: str, parser: UniqueParser) -> Policy:
    texts = tuple(record.get("uniques", []))
    uniques, failures = _parse_uniques(parser, texts, f"{branch}/{record['name']}")
    return Policy(
        name=record["name"],
        branch=branch,
        uniques=uniques,
        requires=tuple(dict.fromkeys(record.get("requires", []))),
        row=record.get("row"),
        column=record.get("column"),
        civilopedia_text=_lines(record),
        origin=source,
        unique_texts=texts,
        unique_errors=failures,
    )


def _build_branch(record: Mapping[str, Any], source: str, parser: UniqueParser) -> PolicyBranch:
    name = record["name"]
    texts = tuple(record.get("uniques", []))
    uniques, failures = _parse_uniques(parser, texts, name)
    return PolicyBranch(
        name=name,
        era=record.get("era", ""),
        priorities=dict(record.get("priorities", {})),
        uniques=uniques,
        policies=tuple(_build_policy(p, name, source, parser) for p in record["policies"]),
        civilopedia_text=_lines(record),
        origin=source,
        unique_texts=texts,
        unique_errors=failures,
    )
