"""
uniques/parser.py — parser zdań unique.

UniqueParser.parse(sentence) -> UniqueStatement

Etapy:
  1 — skanowanie         ([...] parametry, <...> warunki, nawiasy)
  2 — szkielet           (tekst z markerami "[]")
  3 — rodzaj             (dokładny lookup szkieletu w tabeli szablonów)
  4 — arność             (słowa pasują, liczba segmentów nie → ArityMismatch)
  5 — warunki            (rekurencyjnie, względem szablonów warunkowych)

Wyniki (także błędy) są cache'owane per instancja parsera: ten sam surowy
tekst nigdy nie jest parsowany dwa razy.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import ArityMismatch, MalformedUnique, UnknownUniqueKind
from .templates import TemplateTable, default_table
from .tokens import ScannedSentence, scan
from .types import UniqueStatement, UniqueTemplate

log = logging.getLogger(__name__)


class UniqueParser:
    """
    Parser zdań unique względem tabeli szablonów.

    Użycie:
        parser    = UniqueParser()
        statement = parser.parse("[+15]% Production when constructing [Melee] units [in all cities]")
        statement.kind        # "Unit production bonus"
        statement.parameters  # ("+15", "Melee")
    """

    def __init__(self, templates: TemplateTable | None = None) -> None:
        self._templates = templates if templates is not None else default_table()
        self._parsed: dict[tuple[str, bool], UniqueStatement] = {}
        self._failed: dict[tuple[str, bool], MalformedUnique] = {}

    @property
    def templates(self) -> TemplateTable:
        return self._templates

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def parse(self, sentence: str) -> UniqueStatement:
        """
        Parsuje zdanie unique poziomu głównego.

        Raises:
            MalformedUnique (lub podklasa UnknownUniqueKind / ArityMismatch).
        """
        return self._parse(sentence, conditional=False)

    def parse_conditional(self, sentence: str) -> UniqueStatement:
        """Parsuje treść klauzuli <...> (bez nawiasów kątowych)."""
        return self._parse(sentence, conditional=True)

    def parse_many(
        self,
        sentences: Iterable[str],
    ) -> tuple[tuple[UniqueStatement, ...], tuple[MalformedUnique, ...]]:
        """
        Parsuje listę zdań jednego węzła, zbierając błędy zamiast przerywać.

        Returns:
            (poprawne zdania, błędy) — oba w kolejności wejścia
        """
        statements: list[UniqueStatement] = []
        errors: list[MalformedUnique] = []
        for sentence in sentences:
            try:
                statements.append(self.parse(sentence))
            except MalformedUnique as exc:
                errors.append(exc)
        return tuple(statements), tuple(errors)

    # ------------------------------------------------------------------
    # Implementacja
    # ------------------------------------------------------------------

    def _parse(self, sentence: str, conditional: bool) -> UniqueStatement:
        key = (sentence, conditional)
        if key in self._parsed:
            return self._parsed[key]
        if key in self._failed:
            # bez śladu z poprzednich wywołań
            raise self._failed[key].with_traceback(None)

        try:
            statement = self._build(sentence, conditional)
        except MalformedUnique as exc:
            self._failed[key] = exc
            raise
        self._parsed[key] = statement
        return statement

    def _build(self, sentence: str, conditional: bool) -> UniqueStatement:
        if not sentence.strip():
            raise MalformedUnique(sentence, "pusty tekst unique")

        scanned = scan(sentence)
        if conditional and scanned.conditionals:
            raise MalformedUnique(sentence, "warunek nie może zawierać kolejnego <...>")

        template, parameters = self._resolve(sentence, scanned, conditional)

        conditionals: list[UniqueStatement] = []
        for raw in scanned.conditionals:
            try:
                conditionals.append(self._parse(raw, conditional=True))
            except MalformedUnique as exc:
                raise MalformedUnique(
                    sentence,
                    f"niepoprawny warunek <{raw}> ({exc.reason})",
                    nested=exc,
                ) from exc

        log.debug("unique %r -> %s %s", sentence, template.kind, parameters)
        return UniqueStatement(
            kind=template.kind,
            text=sentence,
            parameters=parameters,
            conditionals=tuple(conditionals),
        )

    def _resolve(
        self,
        sentence: str,
        scanned: ScannedSentence,
        conditional: bool,
    ) -> tuple[UniqueTemplate, tuple[str, ...]]:
        candidates = self._templates.lookup(scanned.skeleton, conditional)
        for template in candidates:
            parameters = template.match(scanned.segments)
            if parameters is not None:
                return template, parameters

        if candidates:
            literals = ", ".join(
                f"[{s.literal}]" for s in candidates[0].slots if not s.is_placeholder
            )
            raise UnknownUniqueKind(
                sentence,
                scanned.skeleton,
                reason=f"stały segment nie pasuje do szablonu '{candidates[0].kind}' (oczekiwano {literals})",
            )

        near = self._templates.lookup_words(scanned.word_skeleton, conditional)
        for template in near:
            if len(template.slots) != len(scanned.segments):
                raise ArityMismatch(
                    sentence,
                    kind=template.kind,
                    expected=len(template.slots),
                    actual=len(scanned.segments),
                    arity=template.arity,
                )
        if near:
            # liczba segmentów się zgadza, tylko ich położenie nie
            raise UnknownUniqueKind(
                sentence,
                scanned.skeleton,
                reason=(
                    f"segmenty [...] w złym miejscu; oczekiwano szablonu "
                    f"'{near[0].text}'"
                ),
            )

        # poprawny szablon, ale w złym kontekście (warunek jako unique lub odwrotnie)
        if self._templates.lookup(scanned.skeleton, not conditional):
            where = "poza warunkiem <...>" if conditional else "jako warunek <...>"
            raise UnknownUniqueKind(
                sentence,
                scanned.skeleton,
                reason=f"ten rodzaj unique jest dozwolony wyłącznie {where}",
            )

        raise UnknownUniqueKind(sentence, scanned.skeleton)
