"""
uniques/errors.py — błędy parsowania zdań unique.

MalformedUnique    — bazowy błąd: zdanie nie daje się sparsować
                     (nawiasy, pusty tekst, błąd w warunku <...>).
UnknownUniqueKind  — szkielet zdania nie występuje w tabeli szablonów.
ArityMismatch      — słowa pasują do szablonu, liczba segmentów [...] nie.

Wszystkie dziedziczą po ValueError: to błąd treści, nie programu.
"""

from __future__ import annotations


class MalformedUnique(ValueError):
    """
    Zdanie unique nie pasuje do żadnego szablonu.

    - sentence: surowy tekst zdania
    - reason:   czytelny powód
    - nested:   błąd warunku <...>, który spowodował ten błąd (opcjonalnie)
    """

    def __init__(
        self,
        sentence: str,
        reason: str,
        nested: MalformedUnique | None = None,
    ) -> None:
        super().__init__(f"{reason}: '{sentence}'")
        self.sentence = sentence
        self.reason = reason
        self.nested = nested

    @property
    def root_cause(self) -> MalformedUnique:
        """Najgłębszy błąd w łańcuchu warunków."""
        err = self
        while err.nested is not None:
            err = err.nested
        return err


class UnknownUniqueKind(MalformedUnique):
    """Szkielet zdania nie występuje w tabeli szablonów."""

    def __init__(self, sentence: str, skeleton: str, reason: str | None = None) -> None:
        super().__init__(sentence, reason or f"nieznany rodzaj unique (szkielet '{skeleton}')")
        self.skeleton = skeleton


class ArityMismatch(MalformedUnique):
    """
    Liczba segmentów [...] różna od liczby slotów szablonu.

    - expected, actual: liczby segmentów [...] (stałe segmenty szablonu wliczone)
    - arity:            liczba parametrów szablonu (UniqueTemplate.arity)
    """

    def __init__(
        self,
        sentence: str,
        kind: str,
        expected: int,
        actual: int,
        arity: int | None = None,
    ) -> None:
        arity = expected if arity is None else arity
        params = f" ({arity} parametr(ów))" if arity != expected else ""
        super().__init__(
            sentence,
            f"'{kind}' wymaga {expected} segment(ów) [...]{params}, podano {actual}",
        )
        self.kind = kind
        self.expected = expected
        self.actual = actual
        self.arity = arity
