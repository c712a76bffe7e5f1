"""
validator/types.py — kody błędów i struktury raportu walidacji.

ValidationError — pojedynczy błąd z kodem, ścieżką w treści reguł,
    komunikatem i mechaniczną instrukcją naprawy.
ValidationReport — wynik ładowania lub walidacji: is_valid, errors, warnings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from uniques import ArityMismatch, MalformedUnique, UnknownUniqueKind


class ErrorCode(StrEnum):
    """Stałe kody błędów ładowania i walidacji grafu."""

    # Ładowanie — kształt rekordów
    SCHEMA_VIOLATION      = "E_SCHEMA_VIOLATION"
    DUPLICATE_KEY         = "E_DUPLICATE_KEY"

    # Węzeł — zdania unique
    MALFORMED_UNIQUE      = "E_MALFORMED_UNIQUE"
    UNKNOWN_UNIQUE_KIND   = "E_UNKNOWN_UNIQUE_KIND"
    ARITY_MISMATCH        = "E_ARITY_MISMATCH"

    # Graf — struktura
    CYCLE_DETECTED        = "E_CYCLE_DETECTED"
    DANGLING_REFERENCE    = "E_DANGLING_REFERENCE"
    COMPLETION_SHAPE      = "E_COMPLETION_SHAPE"
    UNREACHABLE_POLICY    = "E_UNREACHABLE_POLICY"

    # Gałąź — priorytety
    PRIORITY_NOT_INT      = "E_PRIORITY_NOT_INT"

    @classmethod
    def for_unique_error(cls, exc: MalformedUnique) -> ErrorCode:
        """Kod dla błędu parsowania zdania unique."""
        if isinstance(exc, ArityMismatch):
            return cls.ARITY_MISMATCH
        if isinstance(exc, UnknownUniqueKind):
            return cls.UNKNOWN_UNIQUE_KIND
        return cls.MALFORMED_UNIQUE


@dataclass(slots=True)
class ValidationError:
    """
    Pojedynczy błąd walidacji.

    - code:         stały identyfikator klasy błędu (ErrorCode)
    - path:         ścieżka do miejsca błędu, np. "/Tradition/policies/Landed Elite/requires"
    - message:      czytelny opis błędu
    - expected_fix: krótka mechaniczna instrukcja naprawy
    - details:      opcjonalny słownik z dodatkowymi danymi
    """

    code: ErrorCode
    path: str
    message: str
    expected_fix: str
    details: dict[str, Any] | None = None


@dataclass(slots=True)
class ValidationReport:
    """
    Wynik ładowania lub walidacji.

    - is_valid: True gdy brak błędów (warnings nie wpływają)
    - errors:   lista błędów (ValidationError), w kolejności wykrycia
    - warnings: lista komunikatów ostrzegawczych (str)
    """

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        errors: list[ValidationError],
        warnings: list[str] | None = None,
    ) -> ValidationReport:
        return cls(is_valid=not errors, errors=errors, warnings=warnings or [])

    def merge(self, other: ValidationReport) -> ValidationReport:
        """Nowy raport: błędy i ostrzeżenia obu raportów, w kolejności."""
        return ValidationReport.build(
            [*self.errors, *other.errors],
            [*self.warnings, *other.warnings],
        )

    def codes(self) -> list[ErrorCode]:
        return [e.code for e in self.errors]

    def errors_with(self, code: ErrorCode) -> list[ValidationError]:
        return [e for e in self.errors if e.code == code]
