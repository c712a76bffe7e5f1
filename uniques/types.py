"""
uniques/types.py — typy danych zdań unique.

ParameterType    — słownik nazw placeholderów używanych w szablonach
                   ("amount", "stats", "cityFilter", ...) wraz z testem kształtu
TemplateSlot     — pojedynczy segment [...] szablonu: placeholder albo stały literał
UniqueTemplate   — kanoniczne zdanie szablonu z wyliczonym szkieletem i arnością
UniqueStatement  — sparsowane zdanie: kind, parametry, warunki
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .tokens import PLACEHOLDER, normalize_ws, scan

# Rodzaj warunku, który ukrywa unique w dokumentacji
HIDDEN_FROM_USERS = "Hidden from users"

_SIGNED_INT_RE = re.compile(r"^[+-]?\d+$")
_UNSIGNED_INT_RE = re.compile(r"^\d+$")
_STAT_NAMES = frozenset({
    "Production", "Food", "Gold", "Science", "Culture", "Happiness", "Faith",
})
_STAT_ENTRY_RE = re.compile(r"^[+-]?\d+(?:\.\d+)? ([A-Z][a-z]+)$")


# ---------------------------------------------------------------------------
# ParameterType
# ---------------------------------------------------------------------------

class ParameterType(StrEnum):
    """
    Nazwa placeholdera w szablonie, np. "[relativeAmount]".

    Test kształtu (check) jest heurystyką dla walidatora — niezgodność
    to ostrzeżenie, nigdy błąd parsowania.
    """
    AMOUNT           = "amount"
    RELATIVE_AMOUNT  = "relativeAmount"
    POSITIVE_AMOUNT  = "positiveAmount"
    STATS            = "stats"
    STAT             = "stat"
    CITY_FILTER      = "cityFilter"
    BASE_UNIT_FILTER = "baseUnitFilter"
    MAP_UNIT_FILTER  = "mapUnitFilter"
    BUILDING_FILTER  = "buildingFilter"
    BUILDING_NAME    = "buildingName"
    TILE_FILTER      = "tileFilter"
    UNIT             = "unit"
    POLICY           = "policy"
    ERA              = "era"
    RESOURCE         = "resource"

    def check(self, value: str) -> bool:
        """Czy wartość parametru ma kształt oczekiwany dla tego typu?"""
        match self:
            case ParameterType.AMOUNT | ParameterType.RELATIVE_AMOUNT:
                return bool(_SIGNED_INT_RE.match(value))
            case ParameterType.POSITIVE_AMOUNT:
                return bool(_UNSIGNED_INT_RE.match(value)) and int(value) > 0
            case ParameterType.STAT:
                return value in _STAT_NAMES
            case ParameterType.STATS:
                entries = [e.strip() for e in value.split(",")]
                for entry in entries:
                    m = _STAT_ENTRY_RE.match(entry)
                    if not m or m.group(1) not in _STAT_NAMES:
                        return False
                return True
            case _:
                return bool(value.strip())

    @classmethod
    def lookup(cls, name: str) -> ParameterType | None:
        try:
            return cls(name)
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# Szablony
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TemplateSlot:
    """
    Segment [...] szablonu.

    - placeholder: typ parametru, gdy segment jest placeholderem
    - literal:     tekst stałego segmentu (np. "in all cities"), który zdanie
                   musi powtórzyć dosłownie; nie liczy się do arności
    """
    placeholder: ParameterType | None = None
    literal: str | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.placeholder is not None


@dataclass(frozen=True, slots=True)
class UniqueTemplate:
    """
    Kanoniczne zdanie szablonu.

    - kind:        identyfikator rodzaju efektu, np. "Unit production bonus"
    - text:        "[relativeAmount]% Production when constructing [baseUnitFilter] units [in all cities]"
    - conditional: True → szablon dopuszczalny wyłącznie wewnątrz <...>
    - skeleton:    "[]% Production when constructing [] units []"
    - slots:       segmenty [...] w kolejności występowania
    """
    kind: str
    text: str
    conditional: bool = False
    skeleton: str = field(init=False)
    slots: tuple[TemplateSlot, ...] = field(init=False)

    def __post_init__(self) -> None:
        scanned = scan(self.text)
        if scanned.conditionals:
            raise ValueError(f"Szablon '{self.kind}' nie może zawierać warunków <...>.")
        slots = []
        for segment in scanned.segments:
            ptype = ParameterType.lookup(segment)
            if ptype is None:
                slots.append(TemplateSlot(literal=segment))
            else:
                slots.append(TemplateSlot(placeholder=ptype))
        object.__setattr__(self, "skeleton", scanned.skeleton)
        object.__setattr__(self, "slots", tuple(slots))

    @property
    def arity(self) -> int:
        """Liczba parametrów (placeholderów) — stałe literały się nie liczą."""
        return sum(1 for s in self.slots if s.is_placeholder)

    @property
    def literal_count(self) -> int:
        return len(self.slots) - self.arity

    @property
    def word_skeleton(self) -> str:
        return normalize_ws(self.skeleton.replace(PLACEHOLDER, " "))

    @property
    def parameter_types(self) -> tuple[ParameterType, ...]:
        return tuple(s.placeholder for s in self.slots if s.placeholder is not None)

    def match(self, segments: tuple[str, ...]) -> tuple[str, ...] | None:
        """
        Dopasowuje segmenty zdania do slotów.

        Zwraca parametry (zawartość segmentów w slotach-placeholderach,
        w kolejności) albo None, gdy stały literał się nie zgadza.
        """
        if len(segments) != len(self.slots):
            return None
        params: list[str] = []
        for slot, segment in zip(self.slots, segments):
            if slot.is_placeholder:
                params.append(segment)
            elif normalize_ws(segment) != normalize_ws(slot.literal or ""):
                return None
        return tuple(params)


# ---------------------------------------------------------------------------
# UniqueStatement
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class UniqueStatement:
    """
    Sparsowane zdanie unique — niezmienne po utworzeniu.

    - kind:         rodzaj efektu (klucz tabeli szablonów)
    - text:         surowe zdanie, dosłownie jak w treści reguł
    - parameters:   surowe wartości parametrów, od lewej do prawej
    - conditionals: sparsowane warunki <...> w kolejności z tekstu;
                    logicznie koniunkcja, kolejność tylko dla dokumentacji
    """
    kind: str
    text: str
    parameters: tuple[str, ...] = ()
    conditionals: tuple[UniqueStatement, ...] = ()

    @property
    def conditional_texts(self) -> tuple[str, ...]:
        """Surowe treści klauzul <...>."""
        return tuple(c.text for c in self.conditionals)

    def has_conditional(self, kind: str) -> bool:
        return any(c.kind == kind for c in self.conditionals)

    @property
    def is_hidden(self) -> bool:
        """True gdy unique ma warunek <hidden from users>."""
        return self.has_conditional(HIDDEN_FROM_USERS)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "text": self.text,
            "parameters": list(self.parameters),
            "conditionals": [c.to_dict() for c in self.conditionals],
        }
