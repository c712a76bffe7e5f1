"""
uniques/templates.py — tabela kanonicznych szablonów zdań unique.

TemplateTable buduje indeksy:
  _by_kind:     kind            -> UniqueTemplate
  _by_skeleton: (skeleton, cond) -> [UniqueTemplate, ...]
  _by_words:    (słowa, cond)    -> [UniqueTemplate, ...]

Przy tym samym szkielecie kandydaci są sprawdzani od najbardziej
szczegółowego (najwięcej stałych literałów), potem w kolejności rejestracji.

default_table() zwraca NOWĄ tabelę z wbudowanym słownikiem — bez
globalnego, współdzielonego stanu.
"""

from __future__ import annotations

from collections.abc import Iterator

from .types import HIDDEN_FROM_USERS, UniqueTemplate


# ---------------------------------------------------------------------------
# Wbudowany słownik: (kind, szablon)
# ---------------------------------------------------------------------------

UNIQUE_TEMPLATES: tuple[tuple[str, str], ...] = (
    ("Stats",                       "[stats] [cityFilter]"),
    ("Stats per population",        "[stats] per [amount] population [cityFilter]"),
    ("Stats from tiles",            "[stats] from [tileFilter] tiles [cityFilter]"),
    ("Stats from buildings",        "[stats] from every [buildingFilter]"),
    ("Stat percent bonus",          "[relativeAmount]% [stat] [cityFilter]"),
    ("Production bonus",            "[relativeAmount]% Production when constructing [buildingFilter] buildings [cityFilter]"),
    ("Wonder production bonus",     "[relativeAmount]% Production when constructing [buildingFilter] wonders [cityFilter]"),
    ("Unit production bonus",       "[relativeAmount]% Production when constructing [baseUnitFilter] units [in all cities]"),
    ("City unit production bonus",  "[relativeAmount]% Production when constructing [baseUnitFilter] units [cityFilter]"),
    ("Free unit",                   "Free [unit] appears"),
    ("Free units",                  "[amount] free [baseUnitFilter] units appear"),
    ("Free building",               "Provides a free [buildingName] [cityFilter]"),
    ("Border growth cost",          "[relativeAmount]% Culture cost of natural border growth [cityFilter]"),
    ("Policy cost",                 "[relativeAmount]% Culture cost of adopting new Policies"),
    ("Unit maintenance",            "[relativeAmount]% maintenance costs for [mapUnitFilter] units"),
    ("Building maintenance",        "[relativeAmount]% maintenance cost for buildings [cityFilter]"),
    ("Unhappiness from population", "[relativeAmount]% Unhappiness from population [cityFilter]"),
    ("Golden age length",           "[relativeAmount]% Golden Age length"),
    ("Great person rate",           "[relativeAmount]% Great Person generation [cityFilter]"),
    ("Strength bonus",              "[relativeAmount]% Strength"),
    ("Movement bonus",              "[amount] Movement"),
    ("Experience bonus",            "[relativeAmount]% XP gained from combat"),
    ("Flat happiness",              "[amount] Happiness"),
    ("Strategic resource bonus",    "Quantity of strategic resources produced by the empire +[relativeAmount]%"),
    ("Double resource",             "Double quantity of [resource] produced"),
    ("Golden age",                  "Triggers a Golden Age"),
    ("Capital connection",          "Connects the capital to all cities on the same continent"),
    ("Faster border expansion",     "Increased rate of border expansion"),
)

CONDITIONAL_TEMPLATES: tuple[tuple[str, str], ...] = (
    (HIDDEN_FROM_USERS,             "hidden from users"),
    ("For units",                   "for [mapUnitFilter] units"),
    ("Versus units",                "vs [mapUnitFilter] units"),
    ("When at war",                 "when at war"),
    ("When not at war",             "when not at war"),
    ("During golden age",           "during a Golden Age"),
    ("Minimum population",          "in cities with at least [amount] population"),
    ("Starting from era",           "starting from the [era]"),
    ("Before era",                  "before the [era]"),
    ("After adopting policy",       "after adopting [policy]"),
    ("With resource",               "with [resource]"),
    ("In tiles",                    "in [tileFilter] tiles"),
)


# ---------------------------------------------------------------------------
# TemplateTable
# ---------------------------------------------------------------------------

class TemplateTable:
    """Rozszerzalny słownik szablonów z wyszukiwaniem po szkielecie."""

    def __init__(self) -> None:
        self._by_kind: dict[str, UniqueTemplate] = {}
        self._by_skeleton: dict[tuple[str, bool], list[UniqueTemplate]] = {}
        self._by_words: dict[tuple[str, bool], list[UniqueTemplate]] = {}

    # ------------------------------------------------------------------
    # Rejestracja
    # ------------------------------------------------------------------

    def register(self, kind: str, text: str, conditional: bool = False) -> UniqueTemplate:
        """
        Dodaje szablon.

        Raises:
            ValueError gdy kind jest już zarejestrowany lub szablon jest
            niepoprawny składniowo.
        """
        if kind in self._by_kind:
            raise ValueError(f"Rodzaj unique '{kind}' jest już zarejestrowany.")

        template = UniqueTemplate(kind=kind, text=text, conditional=conditional)
        self._by_kind[kind] = template

        candidates = self._by_skeleton.setdefault((template.skeleton, conditional), [])
        candidates.append(template)
        # stabilne sortowanie: najbardziej szczegółowe pierwsze
        candidates.sort(key=lambda t: -t.literal_count)

        self._by_words.setdefault((template.word_skeleton, conditional), []).append(template)
        return template

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, kind: str) -> UniqueTemplate | None:
        return self._by_kind.get(kind)

    def lookup(self, skeleton: str, conditional: bool = False) -> tuple[UniqueTemplate, ...]:
        """Kandydaci o dokładnie tym szkielecie (z markerami "[]")."""
        return tuple(self._by_skeleton.get((skeleton, conditional), ()))

    def lookup_words(self, word_skeleton: str, conditional: bool = False) -> tuple[UniqueTemplate, ...]:
        """Kandydaci o tych samych słowach, niezależnie od liczby segmentów."""
        return tuple(self._by_words.get((word_skeleton, conditional), ()))

    def __contains__(self, kind: object) -> bool:
        return kind in self._by_kind

    def __iter__(self) -> Iterator[UniqueTemplate]:
        return iter(self._by_kind.values())

    def __len__(self) -> int:
        return len(self._by_kind)


def default_table() -> TemplateTable:
    """Nowa tabela z wbudowanym słownikiem szablonów."""
    table = TemplateTable()
    for kind, text in UNIQUE_TEMPLATES:
        table.register(kind, text)
    for kind, text in CONDITIONAL_TEMPLATES:
        table.register(kind, text, conditional=True)
    return table
