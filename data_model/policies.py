"""
Struktury danych dla gałęzi polityk i polityk.

Mapowanie na rekord JSON (Policies.json):
  PolicyBranch: name, era, priorities, uniques, policies, civilopediaText
  Policy:       name, uniques, requires, row, column, civilopediaText

Węzeł ukończenia gałęzi (completion node) jest rozpoznawany strukturalnie:
brak row i brak column — nigdy po wzorcu nazwy.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from uniques import MalformedUnique, UniqueStatement

from .documentation import DocumentationLine, NodeIdentity

# Kategoria linków civilopedii dla gałęzi i polityk
POLICY_CATEGORY = "Policy"


def make_link(name: str, category: str = POLICY_CATEGORY) -> str:
    """Link civilopedii w postaci "kategoria/nazwa"."""
    return f"{category}/{name}"


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Policy:
    """
    Polityka — węzeł grafu wymagań.

    - name:             klucz globalnie unikalny (we wszystkich gałęziach)
    - branch:           nazwa gałęzi, do której należy
    - uniques:          poprawnie sparsowane efekty
    - requires:         nazwy polityk wymaganych wcześniej (kolejność z treści,
                        bez powtórzeń); puste = dostępna od odblokowania gałęzi
    - row, column:      pozycja w siatce; obie None tylko dla węzła ukończenia
    - civilopedia_text: linie dokumentacji napisane przez autora
    - origin:           źródło treści (mod), z którego pochodzi węzeł
    - unique_texts:     surowe zdania unique w kolejności z treści
    - unique_errors:    błędy parsowania zdań, które nie weszły do uniques
    """
    name: str
    branch: str
    uniques: tuple[UniqueStatement, ...] = ()
    requires: tuple[str, ...] = ()
    row: int | None = None
    column: int | None = None
    civilopedia_text: tuple[DocumentationLine, ...] = ()
    origin: str = ""
    unique_texts: tuple[str, ...] = ()
    unique_errors: tuple[MalformedUnique, ...] = field(default=(), compare=False)

    @property
    def is_completion(self) -> bool:
        """True dla węzła ukończenia gałęzi — brak obu współrzędnych."""
        return self.row is None and self.column is None

    @property
    def has_partial_layout(self) -> bool:
        """Tylko jedna z row/column — błąd kształtu."""
        return (self.row is None) != (self.column is None)

    @property
    def position(self) -> tuple[int, int] | None:
        if self.row is None or self.column is None:
            return None
        return self.row, self.column

    @property
    def identity(self) -> NodeIdentity:
        return NodeIdentity(name=self.name, link=make_link(self.name))


# ---------------------------------------------------------------------------
# PolicyBranch
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class PolicyBranch:
    """
    Gałąź polityk.

    - name:        klucz unikalny
    - era:         era odblokowania (znacznik porządkujący)
    - priorities:  etykieta orientacji zwycięstwa → waga całkowita (dowolna,
                   także ujemna lub zero; używana zewnętrznie przez AI)
    - uniques:     efekty obowiązujące po przyjęciu dowolnej polityki gałęzi
    - policies:    polityki w kolejności z treści, zakończone węzłem ukończenia
    """
    name: str
    era: str = ""
    priorities: Mapping[str, int] = field(default_factory=dict, hash=False)
    uniques: tuple[UniqueStatement, ...] = ()
    policies: tuple[Policy, ...] = ()
    civilopedia_text: tuple[DocumentationLine, ...] = ()
    origin: str = ""
    unique_texts: tuple[str, ...] = ()
    unique_errors: tuple[MalformedUnique, ...] = field(default=(), compare=False)

    @property
    def completion_candidates(self) -> tuple[Policy, ...]:
        """Polityki bez współrzędnych — poprawna gałąź ma dokładnie jedną."""
        return tuple(p for p in self.policies if p.is_completion)

    @property
    def completion_policy(self) -> Policy | None:
        candidates = self.completion_candidates
        return candidates[0] if len(candidates) == 1 else None

    @property
    def layout_policies(self) -> tuple[Policy, ...]:
        """Polityki z pozycją w siatce (bez węzła ukończenia)."""
        return tuple(p for p in self.policies if not p.is_completion)

    @property
    def identity(self) -> NodeIdentity:
        return NodeIdentity(name=self.name, link=make_link(self.name))
