"""
Kontekst zestawu reguł (Ruleset).

Niezmienny kontekst przekazywany jawnie do walidatora i do składania
dokumentacji — zamiast globalnego singletonu.

- graph:          zbudowany graf gałęzi i polityk
- templates:      tabela szablonów, względem której sparsowano uniques
- primary_source: główne źródło treści (np. "base")
- sources:        aktywne źródła treści, główne pierwsze
"""

from __future__ import annotations

from dataclasses import dataclass

from uniques import TemplateTable

from .graph import PolicyGraph


@dataclass(frozen=True, slots=True)
class Ruleset:
    graph: PolicyGraph
    templates: TemplateTable
    primary_source: str = "base"
    sources: tuple[str, ...] = ()

    @property
    def is_multi_source(self) -> bool:
        """Więcej niż jedno aktywne źródło treści (mody)."""
        return len(set(self.sources)) > 1
