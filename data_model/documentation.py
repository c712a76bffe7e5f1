"""
Struktury danych dla linii dokumentacji (civilopedia).

DocumentationLine — jedna linia: tekst, nagłówek, separator, link,
                    nieprzezroczyste dane stylu (kolor, gwiazdka, ikona, ...)
LinkType          — rodzaj linku wyliczany z jego treści
NodeIdentity      — opcjonalna zdolność węzła: nazwa + link/ikona nagłówka
DocumentedNode    — protokół węzła, dla którego można złożyć dokumentację

Mapowanie na rekord JSON "civilopediaText":
  text      → str
  link      → str   ("Policy/Legalism" lub URL)
  header    → int   (0 = zwykła linia, 1..6 = poziom nagłówka)
  separator → bool
  pozostałe klucze (color, starred, icon, indent, size, ...) → styling
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol

_EXTERNAL_LINK_RE = re.compile(r"^(?:https?://|mailto:)", re.IGNORECASE)

_STRUCTURAL_KEYS = frozenset({"text", "link", "header", "separator"})


class LinkType(StrEnum):
    """Rodzaj linku linii."""
    NONE     = "none"
    INTERNAL = "internal"
    EXTERNAL = "external"


# ---------------------------------------------------------------------------
# DocumentationLine
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DocumentationLine:
    """
    Linia dokumentacji — wygenerowana albo napisana przez autora treści.

    Linia jest "pusta" wtedy i tylko wtedy, gdy nie ma tekstu, nie ma linku
    i nie jest separatorem. Pustka decyduje o odstępach, nie o usuwaniu linii.
    """
    text: str = ""
    link: str = ""
    header: int = 0
    separator: bool = False
    styling: Mapping[str, Any] = field(default_factory=dict, hash=False)

    @property
    def is_header(self) -> bool:
        return self.header > 0

    @property
    def is_separator(self) -> bool:
        return self.separator

    @property
    def is_empty(self) -> bool:
        return not self.text and not self.link and not self.separator

    @property
    def link_type(self) -> LinkType:
        if not self.link:
            return LinkType.NONE
        if _EXTERNAL_LINK_RE.match(self.link):
            return LinkType.EXTERNAL
        return LinkType.INTERNAL

    # ------------------------------------------------------------------
    # Konstruktory fabryczne
    # ------------------------------------------------------------------

    @classmethod
    def spacer(cls) -> DocumentationLine:
        """Pusta linia odstępu."""
        return cls()

    @classmethod
    def separator_line(cls) -> DocumentationLine:
        return cls(separator=True)

    @classmethod
    def from_record(cls, record: Mapping[str, Any] | str) -> DocumentationLine:
        """Buduje linię z rekordu JSON; sam napis to linia z samym tekstem."""
        if isinstance(record, str):
            return cls(text=record)
        return cls(
            text=str(record.get("text", "")),
            link=str(record.get("link", "")),
            header=int(record.get("header", 0)),
            separator=bool(record.get("separator", False)),
            styling={k: v for k, v in record.items() if k not in _STRUCTURAL_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Rekord JSON bez wartości domyślnych."""
        out: dict[str, Any] = {}
        if self.text:
            out["text"] = self.text
        if self.link:
            out["link"] = self.link
        if self.header:
            out["header"] = self.header
        if self.separator:
            out["separator"] = True
        out.update(self.styling)
        return out


# ---------------------------------------------------------------------------
# Zdolność nagłówka i protokół węzła
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class NodeIdentity:
    """
    Nazwa wyświetlana i link/ikona węzła.

    - name:      nazwa w nagłówku
    - link:      "kategoria/nazwa" — służy też jako identyfikator ikony
    - icon_name: nazwa ikony na liście wpisów (domyślnie = name)
    """
    name: str
    link: str
    icon_name: str = ""

    def __post_init__(self) -> None:
        if not self.icon_name:
            object.__setattr__(self, "icon_name", self.name)


class DocumentedNode(Protocol):
    """Węzeł treści, dla którego można złożyć dokumentację."""

    @property
    def identity(self) -> NodeIdentity | None: ...

    @property
    def civilopedia_text(self) -> Sequence[DocumentationLine]: ...

    @property
    def origin(self) -> str: ...
