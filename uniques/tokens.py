"""
uniques/tokens.py — skaner zdań unique.

scan(sentence) -> ScannedSentence

Jeden przebieg od lewej do prawej:
  [...]  — segment parametru; zagnieżdżanie niedozwolone
  <...>  — warunek; wewnątrz wolno używać [...] (parametry warunku),
           ale nie kolejnego <...>

Szkielet (skeleton) to tekst dosłowny z markerem "[]" w miejscu każdego
segmentu [...]; warunki są usuwane, whitespace znormalizowany.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from .errors import MalformedUnique

PLACEHOLDER = "[]"


class _State(IntEnum):
    """Stan skanera."""
    TEXT       = 0
    PARAM      = 1
    COND       = 2
    COND_PARAM = 3


_OPENERS = {_State.PARAM: "[", _State.COND: "<", _State.COND_PARAM: "["}


@dataclass(frozen=True, slots=True)
class ScannedSentence:
    """
    Wynik skanowania jednego zdania.

    - skeleton:     "[]% Production when constructing [] units []"
    - segments:     zawartość kolejnych segmentów [...] poziomu głównego
    - conditionals: zawartość kolejnych klauzul <...> (bez nawiasów)
    """

    skeleton: str
    segments: tuple[str, ...]
    conditionals: tuple[str, ...]

    @property
    def word_skeleton(self) -> str:
        """Szkielet bez markerów — same słowa, do wykrywania błędnej arności."""
        return normalize_ws(self.skeleton.replace(PLACEHOLDER, " "))


def normalize_ws(s: str) -> str:
    return " ".join(s.split())


def scan(sentence: str) -> ScannedSentence:
    """
    Rozkłada zdanie na szkielet, segmenty [...] i warunki <...>.

    Raises:
        MalformedUnique przy niesparowanym lub niedozwolenie zagnieżdżonym
        nawiasie.
    """
    state = _State.TEXT
    skeleton: list[str] = []
    segments: list[str] = []
    conditionals: list[str] = []
    buf: list[str] = []   # bieżący segment lub warunek
    start = 0             # pozycja otwarcia bieżącego segmentu lub warunku
    inner = 0             # pozycja otwarcia [...] wewnątrz warunku

    for pos, ch in enumerate(sentence):
        match state, ch:
            case (_State.TEXT, "["):
                state, start, buf = _State.PARAM, pos, []
            case (_State.TEXT, "<"):
                state, start, buf = _State.COND, pos, []
            case (_State.TEXT, "]" | ">"):
                raise MalformedUnique(sentence, f"niesparowany '{ch}' na pozycji {pos}")
            case (_State.TEXT, _):
                skeleton.append(ch)

            case (_State.PARAM, "]"):
                segments.append("".join(buf))
                skeleton.append(PLACEHOLDER)
                state = _State.TEXT
            case (_State.PARAM, "[" | "<" | ">"):
                raise MalformedUnique(
                    sentence, f"'{ch}' wewnątrz segmentu [...] na pozycji {pos}"
                )

            case (_State.COND, ">"):
                conditionals.append("".join(buf).strip())
                state = _State.TEXT
            case (_State.COND, "["):
                state = _State.COND_PARAM
                inner = pos
                buf.append(ch)
            case (_State.COND, "<" | "]"):
                raise MalformedUnique(
                    sentence, f"'{ch}' wewnątrz warunku <...> na pozycji {pos}"
                )

            case (_State.COND_PARAM, "]"):
                state = _State.COND
                buf.append(ch)
            case (_State.COND_PARAM, "[" | "<" | ">"):
                raise MalformedUnique(
                    sentence, f"'{ch}' wewnątrz segmentu [...] warunku na pozycji {pos}"
                )

            case _:
                buf.append(ch)

    if state != _State.TEXT:
        raise MalformedUnique(
            sentence,
            f"niesparowany '{_OPENERS[state]}' otwarty na pozycji "
            f"{inner if state == _State.COND_PARAM else start}",
        )

    return ScannedSentence(
        skeleton=normalize_ws("".join(skeleton)),
        segments=tuple(segments),
        conditionals=tuple(conditionals),
    )
