"""
civilopedia — dokumentacja węzłów treści złożona z linii autora i linii
generowanych z grafu polityk.

Publiczne API:
  assemble(node, ruleset)         leniwy generator linii
  assemble_lines(node, ruleset)   to samo jako krotka
  generated_lines(node, ruleset)  same linie automatyczne
  sort_group(node, ruleset)       grupa sortowania wpisów
"""

from .assembler import (
    ATTRIBUTION_COLOR,
    assemble,
    assemble_lines,
    attribution_lines,
    header_lines,
    sort_group,
)
from .lines import MALFORMED_MARKER, generated_lines, unique_lines

__all__ = [
    "ATTRIBUTION_COLOR",
    "assemble",
    "assemble_lines",
    "attribution_lines",
    "header_lines",
    "sort_group",
    "MALFORMED_MARKER",
    "generated_lines",
    "unique_lines",
]
