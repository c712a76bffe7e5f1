"""
civilopedia/assembler.py — składanie linii autora z liniami generowanymi.

assemble(node, ruleset)       -> Iterator[DocumentationLine]   (leniwie)
assemble_lines(node, ruleset) -> tuple[DocumentationLine, ...]

Algorytm (jeden przebieg po liniach autora):
  1. Nagłówek z tożsamości węzła (poziom 2, ikona = link) + separator.
  2. Linie autora w kolejności.
  3. Przed pierwszą niepustą linią autora z linkiem: odstęp (jeśli przed nią
     była niepusta linia autora), linie generowane, odstęp — tylko raz.
  4. Brak takiej linii → linie generowane na końcu (z odstępem przed, jeśli
     była treść autora).
  5. Węzeł z innego źródła niż główne, przy więcej niż jednym aktywnym
     źródle → odstęp + linia "Mod: [źródło]".

Linie autora nigdy nie są usuwane ani przestawiane. Brak stanu między
wywołaniami: te same wejścia dają ten sam wynik.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from data_model import DocumentationLine, DocumentedNode, LinkType, Policy, PolicyBranch, Ruleset

from .lines import generated_lines

ATTRIBUTION_COLOR = "#daa520"
HEADER_LEVEL = 2

LineGenerator = Callable[[object, Ruleset], Iterable[DocumentationLine]]


def header_lines(node: DocumentedNode) -> Iterator[DocumentationLine]:
    """Nagłówek i separator — tylko gdy węzeł ma tożsamość."""
    identity = node.identity
    if identity is None:
        return
    yield DocumentationLine(
        identity.name,
        header=HEADER_LEVEL,
        styling={"icon": identity.link},
    )
    yield DocumentationLine.separator_line()


def attribution_lines(node: DocumentedNode, ruleset: Ruleset) -> Iterator[DocumentationLine]:
    origin = node.origin
    if origin and origin != ruleset.primary_source and ruleset.is_multi_source:
        yield DocumentationLine.spacer()
        yield DocumentationLine(
            f"Mod: [{origin}]",
            styling={"starred": True, "color": ATTRIBUTION_COLOR},
        )


def assemble(
    node: DocumentedNode,
    ruleset: Ruleset,
    generator: LineGenerator = generated_lines,
) -> Iterator[DocumentationLine]:
    """
    Leniwie składa dokumentację węzła.

    Args:
        node:      węzeł z civilopedia_text, identity i origin
        ruleset:   zwalidowany kontekst (graf + źródła)
        generator: źródło linii automatycznych (domyślnie generated_lines)
    """
    yield from header_lines(node)

    middle_done = False
    outer_not_empty = False
    for line in node.civilopedia_text:
        if not middle_done and not line.is_empty and line.link_type != LinkType.NONE:
            middle_done = True
            if outer_not_empty:
                yield DocumentationLine.spacer()
            yield from generator(node, ruleset)
            yield DocumentationLine.spacer()
        if not line.is_empty:
            outer_not_empty = True
        yield line

    if not middle_done:
        if outer_not_empty:
            yield DocumentationLine.spacer()
        yield from generator(node, ruleset)

    yield from attribution_lines(node, ruleset)


def assemble_lines(
    node: DocumentedNode,
    ruleset: Ruleset,
    generator: LineGenerator = generated_lines,
) -> tuple[DocumentationLine, ...]:
    return tuple(assemble(node, ruleset, generator))


def sort_group(node: object, ruleset: Ruleset) -> int:
    """
    Grupa sortowania wpisów civilopedii (zamiast kolejności alfabetycznej).

    Gałęzie i ich polityki grupowane są według kolejności gałęzi w grafie.
    """
    match node:
        case PolicyBranch():
            return ruleset.graph.branch_index(node.name)
        case Policy():
            return ruleset.graph.branch_index(node.branch)
        case _:
            return 0
