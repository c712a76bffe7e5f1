"""
civilopedia/lines.py — linie generowane z metadanych węzła.

generated_lines(node, ruleset) -> Iterator[DocumentationLine]

Linie opisują treść zestawu reguł, nie stan gry:
  Policy       — gałąź, wymagania, co odblokowuje, uniques
  węzeł ukończenia — warunek ukończenia gałęzi, uniques
  PolicyBranch — era odblokowania, uniques gałęzi, lista polityk

Unique z warunkiem <hidden from users> jest pomijany. Unique, którego nie
udało się sparsować, pojawia się jako surowy tekst z widocznym znacznikiem.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from data_model import DocumentationLine, Policy, PolicyBranch, Ruleset, make_link
from uniques import MalformedUnique, UniqueStatement

MALFORMED_MARKER = "⚠"
MALFORMED_COLOR  = "#ff4040"


def unique_lines(
    texts: Sequence[str],
    statements: Sequence[UniqueStatement],
    failures: Sequence[MalformedUnique],
) -> Iterator[DocumentationLine]:
    """Linie uniques w kolejności z treści."""
    parsed = {s.text: s for s in statements}
    broken = {e.sentence: e for e in failures}
    for text in texts:
        statement = parsed.get(text)
        if statement is not None:
            if not statement.is_hidden:
                yield DocumentationLine(statement.text)
        elif text in broken:
            yield DocumentationLine(
                f"{MALFORMED_MARKER} {text}",
                styling={"color": MALFORMED_COLOR},
            )


def _policy_lines(policy: Policy, ruleset: Ruleset) -> Iterator[DocumentationLine]:
    graph = ruleset.graph
    yield DocumentationLine(f"Policy branch: {policy.branch}", link=make_link(policy.branch))

    if policy.is_completion:
        yield DocumentationLine(f"Requires all other policies of {policy.branch}")
    for required in graph.prerequisites(policy.name):
        yield DocumentationLine(f"Requires: {required}", link=make_link(required))
    for unlocked in graph.unlocks(policy.name):
        yield DocumentationLine(f"Unlocks: {unlocked}", link=make_link(unlocked))

    yield from unique_lines(policy.unique_texts, policy.uniques, policy.unique_errors)


def _branch_lines(branch: PolicyBranch, ruleset: Ruleset) -> Iterator[DocumentationLine]:
    if branch.era:
        yield DocumentationLine(f"Unlocked at: {branch.era}")
    yield from unique_lines(branch.unique_texts, branch.uniques, branch.unique_errors)
    if branch.policies:
        yield DocumentationLine("Policies:", styling={"starred": True})
    for policy in branch.policies:
        yield DocumentationLine(policy.name, link=make_link(policy.name), styling={"indent": 1})


def generated_lines(node: object, ruleset: Ruleset) -> Iterator[DocumentationLine]:
    """Linie automatyczne dla węzła; dla nieznanego typu węzła — brak linii."""
    match node:
        case Policy():
            yield from _policy_lines(node, ruleset)
        case PolicyBranch():
            yield from _branch_lines(node, ruleset)
        case _:
            return
