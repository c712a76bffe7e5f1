from __future__ import annotations

from dataclasses import dataclass

from civilopedia import (
    ATTRIBUTION_COLOR,
    MALFORMED_MARKER,
    assemble,
    assemble_lines,
    generated_lines,
    sort_group,
)
from data_model import DocumentationLine, LinkType, NodeIdentity, Ruleset

from tests.ruleset_helpers import build, completed_branch, policy


@dataclass
class Entry:
    """Minimalny węzeł dokumentacji."""

    identity: NodeIdentity | None
    civilopedia_text: tuple[DocumentationLine, ...] = ()
    origin: str = "base"


def _requires_legalism(node, ruleset):
    return [DocumentationLine("Requires: Legalism")]


def _texts(lines) -> list[str]:
    return [line.text for line in lines]


def _ruleset() -> Ruleset:
    return build(completed_branch("Tradition", policy("Legalism", 1, 1)))


# ---------------------------------------------------------------------------
# DocumentationLine
# ---------------------------------------------------------------------------

def test_line_emptiness() -> None:
    assert DocumentationLine().is_empty
    assert DocumentationLine(styling={"color": "#fff"}).is_empty
    assert not DocumentationLine("text").is_empty
    assert not DocumentationLine(link="Policy/Legalism").is_empty
    assert not DocumentationLine.separator_line().is_empty


def test_link_type() -> None:
    assert DocumentationLine("x").link_type == LinkType.NONE
    assert DocumentationLine("x", link="Policy/Legalism").link_type == LinkType.INTERNAL
    assert DocumentationLine("x", link="https://example.org").link_type == LinkType.EXTERNAL
    assert DocumentationLine("x", link="mailto:someone@example.org").link_type == LinkType.EXTERNAL


def test_line_from_record_keeps_styling() -> None:
    line = DocumentationLine.from_record({"text": "Unciv", "link": "Policy/X", "color": "#f00", "indent": 1})
    assert line.text == "Unciv"
    assert line.styling == {"color": "#f00", "indent": 1}
    assert line.to_dict() == {"text": "Unciv", "link": "Policy/X", "color": "#f00", "indent": 1}
    assert DocumentationLine.from_record("plain") == DocumentationLine("plain")


# ---------------------------------------------------------------------------
# Punkt wstawienia
# ---------------------------------------------------------------------------

def test_generated_block_goes_before_first_linked_line() -> None:
    see_also = DocumentationLine("See also: Policy X", link="policy/X")
    node = Entry(
        identity=NodeIdentity("Landed Elite", "Policy/Landed Elite"),
        civilopedia_text=(DocumentationLine("Some flavor text"), see_also),
    )
    lines = assemble_lines(node, _ruleset(), generator=_requires_legalism)

    assert lines[0].text == "Landed Elite"
    assert lines[0].header == 2
    assert lines[0].styling["icon"] == "Policy/Landed Elite"
    assert lines[1].is_separator
    assert _texts(lines[2:]) == ["Some flavor text", "", "Requires: Legalism", "", "See also: Policy X"]
    assert lines[3].is_empty and lines[5].is_empty
    assert lines[-1] is see_also


def test_no_leading_spacer_when_linked_line_is_first() -> None:
    node = Entry(
        identity=None,
        civilopedia_text=(DocumentationLine("See also", link="Policy/X"), DocumentationLine("Trailing")),
    )
    lines = assemble_lines(node, _ruleset(), generator=_requires_legalism)
    assert _texts(lines) == ["Requires: Legalism", "", "See also", "Trailing"]


def test_empty_authored_lines_do_not_count_as_content() -> None:
    node = Entry(
        identity=None,
        civilopedia_text=(DocumentationLine(), DocumentationLine("See also", link="Policy/X")),
    )
    lines = assemble_lines(node, _ruleset(), generator=_requires_legalism)
    assert _texts(lines) == ["", "Requires: Legalism", "", "See also"]


def test_generated_block_inserted_only_once() -> None:
    node = Entry(
        identity=None,
        civilopedia_text=(
            DocumentationLine("First", link="Policy/A"),
            DocumentationLine("Second", link="Policy/B"),
        ),
    )
    lines = assemble_lines(node, _ruleset(), generator=_requires_legalism)
    assert _texts(lines).count("Requires: Legalism") == 1


def test_generated_block_appended_without_linked_line() -> None:
    node = Entry(identity=None, civilopedia_text=(DocumentationLine("Flavor"),))
    lines = assemble_lines(node, _ruleset(), generator=_requires_legalism)
    assert _texts(lines) == ["Flavor", "", "Requires: Legalism"]


def test_generated_block_alone_without_authored_text() -> None:
    lines = assemble_lines(Entry(identity=None), _ruleset(), generator=_requires_legalism)
    assert _texts(lines) == ["Requires: Legalism"]


def test_authored_lines_are_never_dropped() -> None:
    authored = (
        DocumentationLine("Intro"),
        DocumentationLine(),
        DocumentationLine.separator_line(),
        DocumentationLine("Wiki", link="https://example.org"),
        DocumentationLine("Outro"),
    )
    node = Entry(identity=None, civilopedia_text=authored)
    lines = assemble_lines(node, _ruleset(), generator=_requires_legalism)
    kept = [line for line in lines if any(line is a for a in authored)]
    assert kept == list(authored)


def test_assembly_is_repeatable(base_ruleset) -> None:
    legalism = base_ruleset.graph.policy("Legalism")
    assert assemble_lines(legalism, base_ruleset) == assemble_lines(legalism, base_ruleset)


def test_assemble_is_lazy(base_ruleset) -> None:
    lines = assemble(base_ruleset.graph.policy("Legalism"), base_ruleset)
    assert next(lines).text == "Legalism"


# ---------------------------------------------------------------------------
# Atrybucja
# ---------------------------------------------------------------------------

def test_attribution_with_multiple_sources() -> None:
    ruleset = build(completed_branch("Tradition", policy("Legalism", 1, 1)))
    multi = Ruleset(ruleset.graph, ruleset.templates, primary_source="base", sources=("base", "Enhanced"))
    node = Entry(identity=None, civilopedia_text=(DocumentationLine("Flavor"),), origin="Enhanced")

    lines = assemble_lines(node, multi, generator=_requires_legalism)
    assert lines[-2].is_empty
    assert lines[-1].text == "Mod: [Enhanced]"
    assert lines[-1].styling["color"] == ATTRIBUTION_COLOR


def test_no_attribution_for_single_source() -> None:
    node = Entry(identity=None, origin="Enhanced")
    lines = assemble_lines(node, _ruleset(), generator=_requires_legalism)
    assert not any(line.text.startswith("Mod:") for line in lines)


def test_no_attribution_for_primary_source() -> None:
    ruleset = _ruleset()
    multi = Ruleset(ruleset.graph, ruleset.templates, primary_source="base", sources=("base", "Enhanced"))
    lines = assemble_lines(Entry(identity=None), multi, generator=_requires_legalism)
    assert not any(line.text.startswith("Mod:") for line in lines)


# ---------------------------------------------------------------------------
# Linie generowane
# ---------------------------------------------------------------------------

def test_policy_lines(base_ruleset) -> None:
    lines = list(generated_lines(base_ruleset.graph.policy("Landed Elite"), base_ruleset))
    assert _texts(lines) == [
        "Policy branch: Tradition",
        "Requires: Legalism",
        "[+10]% [Food] [in capital]",
        "[+2 Food] [in capital]",
    ]
    assert lines[1].link == "Policy/Legalism"


def test_policy_lines_list_unlocks(base_ruleset) -> None:
    texts = _texts(generated_lines(base_ruleset.graph.policy("Legalism"), base_ruleset))
    assert "Unlocks: Landed Elite" in texts


def test_completion_lines_skip_hidden_uniques(base_ruleset) -> None:
    texts = _texts(generated_lines(base_ruleset.graph.policy("Honor Complete"), base_ruleset))
    assert "Requires all other policies of Honor" in texts
    assert not any("Barracks" in t for t in texts)


def test_branch_lines(base_ruleset) -> None:
    lines = list(generated_lines(base_ruleset.graph.branch("Liberty"), base_ruleset))
    assert lines[0].text == "Unlocked at: Ancient era"
    assert lines[1].text == "[+1 Culture] [in all cities]"
    assert lines[2].text == "Policies:"
    assert [line.text for line in lines[3:]] == [
        "Collective Rule", "Citizenship", "Republic", "Representation", "Meritocracy", "Liberty Complete",
    ]


def test_malformed_unique_is_marked() -> None:
    ruleset = build(completed_branch(
        "Tradition",
        policy("Legalism", 1, 1, uniques=("Summons a [Dragon] from the sky", "Triggers a Golden Age")),
    ))
    texts = _texts(generated_lines(ruleset.graph.policy("Legalism"), ruleset))
    assert texts[-2:] == [f"{MALFORMED_MARKER} Summons a [Dragon] from the sky", "Triggers a Golden Age"]


def test_tradition_page_inserts_before_see_also(base_ruleset) -> None:
    tradition = base_ruleset.graph.branch("Tradition")
    texts = _texts(assemble_lines(tradition, base_ruleset))
    see_also = texts.index("See also: Liberty")
    assert texts[see_also - 1] == ""
    assert "Unlocked at: Ancient era" in texts[:see_also]


def test_sort_group(base_ruleset) -> None:
    graph = base_ruleset.graph
    assert sort_group(graph.branch("Tradition"), base_ruleset) == 0
    assert sort_group(graph.policy("Republic"), base_ruleset) == 1
    assert sort_group(graph.branch("Honor"), base_ruleset) == 2
    assert sort_group(Entry(identity=None), base_ruleset) == 0
