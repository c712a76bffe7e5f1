from __future__ import annotations

from validator import ErrorCode, GraphValidator

from tests.ruleset_helpers import branch, build, completed_branch, policy


def _validate(*records):
    return GraphValidator(build(*records)).validate()


def test_base_ruleset_is_valid(base_ruleset) -> None:
    report = GraphValidator(base_ruleset).validate()
    assert report.is_valid, report.errors
    assert report.warnings == []


# ---------------------------------------------------------------------------
# Cykle
# ---------------------------------------------------------------------------

def test_cycle_reported_once_with_full_path() -> None:
    report = _validate(completed_branch(
        "Piety",
        policy("A", 1, 1, requires=("C",)),
        policy("B", 1, 2, requires=("A",)),
        policy("C", 1, 3, requires=("B",)),
    ))
    [cycle] = report.errors_with(ErrorCode.CYCLE_DETECTED)
    assert cycle.details["cycle"] == ["A", "C", "B", "A"]
    assert set(cycle.details["cycle"]) == {"A", "B", "C"}
    assert cycle.path == "/Piety/policies/A/requires"


def test_cycle_members_are_unreachable() -> None:
    report = _validate(completed_branch(
        "Piety",
        policy("Start", 1, 1),
        policy("A", 2, 1, requires=("Start", "B")),
        policy("B", 2, 2, requires=("A",)),
    ))
    unreachable = {e.details["policy"] for e in report.errors_with(ErrorCode.UNREACHABLE_POLICY)}
    assert unreachable == {"A", "B"}


def test_self_requirement_is_a_cycle() -> None:
    report = _validate(completed_branch("Piety", policy("A", 1, 1, requires=("A",))))
    [cycle] = report.errors_with(ErrorCode.CYCLE_DETECTED)
    assert cycle.details["cycle"] == ["A", "A"]


def test_find_cycles_on_acyclic_graph(base_ruleset) -> None:
    assert GraphValidator(base_ruleset).find_cycles() == []


# ---------------------------------------------------------------------------
# Węzeł ukończenia
# ---------------------------------------------------------------------------

def test_branch_without_completion_node() -> None:
    report = _validate(branch("Piety", policy("A", 1, 1)))
    [error] = report.errors_with(ErrorCode.COMPLETION_SHAPE)
    assert error.path == "/Piety/policies"
    assert error.details["completion_nodes"] == []


def test_branch_with_two_completion_nodes() -> None:
    report = _validate(branch("Piety", policy("A", 1, 1), policy("X"), policy("Y")))
    [error] = report.errors_with(ErrorCode.COMPLETION_SHAPE)
    assert error.details["completion_nodes"] == ["X", "Y"]


def test_partial_layout_is_an_error() -> None:
    report = _validate(completed_branch("Piety", policy("A", 1)))
    [error] = report.errors_with(ErrorCode.COMPLETION_SHAPE)
    assert error.path == "/Piety/policies/A/column"
    assert error.details["missing"] == "column"


def test_completion_node_not_last_is_a_warning() -> None:
    report = _validate(branch("Piety", policy("Piety Complete"), policy("A", 1, 1)))
    assert report.is_valid
    assert any("Piety Complete" in w for w in report.warnings)


# ---------------------------------------------------------------------------
# Referencje i osiągalność
# ---------------------------------------------------------------------------

def test_tradition_reachability() -> None:
    report = _validate(completed_branch(
        "Tradition",
        policy("Aristocracy", 1, 1),
        policy("Legalism", 1, 3),
        policy("Landed Elite", 2, 3, requires=("Legalism",)),
    ))
    assert report.is_valid, report.errors


def test_dangling_reference() -> None:
    report = _validate(completed_branch(
        "Tradition",
        policy("Aristocracy", 1, 1),
        policy("Legalism", 1, 3),
        policy("Landed Elite", 2, 3, requires=("Legalism",)),
        policy("Monarchy", 2, 5, requires=("Monarchy2",)),
    ))
    [dangling] = report.errors_with(ErrorCode.DANGLING_REFERENCE)
    assert dangling.path == "/Tradition/policies/Monarchy/requires"
    assert dangling.details == {"policy": "Monarchy", "missing": "Monarchy2"}
    [unreachable] = report.errors_with(ErrorCode.UNREACHABLE_POLICY)
    assert unreachable.details["blocked_by"] == ["Monarchy2"]


def test_requirements_across_branches() -> None:
    report = _validate(
        completed_branch("Tradition", policy("Legalism", 1, 1)),
        completed_branch("Liberty", policy("Citizenship", 1, 1, requires=("Legalism",))),
    )
    assert report.is_valid, report.errors


def test_completion_node_unreachable_does_not_add_errors() -> None:
    report = _validate(completed_branch(
        "Piety",
        policy("A", 1, 1, requires=("Nowhere",)),
    ))
    assert report.codes() == [ErrorCode.DANGLING_REFERENCE, ErrorCode.UNREACHABLE_POLICY]


def test_branches_are_checked_independently() -> None:
    report = _validate(
        branch("Piety", policy("A", 1, 1)),
        completed_branch("Honor", policy("Discipline", 1, 1, requires=("Warrior Code2",))),
    )
    assert report.errors_with(ErrorCode.COMPLETION_SHAPE)[0].path == "/Piety/policies"
    assert report.errors_with(ErrorCode.DANGLING_REFERENCE)[0].path.startswith("/Honor/")


# ---------------------------------------------------------------------------
# Priorytety
# ---------------------------------------------------------------------------

def test_priorities_accept_any_integer() -> None:
    report = _validate(completed_branch(
        "Honor", policy("A", 1, 1),
        priorities={"Domination": 25, "Scientific": -5, "Cultural": 0},
    ))
    assert report.is_valid


def test_priority_must_be_integer() -> None:
    report = _validate(completed_branch(
        "Honor", policy("A", 1, 1),
        priorities={"Domination": "high", "Cultural": 1.5, "Neutral": True, "Scientific": 3},
    ))
    paths = [e.path for e in report.errors_with(ErrorCode.PRIORITY_NOT_INT)]
    assert paths == [
        "/Honor/priorities/Domination",
        "/Honor/priorities/Cultural",
        "/Honor/priorities/Neutral",
    ]


# ---------------------------------------------------------------------------
# Zdania unique
# ---------------------------------------------------------------------------

def test_unique_errors_are_reported_with_codes() -> None:
    report = _validate(completed_branch(
        "Tradition",
        policy("Aristocracy", 1, 1, uniques=(
            "Summons a [Dragon] from the sky",
            "[+3 Culture] [in capital] <when riding [dragons]>",
        )),
        uniques=("[+3 Culture]",),
    ))
    assert report.codes() == [
        ErrorCode.ARITY_MISMATCH,
        ErrorCode.UNKNOWN_UNIQUE_KIND,
        ErrorCode.MALFORMED_UNIQUE,
    ]
    assert report.errors[0].path == "/Tradition/uniques"
    assert report.errors[1].path == "/Tradition/policies/Aristocracy/uniques"
    assert "when riding" in report.errors[2].details["cause"]


def test_parameter_shape_warnings() -> None:
    report = _validate(completed_branch(
        "Tradition",
        policy("Aristocracy", 1, 1, uniques=(
            "[+3 Kittens] [in capital]",
            "[+1] Movement <in cities with at least [many] population>",
        )),
    ))
    assert report.is_valid
    assert len(report.warnings) == 2
    assert "+3 Kittens" in report.warnings[0]
    assert "many" in report.warnings[1]


def test_duplicate_position_warning() -> None:
    report = _validate(completed_branch("Piety", policy("A", 1, 1), policy("B", 1, 1)))
    assert report.is_valid
    [warning] = report.warnings
    assert "row=1, column=1" in warning


def test_validation_is_repeatable() -> None:
    ruleset = build(completed_branch("Piety", policy("A", 1, 1, requires=("Nowhere",))))
    branches = ruleset.graph.branches
    first = GraphValidator(ruleset).validate()
    second = GraphValidator(ruleset).validate()
    assert first.codes() == second.codes()
    assert ruleset.graph.branches == branches
