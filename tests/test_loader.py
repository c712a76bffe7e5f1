from __future__ import annotations

import json
from pathlib import Path

from data_model.loader import load_ruleset, load_ruleset_file, read_records
from uniques import UnknownUniqueKind
from validator import ErrorCode, GraphValidator

from tests.ruleset_helpers import branch, build, completed_branch, policy


def test_base_ruleset_loads(base_ruleset) -> None:
    graph = base_ruleset.graph
    assert [b.name for b in graph.branches] == ["Tradition", "Liberty", "Honor"]
    assert graph.prerequisites("Landed Elite") == ("Legalism",)
    assert graph.completion_policy("Honor").name == "Honor Complete"
    assert base_ruleset.sources == ("base",)
    assert not base_ruleset.is_multi_source


def test_records_become_typed_nodes(base_ruleset) -> None:
    tradition = base_ruleset.graph.branch("Tradition")
    assert tradition.era == "Ancient era"
    assert tradition.origin == "base"
    assert [u.kind for u in tradition.uniques] == ["Stats", "Faster border expansion"]
    legalism = base_ruleset.graph.policy("Legalism")
    assert legalism.civilopedia_text
    assert legalism.origin == "base"


def test_schema_violation_skips_only_the_bad_record() -> None:
    result = load_ruleset([
        {"name": "Tradition", "policies": [{"name": "Aristocracy", "row": "1"}]},
        completed_branch("Liberty", policy("Citizenship", 1, 1)),
    ])
    assert not result.report.is_valid
    assert result.report.codes() == [ErrorCode.SCHEMA_VIOLATION]
    error = result.report.errors[0]
    assert error.path == "/0/policies/0/row"
    assert error.details == {"source": "base", "branch": "Tradition"}
    assert result.ruleset is not None
    assert [b.name for b in result.ruleset.graph.branches] == ["Liberty"]


def test_valid_branches_still_reach_graph_validation() -> None:
    result = load_ruleset([
        completed_branch("Liberty", policy("Citizenship", "1", 1)),
        completed_branch(
            "Tradition",
            policy("Legalism", 1, 1),
            policy("Monarchy", 2, 1, requires=("Monarchy2",)),
        ),
    ])
    assert result.ruleset.graph.branch("Liberty") is None
    report = result.report.merge(GraphValidator(result.ruleset).validate())
    assert report.codes() == [
        ErrorCode.SCHEMA_VIOLATION,
        ErrorCode.DANGLING_REFERENCE,
        ErrorCode.UNREACHABLE_POLICY,
    ]
    assert report.errors[1].path == "/Tradition/policies/Monarchy/requires"


def test_missing_policies_is_schema_violation() -> None:
    result = load_ruleset([{"name": "Tradition"}])
    assert result.report.codes() == [ErrorCode.SCHEMA_VIOLATION]
    assert result.ruleset is not None
    assert result.ruleset.graph.branches == ()


def test_source_that_is_not_a_list_is_rejected_whole() -> None:
    result = load_ruleset({"base": [completed_branch("Tradition", policy("Legalism", 1, 1))],
                           "Broken": {"name": "Piety"}})
    [error] = result.report.errors
    assert error.code == ErrorCode.SCHEMA_VIOLATION
    assert error.path == "/"
    assert error.details == {"source": "Broken"}
    assert [b.name for b in result.ruleset.graph.branches] == ["Tradition"]


def test_duplicate_policy_name() -> None:
    result = load_ruleset([
        completed_branch("Tradition", policy("Monarchy", 1, 1)),
        completed_branch("Liberty", policy("Monarchy", 1, 1)),
    ])
    assert result.ruleset is None
    [error] = result.report.errors
    assert error.code == ErrorCode.DUPLICATE_KEY
    assert error.details["name"] == "Monarchy"
    assert error.details["branches"] == ["Tradition", "Liberty"]


def test_policy_named_like_a_branch_is_duplicate_key() -> None:
    result = load_ruleset([
        completed_branch("Commerce", policy("Commerce", 1, 1)),
    ])
    assert result.ruleset is None
    [error] = result.report.errors
    assert error.code == ErrorCode.DUPLICATE_KEY
    assert error.path == "/Commerce"


def test_malformed_unique_stays_on_node() -> None:
    ruleset = build(completed_branch(
        "Tradition",
        policy("Aristocracy", 1, 1, uniques=("Summons a [Dragon] from the sky", "Triggers a Golden Age")),
    ))
    aristocracy = ruleset.graph.policy("Aristocracy")
    assert [u.kind for u in aristocracy.uniques] == ["Golden age"]
    assert len(aristocracy.unique_errors) == 1
    assert isinstance(aristocracy.unique_errors[0], UnknownUniqueKind)
    assert aristocracy.unique_texts == ("Summons a [Dragon] from the sky", "Triggers a Golden Age")


def test_requires_are_deduplicated_in_order() -> None:
    ruleset = build(completed_branch(
        "Tradition",
        policy("Legalism", 1, 1),
        policy("Oligarchy", 1, 3),
        policy("Monarchy", 2, 1, requires=("Oligarchy", "Legalism", "Oligarchy")),
    ))
    assert ruleset.graph.prerequisites("Monarchy") == ("Oligarchy", "Legalism")


def test_read_records_accepts_wrapped_form(tmp_path: Path) -> None:
    records = [branch("Honor", policy("Honor Complete"))]
    path = tmp_path / "wrapped.json"
    path.write_text(json.dumps({"branches": records}), encoding="utf-8")
    assert read_records(path) == records


def test_mods_are_tagged_with_origin(tmp_path: Path, policies_path: Path) -> None:
    mod = tmp_path / "mod.json"
    mod.write_text(
        json.dumps([completed_branch("Piety", policy("Organized Religion", 1, 1))]),
        encoding="utf-8",
    )
    result = load_ruleset_file(policies_path, mods={"Enhanced": mod})
    ruleset = result.ruleset
    assert ruleset is not None
    assert ruleset.sources == ("base", "Enhanced")
    assert ruleset.is_multi_source
    assert ruleset.graph.branch("Piety").origin == "Enhanced"
    assert ruleset.graph.policy("Organized Religion").origin == "Enhanced"
    assert ruleset.graph.policy("Legalism").origin == "base"


def test_mod_cannot_redeclare_base_policy(tmp_path: Path, policies_path: Path) -> None:
    mod = tmp_path / "mod.json"
    mod.write_text(
        json.dumps([completed_branch("Piety", policy("Legalism", 1, 1))]),
        encoding="utf-8",
    )
    result = load_ruleset_file(policies_path, mods={"Enhanced": mod})
    assert result.ruleset is None
    assert result.report.codes() == [ErrorCode.DUPLICATE_KEY]
