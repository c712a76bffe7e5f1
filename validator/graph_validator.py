"""
validator/graph_validator.py — walidator grafu gałęzi i polityk.

GraphValidator(ruleset).validate() -> ValidationReport

Etapy (wszystkie uruchamiane zawsze — jeden przebieg pokazuje każdy problem):
  A — cykle                (DFS ze znacznikiem stosu, pełna ścieżka cyklu)
  B — priorytety gałęzi    (tylko obecność wartości całkowitych, bez zakresów)
  C — kształt ukończenia   (dokładnie jeden węzeł bez row/column)
  D — referencje           (każdy requires wskazuje zadeklarowaną politykę)
  E — osiągalność          (polityka możliwa do przyjęcia od polityk bez requires)
  F — zdania unique        (błędy parsowania zapisane w węzłach)
  G — ostrzeżenia          (powtórzone współrzędne, położenie węzła ukończenia,
                            kształt parametrów unique)

Etapy B–G działają per gałąź: błędy jednej gałęzi nie blokują
sprawdzania pozostałych. Walidator nigdy nie modyfikuje grafu.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable

from data_model import Policy, PolicyBranch, Ruleset
from uniques import MalformedUnique, UniqueStatement

from .types import ErrorCode, ValidationError, ValidationReport

log = logging.getLogger(__name__)

# Znaczniki DFS
_ON_STACK = 1
_DONE     = 2


def _policy_path(policy: Policy, *rest: str) -> str:
    return "/".join(("", policy.branch, "policies", policy.name, *rest))


class GraphValidator:
    """
    Walidator niezmienników grafu względem kontekstu Ruleset.

    Użycie:
        validator = GraphValidator(ruleset)
        report    = validator.validate()
        for e in report.errors:
            print(e.code, e.path, e.message)
    """

    def __init__(self, ruleset: Ruleset) -> None:
        self._ruleset = ruleset
        self._graph   = ruleset.graph

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def validate(self) -> ValidationReport:
        errors: list[ValidationError] = []
        warnings: list[str] = []

        # A — cykle (globalnie: wymagania między gałęziami są dozwolone)
        self._stage_cycles(errors)

        adoptable = self._adoptable_policies()

        for branch in self._graph.branches:
            before = len(errors)
            self._stage_priorities(branch, errors)
            self._stage_completion_shape(branch, errors, warnings)
            self._stage_references(branch, errors)
            self._stage_reachability(branch, adoptable, errors)
            self._stage_uniques(branch, errors)
            self._stage_warnings(branch, warnings)
            log.debug(
                "gałąź %s: %d błąd(ów)", branch.name, len(errors) - before,
            )

        return ValidationReport.build(errors, warnings)

    # ------------------------------------------------------------------
    # Stage A — cykle
    # ------------------------------------------------------------------

    def find_cycles(self) -> list[list[str]]:
        """
        Zwraca cykle wymagań; każdy jako ścieżka zamknięta, np. [A, C, B, A].

        Krawędź X → Y oznacza "X wymaga Y". Każdy cykl (zbiór członków)
        raportowany jest raz.
        """
        state: dict[str, int] = {}
        stack: list[str] = []
        cycles: list[list[str]] = []
        seen: set[frozenset[str]] = set()

        def visit(name: str) -> None:
            state[name] = _ON_STACK
            stack.append(name)
            for required in self._graph.prerequisites(name):
                if not self._graph.has_policy(required):
                    continue  # wisząca referencja — etap D
                mark = state.get(required)
                if mark == _ON_STACK:
                    cycle = stack[stack.index(required):] + [required]
                    members = frozenset(cycle)
                    if members not in seen:
                        seen.add(members)
                        cycles.append(cycle)
                elif mark is None:
                    visit(required)
            stack.pop()
            state[name] = _DONE

        for policy in self._graph.iter_policies():
            if policy.name not in state:
                visit(policy.name)
        return cycles

    def _stage_cycles(self, errors: list[ValidationError]) -> None:
        for cycle in self.find_cycles():
            first = self._graph.policy(cycle[0])
            chain = " → ".join(cycle)
            errors.append(ValidationError(
                code=ErrorCode.CYCLE_DETECTED,
                path=_policy_path(first, "requires"),
                message=f"Cykl wymagań: {chain}.",
                expected_fix="Usuń jedną z krawędzi requires w cyklu.",
                details={"cycle": cycle},
            ))

    # ------------------------------------------------------------------
    # Stage B — priorytety
    # ------------------------------------------------------------------

    def _stage_priorities(self, branch: PolicyBranch, errors: list[ValidationError]) -> None:
        for label, weight in branch.priorities.items():
            if isinstance(weight, bool) or not isinstance(weight, int):
                errors.append(ValidationError(
                    code=ErrorCode.PRIORITY_NOT_INT,
                    path=f"/{branch.name}/priorities/{label}",
                    message=(
                        f"Priorytet '{label}' gałęzi '{branch.name}' nie jest "
                        f"liczbą całkowitą ({weight!r})."
                    ),
                    expected_fix="Podaj wagę jako liczbę całkowitą (może być ujemna lub zero).",
                    details={"label": label, "value": repr(weight)},
                ))

    # ------------------------------------------------------------------
    # Stage C — kształt węzła ukończenia
    # ------------------------------------------------------------------

    def _stage_completion_shape(
        self,
        branch: PolicyBranch,
        errors: list[ValidationError],
        warnings: list[str],
    ) -> None:
        candidates = branch.completion_candidates
        if len(candidates) != 1:
            errors.append(ValidationError(
                code=ErrorCode.COMPLETION_SHAPE,
                path=f"/{branch.name}/policies",
                message=(
                    f"Gałąź '{branch.name}' ma {len(candidates)} węzł(ów) bez "
                    f"row/column — wymagany dokładnie jeden węzeł ukończenia."
                ),
                expected_fix=(
                    "Zostaw row/column tylko w zwykłych politykach i dodaj "
                    "dokładnie jeden węzeł ukończenia bez współrzędnych."
                ),
                details={"completion_nodes": [p.name for p in candidates]},
            ))
        elif branch.policies[-1] is not candidates[0]:
            warnings.append(
                f"Węzeł ukończenia '{candidates[0].name}' nie jest ostatnią "
                f"polityką gałęzi '{branch.name}'."
            )

        for policy in branch.policies:
            if policy.has_partial_layout:
                missing = "column" if policy.column is None else "row"
                errors.append(ValidationError(
                    code=ErrorCode.COMPLETION_SHAPE,
                    path=_policy_path(policy, missing),
                    message=(
                        f"Polityka '{policy.name}' ma tylko jedną współrzędną "
                        f"(brak {missing})."
                    ),
                    expected_fix=f"Dodaj {missing} albo usuń obie współrzędne.",
                    details={"policy": policy.name, "missing": missing},
                ))

    # ------------------------------------------------------------------
    # Stage D — referencje
    # ------------------------------------------------------------------

    def _stage_references(self, branch: PolicyBranch, errors: list[ValidationError]) -> None:
        for policy in branch.policies:
            for required in policy.requires:
                if self._graph.has_policy(required):
                    continue
                errors.append(ValidationError(
                    code=ErrorCode.DANGLING_REFERENCE,
                    path=_policy_path(policy, "requires"),
                    message=(
                        f"Polityka '{policy.name}' wymaga '{required}', "
                        f"która nie jest zadeklarowana."
                    ),
                    expected_fix=f"Popraw nazwę '{required}' lub zadeklaruj taką politykę.",
                    details={"policy": policy.name, "missing": required},
                ))

    # ------------------------------------------------------------------
    # Stage E — osiągalność
    # ------------------------------------------------------------------

    def _adoptable_policies(self) -> set[str]:
        """
        Punkt stały: polityki możliwe do przyjęcia.

        Start: polityki bez requires. Polityka dochodzi, gdy wszystkie jej
        requires są już w zbiorze; węzeł ukończenia — gdy wszystkie
        pozostałe polityki jego gałęzi.
        """
        adoptable: set[str] = set()
        changed = True
        while changed:
            changed = False
            for policy in self._graph.iter_policies():
                if policy.name in adoptable:
                    continue
                if policy.is_completion:
                    branch = self._graph.branch(policy.branch)
                    needed: Iterable[str] = (
                        p.name for p in branch.policies if not p.is_completion
                    )
                else:
                    needed = policy.requires
                if all(n in adoptable for n in needed):
                    adoptable.add(policy.name)
                    changed = True
        return adoptable

    def _stage_reachability(
        self,
        branch: PolicyBranch,
        adoptable: set[str],
        errors: list[ValidationError],
    ) -> None:
        for policy in branch.layout_policies:
            if policy.name in adoptable:
                continue
            blocked = [r for r in policy.requires if r not in adoptable]
            errors.append(ValidationError(
                code=ErrorCode.UNREACHABLE_POLICY,
                path=_policy_path(policy),
                message=(
                    f"Polityki '{policy.name}' nie da się przyjąć — blokują ją: "
                    f"{', '.join(blocked)}."
                ),
                expected_fix=(
                    "Usuń cykl lub wiszącą referencję w łańcuchu requires "
                    "tej polityki."
                ),
                details={"policy": policy.name, "blocked_by": blocked},
            ))

    # ------------------------------------------------------------------
    # Stage F — zdania unique
    # ------------------------------------------------------------------

    def _stage_uniques(self, branch: PolicyBranch, errors: list[ValidationError]) -> None:
        self._report_unique_errors(f"/{branch.name}/uniques", branch.unique_errors, errors)
        for policy in branch.policies:
            self._report_unique_errors(
                _policy_path(policy, "uniques"), policy.unique_errors, errors,
            )

    @staticmethod
    def _report_unique_errors(
        path: str,
        failures: Iterable[MalformedUnique],
        errors: list[ValidationError],
    ) -> None:
        for exc in failures:
            cause = exc.root_cause
            errors.append(ValidationError(
                code=ErrorCode.for_unique_error(exc),
                path=path,
                message=f"Niepoprawny unique '{exc.sentence}': {exc.reason}.",
                expected_fix=(
                    "Przepisz zdanie zgodnie z jednym z szablonów "
                    "(pcx templates wypisuje dostępne szablony)."
                ),
                details={"sentence": exc.sentence, "cause": cause.reason},
            ))

    # ------------------------------------------------------------------
    # Stage G — ostrzeżenia
    # ------------------------------------------------------------------

    def _stage_warnings(self, branch: PolicyBranch, warnings: list[str]) -> None:
        positions = Counter(p.position for p in branch.layout_policies if p.position)
        for (row, column), count in positions.items():
            if count > 1:
                names = [p.name for p in branch.layout_policies if p.position == (row, column)]
                warnings.append(
                    f"Gałąź '{branch.name}': {count} polityki na pozycji "
                    f"row={row}, column={column} ({', '.join(names)})."
                )

        for statement in branch.uniques:
            self._check_parameters(branch.name, statement, warnings)
        for policy in branch.policies:
            for statement in policy.uniques:
                self._check_parameters(policy.name, statement, warnings)

    def _check_parameters(self, owner: str, statement: UniqueStatement, warnings: list[str]) -> None:
        template = self._ruleset.templates.get(statement.kind)
        if template is not None:
            for ptype, value in zip(template.parameter_types, statement.parameters):
                if not ptype.check(value):
                    warnings.append(
                        f"{owner}: parametr '{value}' w '{statement.text}' "
                        f"nie wygląda na {ptype}."
                    )
        for conditional in statement.conditionals:
            self._check_parameters(owner, conditional, warnings)
