"""
Graf gałęzi i polityk (PolicyGraph).

PolicyGraph buduje raz, przy konstrukcji, słowniki:
  _branches:  nazwa gałęzi   -> PolicyBranch
  _policies:  nazwa polityki -> Policy
  _unlocks:   nazwa polityki -> nazwy polityk, które jej wymagają (krawędzie odwrotne)

Zapytania są O(1) lub O(stopień wyjściowy). Graf nie interpretuje treści
UniqueStatement — to dla niego nieprzezroczyste dane węzła.

Nazwy gałęzi i polityk dzielą jedną przestrzeń: oba rodzaje węzłów mają
linki "Policy/<nazwa>", więc gałąź i polityka o tej samej nazwie to
DuplicateKey.

Konstrukcja nie jest bezpieczna wątkowo; po jej zakończeniu graf jest tylko
do odczytu i może być czytany z wielu wątków.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .policies import Policy, PolicyBranch


class DuplicateKey(ValueError):
    """
    Dwa węzły (gałęzie lub polityki) o tej samej nazwie.

    - kind:  "branch" | "policy"
    - name:  zduplikowana nazwa
    - where: gałęzie, w których wystąpiła nazwa polityki (puste dla dwóch gałęzi)
    """

    def __init__(self, kind: str, name: str, where: tuple[str, ...] = ()) -> None:
        label = "Gałąź" if kind == "branch" else "Polityka"
        suffix = f" (gałęzie: {', '.join(where)})" if where else ""
        super().__init__(f"{label} '{name}' zadeklarowana więcej niż raz{suffix}.")
        self.kind = kind
        self.name = name
        self.where = where


class PolicyGraph:
    """
    Indeks gałęzi i polityk z zapytaniami o wymagania.

    Atrybuty publiczne:
      branches — krotka gałęzi w kolejności deklaracji
    """

    def __init__(self, branches: Iterable[PolicyBranch]) -> None:
        self._branches: dict[str, PolicyBranch] = {}
        self._policies: dict[str, Policy] = {}
        self._branch_index: dict[str, int] = {}

        for branch in branches:
            if branch.name in self._branches:
                raise DuplicateKey("branch", branch.name)
            clash = self._policies.get(branch.name)
            if clash is not None:
                raise DuplicateKey("branch", branch.name, (clash.branch,))
            self._branch_index[branch.name] = len(self._branches)
            self._branches[branch.name] = branch

            for policy in branch.policies:
                previous = self._policies.get(policy.name)
                if previous is not None:
                    raise DuplicateKey("policy", policy.name, (previous.branch, branch.name))
                if policy.name in self._branches:
                    raise DuplicateKey("policy", policy.name, (branch.name,))
                self._policies[policy.name] = policy

        unlocks: dict[str, list[str]] = {}
        for policy in self._policies.values():
            for required in policy.requires:
                unlocks.setdefault(required, []).append(policy.name)
        self._unlocks: dict[str, tuple[str, ...]] = {
            name: tuple(names) for name, names in unlocks.items()
        }

        self.branches: tuple[PolicyBranch, ...] = tuple(self._branches.values())

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def branch(self, name: str) -> PolicyBranch | None:
        return self._branches.get(name)

    def policy(self, name: str) -> Policy | None:
        return self._policies.get(name)

    def has_policy(self, name: str) -> bool:
        return name in self._policies

    def branch_of(self, policy_name: str) -> PolicyBranch | None:
        """Gałąź, do której należy polityka (None dla nieznanej nazwy)."""
        policy = self._policies.get(policy_name)
        if policy is None:
            return None
        return self._branches.get(policy.branch)

    def branch_index(self, name: str) -> int:
        """Pozycja gałęzi w kolejności deklaracji; KeyError dla nieznanej."""
        return self._branch_index[name]

    def iter_policies(self) -> Iterator[Policy]:
        """Wszystkie polityki w kolejności deklaracji (gałąź po gałęzi)."""
        return iter(self._policies.values())

    # ------------------------------------------------------------------
    # Wymagania
    # ------------------------------------------------------------------

    def prerequisites(self, name: str) -> tuple[str, ...]:
        """
        Co musi być przyjęte przed polityką `name` (bezpośrednie requires).

        Raises:
            KeyError dla nieznanej polityki.
        """
        return self._policies[name].requires

    def unlocks(self, name: str) -> tuple[str, ...]:
        """Polityki, które wymagają `name` — także dla nazw niezadeklarowanych."""
        return self._unlocks.get(name, ())

    def completion_policy(self, branch_name: str) -> Policy | None:
        branch = self._branches.get(branch_name)
        return branch.completion_policy if branch is not None else None

    def __len__(self) -> int:
        return len(self._policies)

    def __contains__(self, name: object) -> bool:
        return name in self._policies or name in self._branches
