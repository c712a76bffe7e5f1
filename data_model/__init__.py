"""
data_model — struktury danych gałęzi polityk, polityk i dokumentacji.

Użycie:
  from data_model import Policy, PolicyBranch, PolicyGraph, Ruleset, ...
  from data_model.loader import load_ruleset, load_ruleset_file

Moduły:
  documentation — DocumentationLine, LinkType, NodeIdentity, DocumentedNode
  policies      — Policy, PolicyBranch, make_link
  graph         — PolicyGraph, DuplicateKey
  ruleset       — Ruleset (jawnie przekazywany kontekst)
  schema        — schemat JSON rekordów
  loader        — rekordy → Ruleset + raport (importowany osobno)

Mapowanie na rekordy Policies.json:
  name            → str
  era             → str
  priorities      → dict[str, int]
  uniques         → list[str]  (parsowane do UniqueStatement)
  policies        → list[Policy]
  requires        → list[str]
  row, column     → int  (brak obu = węzeł ukończenia gałęzi)
  civilopediaText → list[DocumentationLine]
"""

from .documentation import (
    DocumentationLine,
    DocumentedNode,
    LinkType,
    NodeIdentity,
)
from .policies import (
    POLICY_CATEGORY,
    Policy,
    PolicyBranch,
    make_link,
)
from .graph import (
    DuplicateKey,
    PolicyGraph,
)
from .ruleset import Ruleset

__all__ = [
    # documentation
    "DocumentationLine",
    "DocumentedNode",
    "LinkType",
    "NodeIdentity",
    # policies
    "POLICY_CATEGORY",
    "Policy",
    "PolicyBranch",
    "make_link",
    # graph
    "DuplicateKey",
    "PolicyGraph",
    # ruleset
    "Ruleset",
]
