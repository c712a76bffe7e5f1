"""
validator — walidator grafu gałęzi i polityk.

Interfejs publiczny:
    GraphValidator   — główny walidator (etapy A–G)
    ValidationReport, ValidationError, ErrorCode — typy raportu

Typowe użycie:
    from data_model.loader import load_ruleset_file
    from validator import GraphValidator

    result = load_ruleset_file("data/Policies.json")
    report = result.report
    if result.ruleset is not None:
        report = report.merge(GraphValidator(result.ruleset).validate())
    for e in report.errors:
        print(e.code, e.path, e.message)
"""

from .types import ErrorCode, ValidationError, ValidationReport
from .graph_validator import GraphValidator

__all__ = [
    "ErrorCode",
    "ValidationError",
    "ValidationReport",
    "GraphValidator",
]
