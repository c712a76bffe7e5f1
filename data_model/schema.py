"""
Schemat JSON rekordów gałęzi polityk (Policies.json).

Sprawdza wyłącznie kształt rekordów. Wartości priorytetów nie są tu
ograniczane — ich typ sprawdza walidator grafu (E_PRIORITY_NOT_INT).
"""

from __future__ import annotations

from typing import Any

_CIVILOPEDIA_TEXT: dict[str, Any] = {
    "type": "array",
    "items": {
        "anyOf": [
            {"type": "string"},
            {
                "type": "object",
                "properties": {
                    "text":      {"type": "string"},
                    "link":      {"type": "string"},
                    "header":    {"type": "integer", "minimum": 0, "maximum": 6},
                    "separator": {"type": "boolean"},
                },
            },
        ],
    },
}

_UNIQUES: dict[str, Any] = {
    "type": "array",
    "items": {"type": "string"},
}

POLICY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name":            {"type": "string", "minLength": 1},
        "uniques":         _UNIQUES,
        "requires":        {"type": "array", "items": {"type": "string", "minLength": 1}},
        "row":             {"type": "integer"},
        "column":          {"type": "integer"},
        "civilopediaText": _CIVILOPEDIA_TEXT,
    },
}

BRANCH_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["name", "policies"],
    "properties": {
        "name":            {"type": "string", "minLength": 1},
        "era":             {"type": "string"},
        "priorities":      {"type": "object"},
        "uniques":         _UNIQUES,
        "policies":        {"type": "array", "items": POLICY_SCHEMA},
        "civilopediaText": _CIVILOPEDIA_TEXT,
    },
}

RULESET_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "array",
    "items": BRANCH_SCHEMA,
}
