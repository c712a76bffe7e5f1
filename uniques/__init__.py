"""
uniques — parser i walidator zdań unique (szablonowych efektów reguł).

Interfejs publiczny:
    UniqueParser      — parser zdań względem tabeli szablonów
    TemplateTable     — rozszerzalny słownik szablonów; default_table()
    UniqueStatement   — sparsowane zdanie (kind, parameters, conditionals)
    UniqueTemplate, TemplateSlot, ParameterType
    MalformedUnique, UnknownUniqueKind, ArityMismatch — błędy parsowania

Typowe użycie:
    from uniques import UniqueParser, MalformedUnique

    parser = UniqueParser()
    try:
        st = parser.parse("[+1 Culture] [in all cities] <when at war>")
    except MalformedUnique as e:
        print(e.reason)
"""

from .errors import ArityMismatch, MalformedUnique, UnknownUniqueKind
from .types import (
    HIDDEN_FROM_USERS,
    ParameterType,
    TemplateSlot,
    UniqueStatement,
    UniqueTemplate,
)
from .templates import TemplateTable, default_table
from .parser import UniqueParser

__all__ = [
    "ArityMismatch",
    "MalformedUnique",
    "UnknownUniqueKind",
    "HIDDEN_FROM_USERS",
    "ParameterType",
    "TemplateSlot",
    "UniqueStatement",
    "UniqueTemplate",
    "TemplateTable",
    "default_table",
    "UniqueParser",
]
