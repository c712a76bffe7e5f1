from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


import pytest

from data_model import Ruleset
from data_model.loader import load_ruleset_file
from uniques import UniqueParser

POLICIES_JSON = ROOT / "data" / "Policies.json"


@pytest.fixture
def parser() -> UniqueParser:
    return UniqueParser()


@pytest.fixture
def policies_path() -> Path:
    return POLICIES_JSON


@pytest.fixture
def base_ruleset() -> Ruleset:
    result = load_ruleset_file(POLICIES_JSON)
    assert result.ruleset is not None, result.report.errors
    return result.ruleset
