"""Shared test fixtures for sitsync."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from sitsync.config import ConfigManager
from sitsync.service import InMemoryComplianceService

TOKEN_CLINICAL = "ffffffff-0000-4000-8000-000000000001"
TOKEN_DRUGS = "ffffffff-0000-4000-8000-000000000002"
TOKEN_CODENAMES = "ffffffff-0000-4000-8000-000000000003"

RULE_PACK = """<?xml version="1.0" encoding="utf-8"?>
<RulePackage xmlns="http://schemas.microsoft.com/office/2011/mce">
  <RulePack id="2d7b1f0e-5c3a-4e8b-9f61-3a0c2e9d7b14">
    <Version major="7" minor="0" build="2" revision="0"/>
  </RulePack>
  <Rules>
    <Entity id="e1" patternsProximity="300" recommendedConfidence="75">
      <Pattern confidenceLevel="85">
        <Match idRef="ffffffff-0000-4000-8000-000000000001"/>
        <Match idRef="ffffffff-0000-4000-8000-000000000002"/>
      </Pattern>
    </Entity>
    <Entity id="e2" patternsProximity="300" recommendedConfidence="75">
      <Pattern confidenceLevel="75">
        <IdMatch idRef="ffffffff-0000-4000-8000-000000000003"/>
      </Pattern>
    </Entity>
  </Rules>
</RulePackage>
"""

KEYWORDS = {
    "clinical_terms": "hypertension\nasthma\n",
    "drug_names": "metformin\nlisinopril\n",
    "project_codenames": "BLUEHERON\nNIGHTJAR\n",
}


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch):
    """Fresh config singleton and no SITSYNC_* variables leaking in from the shell."""
    for key in list(os.environ):
        if key.startswith("SITSYNC_"):
            monkeypatch.delenv(key, raising=False)
    ConfigManager._reset_for_tests()
    yield
    ConfigManager._reset_for_tests()


def build_repo(root: Path, rule_pack: str = RULE_PACK, keywords: dict[str, str] | None = None) -> Path:
    """Lay out keywords/ and rulepack.xml under ``root``."""
    keywords_dir = root / "keywords"
    keywords_dir.mkdir(parents=True, exist_ok=True)
    for name, text in (KEYWORDS if keywords is None else keywords).items():
        (keywords_dir / f"{name}.txt").write_text(text, encoding="utf-8")
    (root / "rulepack.xml").write_bytes(rule_pack.encode("utf-8"))
    return root


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    return build_repo(tmp_path / "repo")


@pytest.fixture
def service() -> InMemoryComplianceService:
    return InMemoryComplianceService()
