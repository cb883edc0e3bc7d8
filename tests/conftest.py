"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from cpaudit.objects.catalog import Catalog, load_objects, load_objects_file
from cpaudit.objects.graph import RelationshipGraph, build_graph


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def objects_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "objects.json"


@pytest.fixture
def rules_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "rules.json"


@pytest.fixture
def catalog(objects_path: Path) -> Catalog:
    return load_objects_file(objects_path)


@pytest.fixture
def graph(catalog: Catalog) -> RelationshipGraph:
    return build_graph(catalog)


@pytest.fixture
def small_catalog() -> Catalog:
    """H1 inside N1, G1 containing H1, plus the Any and Accept objects."""
    return load_objects(
        [
            {"uid": "any", "name": "Any", "type": "CpmiAnyObject"},
            {"uid": "accept", "name": "Accept", "type": "RulebaseAction"},
            {"uid": "h1", "name": "H1", "type": "host", "ipv4-address": "10.0.0.5"},
            {
                "uid": "n1",
                "name": "N1",
                "type": "network",
                "subnet4": "10.0.0.0",
                "mask-length4": 24,
            },
            {"uid": "g1", "name": "G1", "type": "group", "members": ["h1"]},
        ]
    )


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep a developer's own config file and CPAUDIT_* variables out of tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for var in ("CPAUDIT_ACCEPT_ACTION", "CPAUDIT_ANY_TYPE", "CPAUDIT_RULE_MARKER"):
        monkeypatch.delenv(var, raising=False)
