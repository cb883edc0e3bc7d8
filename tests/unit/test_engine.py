"""Tests for the end-to-end audit engine."""

from __future__ import annotations

from pathlib import Path

import pytest

from cpaudit.config import AuditConfig
from cpaudit.engine import AuditEngine
from cpaudit.errors import ResolutionError


def test_run_with_rules(objects_path: Path, rules_path: Path):
    result = AuditEngine().run(objects_path, "H1", rules_path)
    assert [e.name for e in result.associated] == ["H1", "N1", "N2", "G1", "G2"]
    assert [r.number for r in result.outbound or []] == [1]
    assert [r.number for r in result.inbound or []] == [2, 8]


def test_run_without_rules(objects_path: Path):
    result = AuditEngine().run(objects_path, "H2")
    assert [e.name for e in result.associated] == ["H2", "N1", "N2"]
    assert result.inbound is None
    assert result.outbound is None


def test_unknown_target(objects_path: Path):
    with pytest.raises(ResolutionError, match="No object named"):
        AuditEngine().run(objects_path, "H9")


def test_config_marker_is_used(objects_path: Path, rules_path: Path):
    config = AuditConfig(rule_marker="access-section")
    result = AuditEngine(config).run(objects_path, "H1", rules_path)
    assert result.outbound == []
    assert result.inbound == []
