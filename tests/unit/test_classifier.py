"""Tests for inbound/outbound rule classification."""

from __future__ import annotations

from pathlib import Path

import pytest

from cpaudit.acl.classifier import RuleClassifier
from cpaudit.acl.loader import load_rules_file
from cpaudit.acl.models import AclRule
from cpaudit.association import associated_set
from cpaudit.errors import ResolutionError
from cpaudit.objects.catalog import Catalog
from cpaudit.objects.graph import RelationshipGraph, build_graph


@pytest.fixture
def h1_set(graph: RelationshipGraph):
    return associated_set(graph, "host-h1")


def _rule(**kwargs) -> AclRule:
    kwargs.setdefault("action", "accept")
    return AclRule(**kwargs)


def test_fixture_classification(catalog: Catalog, h1_set, rules_path: Path):
    result = RuleClassifier(catalog).classify(load_rules_file(rules_path), h1_set)
    assert [r.number for r in result.outbound] == [1]
    assert [r.number for r in result.inbound] == [2, 8]


class TestSmallScenario:
    @pytest.fixture
    def assoc(self, small_catalog: Catalog):
        return associated_set(build_graph(small_catalog), "h1")

    def test_source_match_is_outbound(self, small_catalog: Catalog, assoc):
        rule = _rule(source=("h1",), destination=("any",))
        result = RuleClassifier(small_catalog).classify([rule], assoc)
        assert result.outbound == [rule]
        assert result.inbound == []

    def test_negated_source_is_in_neither_bucket(self, small_catalog: Catalog, assoc):
        rule = _rule(source=("h1",), destination=("any",), source_negate=True)
        result = RuleClassifier(small_catalog).classify([rule], assoc)
        assert result.outbound == []
        # Any as destination still matches on its own
        assert result.inbound == [rule]

    def test_negated_source_without_other_match(self, small_catalog: Catalog, assoc):
        rule = _rule(source=("h1",), destination=("accept",), source_negate=True)
        result = RuleClassifier(small_catalog).classify([rule], assoc)
        assert result.outbound == []
        assert result.inbound == []

    def test_negated_source_and_destination(self, small_catalog: Catalog, assoc):
        rule = _rule(
            source=("h1",),
            destination=("any",),
            source_negate=True,
            destination_negate=True,
        )
        result = RuleClassifier(small_catalog).classify([rule], assoc)
        assert result.outbound == []
        assert result.inbound == []

    def test_disabled_rule_never_classified(self, small_catalog: Catalog, assoc):
        rule = _rule(source=("h1",), destination=("g1",), enabled=False)
        result = RuleClassifier(small_catalog).classify([rule], assoc)
        assert result.outbound == []
        assert result.inbound == []

    def test_non_accept_rule_excluded(self, small_catalog: Catalog, assoc):
        rule = _rule(source=("h1",), destination=("n1",), action="h1")
        result = RuleClassifier(small_catalog).classify([rule], assoc)
        assert result.outbound == []
        assert result.inbound == []

    def test_destination_match_is_inbound(self, small_catalog: Catalog, assoc):
        rule = _rule(source=(), destination=("g1",))
        result = RuleClassifier(small_catalog).classify([rule], assoc)
        assert result.inbound == [rule]

    def test_source_checked_before_destination(self, small_catalog: Catalog, assoc):
        rule = _rule(source=("n1",), destination=("g1",))
        result = RuleClassifier(small_catalog).classify([rule], assoc)
        assert result.outbound == [rule]
        assert result.inbound == []

    def test_any_source_matches(self, small_catalog: Catalog):
        rule = _rule(source=("any",), destination=("accept",))
        result = RuleClassifier(small_catalog).classify([rule], [])
        assert result.outbound == [rule]

    def test_order_preserved(self, small_catalog: Catalog, assoc):
        rules = [_rule(number=n, source=("h1",)) for n in (7, 3, 5)]
        result = RuleClassifier(small_catalog).classify(rules, assoc)
        assert [r.number for r in result.outbound] == [7, 3, 5]


def test_custom_accept_and_any(small_catalog: Catalog):
    classifier = RuleClassifier(small_catalog, accept_action="Allow", any_type="AnyObj")
    rule = _rule(source=("any",))
    assert classifier.classify([rule], []).outbound == []


def test_unknown_action_uid(small_catalog: Catalog):
    rule = _rule(source=("h1",), action="missing")
    with pytest.raises(ResolutionError):
        RuleClassifier(small_catalog).classify([rule], [small_catalog.get("h1")])


def test_unknown_source_uid(small_catalog: Catalog):
    rule = _rule(source=("missing",))
    with pytest.raises(ResolutionError):
        RuleClassifier(small_catalog).classify([rule], [])
