"""Audit engine — wires catalog, graph, traversal and classifier together."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from cpaudit.acl.classifier import RuleClassifier
from cpaudit.acl.loader import load_rules_file
from cpaudit.acl.models import AclRule
from cpaudit.association import associated_set
from cpaudit.config import AuditConfig
from cpaudit.objects.catalog import Catalog, load_objects_file
from cpaudit.objects.graph import build_graph
from cpaudit.objects.models import Entity

logger = logging.getLogger(__name__)


@dataclass
class AuditResult:
    """Everything a report needs about one target."""

    target: str
    catalog: Catalog
    associated: list[Entity] = field(default_factory=list)
    inbound: list[AclRule] | None = None
    outbound: list[AclRule] | None = None


class AuditEngine:
    """Runs one audit end to end. Every step completes before anything is reported."""

    def __init__(self, config: AuditConfig | None = None) -> None:
        self.config = config or AuditConfig()

    def run(
        self,
        objects_path: str | Path,
        target: str,
        acls_path: str | Path | None = None,
    ) -> AuditResult:
        catalog = load_objects_file(objects_path)
        result = self.analyze(catalog, target)

        if acls_path is not None:
            rules = load_rules_file(acls_path, marker=self.config.rule_marker)
            self.classify(result, rules)

        return result

    def analyze(self, catalog: Catalog, target: str) -> AuditResult:
        """Resolve *target* by name and compute its associated set."""
        entity = catalog.resolve_name(target)
        graph = build_graph(catalog)
        associated = associated_set(graph, entity.uid)
        logger.info("%s: %d associated objects", target, len(associated))
        return AuditResult(target=target, catalog=catalog, associated=associated)

    def classify(self, result: AuditResult, rules: list[AclRule]) -> AuditResult:
        classifier = RuleClassifier(
            result.catalog,
            accept_action=self.config.accept_action,
            any_type=self.config.any_type,
        )
        classification = classifier.classify(rules, result.associated)
        result.inbound = classification.inbound
        result.outbound = classification.outbound
        return result
