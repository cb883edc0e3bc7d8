"""Rule classifier — which rules carry traffic into or out of an associated set."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cpaudit.acl.models import AclRule, Classification
from cpaudit.objects.catalog import Catalog
from cpaudit.objects.models import Entity

logger = logging.getLogger(__name__)


class RuleClassifier:
    """Partitions enabled accept rules by source/destination membership.

    Source is checked before destination and a rule lands in at most one
    bucket. A negated source or destination never matches: the rule's
    effective scope is not inverted.
    """

    def __init__(
        self,
        catalog: Catalog,
        accept_action: str = "Accept",
        any_type: str = "CpmiAnyObject",
    ) -> None:
        self.catalog = catalog
        self.accept_action = accept_action
        self.any_type = any_type

    def classify(
        self,
        rules: Iterable[AclRule],
        associated: Iterable[Entity],
    ) -> Classification:
        members = {e.uid for e in associated}
        result = Classification()

        for rule in rules:
            if not rule.enabled:
                continue

            if not rule.source_negate and self._references(rule, rule.source, members):
                result.outbound.append(rule)
            elif not rule.destination_negate and self._references(
                rule, rule.destination, members
            ):
                result.inbound.append(rule)

        logger.debug(
            "Classified %d inbound and %d outbound rules",
            len(result.inbound),
            len(result.outbound),
        )
        return result

    def is_accept(self, rule: AclRule) -> bool:
        return self.catalog.get(rule.action).name == self.accept_action

    def _references(self, rule: AclRule, uids: tuple[str, ...], members: set[str]) -> bool:
        for uid in uids:
            matched = uid in members or self.catalog.get(uid).type == self.any_type
            if matched and self.is_accept(rule):
                return True
        return False
