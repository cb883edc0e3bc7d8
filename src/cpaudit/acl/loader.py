"""Decode access rules from a rule-base export."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from cpaudit.acl.models import AclRule
from cpaudit.errors import LoadError
from cpaudit.objects.catalog import read_json_array

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "access-rule"


def load_rules(records: Iterable[Any], marker: str = DEFAULT_MARKER) -> list[AclRule]:
    """Decode every access rule in *records*, in input order.

    Records whose ``type`` does not contain *marker* (section headers, layer
    references, ...) are skipped.
    """
    rules: list[AclRule] = []
    skipped = 0
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise LoadError(f"Rule record {index} is not a JSON object")
        rule_type = record.get("type")
        if not isinstance(rule_type, str) or marker not in rule_type:
            skipped += 1
            continue
        rules.append(_parse_rule(record, index))

    logger.debug("Loaded %d rules (%d other records skipped)", len(rules), skipped)
    return rules


def load_rules_file(path: str | Path, marker: str = DEFAULT_MARKER) -> list[AclRule]:
    """Load a rule-base export (a JSON array of records) from disk."""
    return load_rules(read_json_array(path), marker=marker)


def _parse_rule(record: dict, index: int) -> AclRule:
    label = record.get("uid") or f"#{index}"

    action = record.get("action", "")
    if not isinstance(action, str):
        raise LoadError(f"Rule {label}: 'action' must be a uid string")

    number = record.get("rule-number", 0)
    if isinstance(number, bool) or not isinstance(number, int):
        raise LoadError(f"Rule {label}: 'rule-number' must be an integer")

    return AclRule(
        action=action,
        enabled=_bool_field(record, "enabled", label),
        source=_uid_list(record, "source", label),
        destination=_uid_list(record, "destination", label),
        source_negate=_bool_field(record, "source-negate", label),
        destination_negate=_bool_field(record, "destination-negate", label),
        service=_uid_list(record, "service", label),
        number=number,
        name=_string_field(record, "name", label),
        comments=_string_field(record, "comments", label),
        type=record["type"],
        uid=_string_field(record, "uid", label),
    )


def _uid_list(record: dict, key: str, label: str) -> tuple[str, ...]:
    value = record.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise LoadError(f"Rule {label}: {key!r} must be a list of uids")
    return tuple(value)


def _bool_field(record: dict, key: str, label: str) -> bool:
    value = record.get(key, False)
    if not isinstance(value, bool):
        raise LoadError(f"Rule {label}: {key!r} must be a boolean")
    return value


def _string_field(record: dict, key: str, label: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise LoadError(f"Rule {label}: {key!r} must be a string")
    return value
