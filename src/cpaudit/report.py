"""Report rendering — turns audit results into Rich tables or JSON."""

from __future__ import annotations

import json
from collections.abc import Iterable

from rich.markup import escape
from rich.table import Table

from cpaudit.acl.models import AclRule
from cpaudit.objects.catalog import Catalog
from cpaudit.objects.models import Entity, ObjectKind

OBJECT_COLUMNS = ("Name", "Type", "Extra", "Comment", "UID")
RULE_COLUMNS = ("No.", "Src", "Dst", "Service")


def object_row(entity: Entity) -> tuple[str, ...]:
    """One associated-objects row: name, type, summary, comment, uid."""
    if entity.type == ObjectKind.HOST:
        extra = entity.ipv4_address
    elif entity.type == ObjectKind.NETWORK:
        extra = entity.cidr
    elif entity.type == ObjectKind.GROUP:
        extra = f"Members {len(entity.members)}"
    else:
        extra = ""
    return (entity.name, entity.type, extra, entity.comments.strip(), entity.uid)


def rule_row(rule: AclRule, catalog: Catalog) -> tuple[str, ...]:
    """One rule row: number, sources, destinations, services (newline-joined)."""
    return (
        str(rule.number),
        _names(rule.source, rule.source_negate, catalog),
        _names(rule.destination, rule.destination_negate, catalog),
        "\n".join(service_lines(rule.service, catalog)),
    )


def service_lines(uids: Iterable[str], catalog: Catalog) -> list[str]:
    """Render services as ``name:type[:port]``, expanding service groups."""
    lines: list[str] = []
    for uid in uids:
        service = catalog.get(uid)
        if "group" in service.type:
            lines.extend(_service_line(catalog.get(m)) for m in service.members)
        else:
            lines.append(_service_line(service))
    return lines


def _service_line(service: Entity) -> str:
    line = f"{service.name}:{service.type}"
    if "icmp" not in service.type:
        line += f":{service.port}"
    return line


def _name_list(uids: Iterable[str], negate: bool, catalog: Catalog) -> list[str]:
    prefix = "!" if negate else ""
    return [prefix + catalog.get(uid).name for uid in uids]


def _names(uids: Iterable[str], negate: bool, catalog: Catalog) -> str:
    return "\n".join(_name_list(uids, negate, catalog))


def objects_table(target: str, entities: Iterable[Entity]) -> Table:
    table = Table(title=f"{target} Belongs To", show_lines=False)
    for column in OBJECT_COLUMNS:
        table.add_column(column)
    for entity in entities:
        table.add_row(*(escape(cell) for cell in object_row(entity)))
    return table


def rules_table(title: str, rules: Iterable[AclRule], catalog: Catalog) -> Table:
    table = Table(title=title, show_lines=True)
    table.add_column("No.", justify="right")
    for column in RULE_COLUMNS[1:]:
        table.add_column(column)
    for rule in rules:
        table.add_row(*(escape(cell) for cell in rule_row(rule, catalog)))
    return table


def outbound_title(target: str) -> str:
    return f"{target} -> Any"


def inbound_title(target: str) -> str:
    return f"Any -> {target}"


def to_json(
    target: str,
    entities: Iterable[Entity],
    catalog: Catalog,
    inbound: Iterable[AclRule] | None = None,
    outbound: Iterable[AclRule] | None = None,
) -> str:
    """Serialize the same rows the tables show, keyed by column name."""
    doc: dict[str, object] = {
        "target": target,
        "objects": [dict(zip(OBJECT_COLUMNS, object_row(e))) for e in entities],
    }
    if outbound is not None:
        doc["outbound"] = [_rule_doc(r, catalog) for r in outbound]
    if inbound is not None:
        doc["inbound"] = [_rule_doc(r, catalog) for r in inbound]
    return json.dumps(doc, indent=2)


def _rule_doc(rule: AclRule, catalog: Catalog) -> dict[str, object]:
    return {
        "number": rule.number,
        "source": _name_list(rule.source, rule.source_negate, catalog),
        "destination": _name_list(rule.destination, rule.destination_negate, catalog),
        "service": service_lines(rule.service, catalog),
        "uid": rule.uid,
    }
