"""ACL data models — decoded access rules and classification results."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AclRule:
    """One access-control entry. Object references are uids, resolved late."""

    action: str
    enabled: bool = True
    source: tuple[str, ...] = ()
    destination: tuple[str, ...] = ()
    source_negate: bool = False
    destination_negate: bool = False
    service: tuple[str, ...] = ()
    number: int = 0
    name: str = ""
    comments: str = ""
    type: str = "access-rule"
    uid: str = ""


@dataclass
class Classification:
    """Rules partitioned by the direction they reference the associated set."""

    inbound: list[AclRule] = field(default_factory=list)
    outbound: list[AclRule] = field(default_factory=list)
