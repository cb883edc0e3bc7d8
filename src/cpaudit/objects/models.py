"""Object data models — immutable entities and the edges that relate them."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ObjectKind:
    """Object type tags the audit treats specially.

    The set of kinds in an export is open; anything not listed here is carried
    through untouched and only ever shows up in reports.
    """

    HOST = "host"
    NETWORK = "network"
    GROUP = "group"
    SERVICE_GROUP = "service-group"

    GROUPS = (GROUP, SERVICE_GROUP)


class EdgeMethod(enum.Enum):
    """How an edge was formed."""

    CONTAINMENT = "Di"
    MEMBERSHIP = "Mono"


@dataclass(frozen=True)
class Entity:
    """A single exported policy object: host, network, group, service, ..."""

    uid: str
    name: str = ""
    type: str = ""
    comments: str = ""
    ipv4_address: str = ""
    subnet4: str = ""
    mask_length4: int = 0
    port: str = ""
    protocol: str = ""
    members: tuple[str, ...] = ()

    @property
    def cidr(self) -> str:
        return f"{self.subnet4}/{self.mask_length4}"


@dataclass(frozen=True)
class Edge:
    """A relationship between two entities, stored by identifier."""

    start: str
    end: str
    method: EdgeMethod
