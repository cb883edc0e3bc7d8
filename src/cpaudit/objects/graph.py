"""Relationship graph — group membership and subnet containment between objects.

Edges live in a single arena and are addressed by their index. Each entity's
incidence list holds the indices of the edges it takes part in, so the graph
never mutates the (frozen) entities it relates.
"""

from __future__ import annotations

import ipaddress
import logging

from cpaudit.errors import DomainError, ResolutionError
from cpaudit.objects.catalog import Catalog
from cpaudit.objects.models import Edge, EdgeMethod, Entity, ObjectKind

logger = logging.getLogger(__name__)


class RelationshipGraph:
    """Adjacency over the entities of one catalog."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog
        self.edges: list[Edge] = []
        self._incident: dict[str, list[int]] = {}

    def add_membership(self, member: Entity, group: Entity) -> None:
        """One edge from the group to the member, listed on both endpoints."""
        handle = self._append(Edge(start=group.uid, end=member.uid, method=EdgeMethod.MEMBERSHIP))
        self._incident.setdefault(member.uid, []).append(handle)
        if group.uid != member.uid:
            self._incident.setdefault(group.uid, []).append(handle)

    def add_containment(self, host: Entity, network: Entity) -> None:
        """A pair of edges, each owned by the endpoint it starts from."""
        to_network = self._append(
            Edge(start=host.uid, end=network.uid, method=EdgeMethod.CONTAINMENT)
        )
        to_host = self._append(
            Edge(start=network.uid, end=host.uid, method=EdgeMethod.CONTAINMENT)
        )
        self._incident.setdefault(host.uid, []).append(to_network)
        self._incident.setdefault(network.uid, []).append(to_host)

    def edges_of(self, uid: str) -> list[Edge]:
        """Edges incident to *uid*, in the order they were installed."""
        return [self.edges[h] for h in self._incident.get(uid, ())]

    def _append(self, edge: Edge) -> int:
        self.edges.append(edge)
        return len(self.edges) - 1

    def __len__(self) -> int:
        return len(self.edges)


def build_graph(catalog: Catalog) -> RelationshipGraph:
    """Install membership edges, then containment edges, for a whole catalog."""
    graph = RelationshipGraph(catalog)

    for group in catalog.of_kind(*ObjectKind.GROUPS):
        for member_uid in group.members:
            if member_uid not in catalog:
                raise ResolutionError(
                    f"Group {group.name!r} references unknown member {member_uid}"
                )
            graph.add_membership(catalog.get(member_uid), group)

    hosts = [(h, _host_address(h)) for h in catalog.of_kind(ObjectKind.HOST)]
    for network in catalog.of_kind(ObjectKind.NETWORK):
        subnet = _parse_subnet(network)
        for host, address in hosts:
            if address is not None and address in subnet:
                graph.add_containment(host, network)

    logger.debug("Built graph with %d edges over %d objects", len(graph), len(catalog))
    return graph


def _parse_subnet(network: Entity) -> ipaddress.IPv4Network | ipaddress.IPv6Network:
    try:
        return ipaddress.ip_network(network.cidr, strict=False)
    except ValueError as exc:
        raise DomainError(
            f"Network {network.name!r} has an invalid subnet {network.cidr}: {exc}"
        ) from exc


def _host_address(host: Entity) -> ipaddress.IPv4Address | None:
    try:
        return ipaddress.IPv4Address(host.ipv4_address)
    except ValueError:
        logger.debug("Host %r has no usable address %r", host.name, host.ipv4_address)
        return None
