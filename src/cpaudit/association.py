"""Associated-set traversal — which objects a target is attached to.

Two phases over the relationship graph:
  1. From the target itself, only directly attached networks are taken.
  2. Breadth-first from the target and those networks, following every
     incident edge back to the endpoint it starts from.

Because membership edges start at the group and containment edges start at
the object that owns them, phase 2 climbs from an object to every group that
contains it (transitively) without fanning out from a network to all of its
hosts.
"""

from __future__ import annotations

import logging
from collections import deque

from cpaudit.objects.graph import RelationshipGraph
from cpaudit.objects.models import Entity, ObjectKind

logger = logging.getLogger(__name__)


def associated_set(graph: RelationshipGraph, target_uid: str) -> list[Entity]:
    """Return the target's associated objects in discovery order, target first."""
    catalog = graph.catalog
    target = catalog.get(target_uid)

    visited = {target.uid}
    queue = deque([target.uid])

    for edge in graph.edges_of(target.uid):
        if edge.end in visited:
            continue
        if catalog.get(edge.end).type == ObjectKind.NETWORK:
            visited.add(edge.end)
            queue.append(edge.end)

    associated: list[Entity] = []
    while queue:
        uid = queue.popleft()
        associated.append(catalog.get(uid))

        for edge in graph.edges_of(uid):
            if edge.start in visited:
                continue
            visited.add(edge.start)
            queue.append(edge.start)

    logger.debug("%s is associated with %d objects", target.name, len(associated))
    return associated
