"""Object catalog — decodes exported object records into entities.

The catalog is the single owner of every entity in one export. It indexes them
by identifier and by display name; everything downstream refers to entities by
identifier and resolves them here.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from cpaudit.errors import LoadError, ResolutionError
from cpaudit.objects.models import Entity

logger = logging.getLogger(__name__)


class Catalog:
    """Identifier → entity mapping plus a name → identifier index."""

    def __init__(self) -> None:
        self._entities: dict[str, Entity] = {}
        self._names: dict[str, str] = {}
        self._duplicate_names: set[str] = set()

    def add(self, entity: Entity) -> None:
        """Insert an entity. A repeated identifier replaces the earlier entity."""
        previous = self._entities.get(entity.uid)
        if previous is not None:
            logger.warning(
                "Duplicate object uid %s (%r replaces %r)",
                entity.uid,
                entity.name,
                previous.name,
            )
            self._entities[entity.uid] = entity
            self._reindex_name(previous.name)
            if entity.name != previous.name:
                self._index_name(entity)
            return

        self._entities[entity.uid] = entity
        self._index_name(entity)

    def _index_name(self, entity: Entity) -> None:
        owner = self._names.get(entity.name)
        if owner is not None and owner != entity.uid:
            logger.warning("Duplicate object name %r (%s, %s)", entity.name, owner, entity.uid)
            self._duplicate_names.add(entity.name)
        self._names[entity.name] = entity.uid

    def _reindex_name(self, name: str) -> None:
        """Recompute the index entry for *name* from the entities that still carry it."""
        owners = [uid for uid, e in self._entities.items() if e.name == name]
        if not owners:
            self._names.pop(name, None)
            self._duplicate_names.discard(name)
            return

        if len(owners) == 1:
            self._duplicate_names.discard(name)
        if self._names.get(name) not in owners:
            self._names[name] = owners[-1]

    def get(self, uid: str) -> Entity:
        try:
            return self._entities[uid]
        except KeyError:
            raise ResolutionError(f"Unknown object uid: {uid}") from None

    def resolve_name(self, name: str) -> Entity:
        """Look up an entity by display name.

        Names shared by several objects are refused rather than resolved to an
        arbitrary one of them.
        """
        if name in self._duplicate_names:
            raise ResolutionError(f"Object name is ambiguous: {name}")
        uid = self._names.get(name)
        if uid is None:
            raise ResolutionError(f"No object named {name!r}")
        return self._entities[uid]

    def of_kind(self, *kinds: str) -> list[Entity]:
        return [e for e in self._entities.values() if e.type in kinds]

    @property
    def names(self) -> dict[str, str]:
        return dict(self._names)

    @property
    def duplicate_names(self) -> frozenset[str]:
        return frozenset(self._duplicate_names)

    def __contains__(self, uid: object) -> bool:
        return uid in self._entities

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)


def load_objects(records: Iterable[Any]) -> Catalog:
    """Build a catalog from decoded object records. Any bad record is fatal."""
    catalog = Catalog()
    for index, record in enumerate(records):
        catalog.add(_parse_entity(record, index))
    logger.debug("Loaded %d objects", len(catalog))
    return catalog


def load_objects_file(path: str | Path) -> Catalog:
    """Load an object export (a JSON array of records) from disk."""
    return load_objects(read_json_array(path))


def read_json_array(path: str | Path) -> list[Any]:
    """Read a file holding a JSON array. Shared by the object and rule loaders."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise LoadError(f"Cannot read {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LoadError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, list):
        raise LoadError(f"{path} must contain a JSON array")
    return data


def _parse_entity(record: Any, index: int) -> Entity:
    if not isinstance(record, dict):
        raise LoadError(f"Object record {index} is not a JSON object")

    uid = record.get("uid")
    if not isinstance(uid, str) or not uid:
        raise LoadError(f"Object record {index} has no uid")

    members = record.get("members") or []
    if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
        raise LoadError(f"Object {uid}: 'members' must be a list of uids")

    mask = record.get("mask-length4", 0)
    if isinstance(mask, bool) or not isinstance(mask, int):
        raise LoadError(f"Object {uid}: 'mask-length4' must be an integer")

    port = record.get("port", "")
    if isinstance(port, bool) or not isinstance(port, (str, int)):
        raise LoadError(f"Object {uid}: 'port' must be a string or integer")

    return Entity(
        uid=uid,
        name=_string_field(record, "name", uid),
        type=_string_field(record, "type", uid),
        comments=_string_field(record, "comments", uid),
        ipv4_address=_string_field(record, "ipv4-address", uid),
        subnet4=_string_field(record, "subnet4", uid),
        mask_length4=mask,
        port=str(port),
        protocol=_string_field(record, "protocol", uid),
        members=tuple(members),
    )


def _string_field(record: dict, key: str, uid: str) -> str:
    value = record.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise LoadError(f"Object {uid}: {key!r} must be a string")
    return value
