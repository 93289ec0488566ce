"""Group items into the three index views of the browsing site."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from catalog.schema import Item, unique_by
from utils.config import DEFAULT_SPEAKER_ROLES

Groups = Dict[str, List[Item]]


def _sorted_groups(grouped: Groups, unique_key: str) -> Groups:
    return {key: unique_by(grouped[key], unique_key) for key in sorted(grouped)}


def group_by_identifier(items: Iterable[Item]) -> Groups:
    grouped: Groups = {}
    for item in items:
        grouped.setdefault(item.collection_id, []).append(item)
    return _sorted_groups(grouped, "item_id")


def group_by_genre(items: Iterable[Item]) -> Groups:
    """Group by classification value; an item appears under each of its values."""

    grouped: Groups = {}
    for item in items:
        for classification in item.classifications:
            if classification.value:
                grouped.setdefault(classification.value, []).append(item)
    return _sorted_groups(grouped, "key")


def group_by_speaker(items: Iterable[Item], roles: Sequence[str] = DEFAULT_SPEAKER_ROLES) -> Groups:
    """Group by ``"{name} ({role})"`` for people whose role is in ``roles``."""

    allowed = set(roles)
    grouped: Groups = {}
    for item in items:
        for person in item.people:
            if person.role in allowed:
                grouped.setdefault(f"{person.name} ({person.role})", []).append(item)
    return _sorted_groups(grouped, "key")


def index_views(
    items: Sequence[Item], roles: Sequence[str] = DEFAULT_SPEAKER_ROLES
) -> Dict[str, Optional[Groups]]:
    """Return ``byIdentifier``, ``byGenre`` and ``bySpeaker``; empty views are ``None``."""

    by_genre = group_by_genre(items)
    by_speaker = group_by_speaker(items, roles)
    return {
        "byIdentifier": group_by_identifier(items),
        "byGenre": by_genre or None,
        "bySpeaker": by_speaker or None,
    }
