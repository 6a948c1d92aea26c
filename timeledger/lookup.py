"""Id lookups against the category and tag catalogs."""

from __future__ import annotations

from typing import Iterable, Optional, TypeVar

T = TypeVar("T")


def resolve(items: Iterable[T], item_id: str, default: Optional[T] = None) -> Optional[T]:
    """Return the item whose ``id`` matches, else the caller's ``default``."""

    for item in items:
        if getattr(item, "id", None) == item_id:
            return item
    return default


def type_name(types: Iterable, type_id: str) -> str:
    activity = resolve(types, type_id)
    return activity.name if activity is not None else type_id


def tag_for(tags: Iterable, tag_id: str):
    return resolve(tags, tag_id)
