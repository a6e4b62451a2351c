from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import FilterState, Place, Tab


def matches_query(place: Place, query: str) -> bool:
    """Case-insensitive substring match on name, type label and description."""
    q = query.lower()
    return (
        q in place.name.lower()
        or q in place.type.value.lower()
        or q in place.description.lower()
    )


def visible_places(
    catalog: Sequence[Place],
    tab: Tab,
    query: str,
    filters: FilterState,
    favorites: Iterable[str],
    visited: Iterable[str],
) -> list[Place]:
    """
    Return the places to display, in catalog order.

    Stages run in a fixed order, each narrowing the previous result:
    tab, search query, outlets, open late, noise levels.
    """
    result = list(catalog)

    # --- Tab ---
    if tab == Tab.saved:
        saved_ids = set(favorites) | set(visited)
        result = [p for p in result if p.id in saved_ids]

    # --- Search ---
    if query:
        result = [p for p in result if matches_query(p, query)]

    # --- Attribute filters ---
    if filters.outlets:
        result = [p for p in result if p.has_outlets]
    if filters.open_late:
        result = [p for p in result if p.is_open_late]
    if filters.noise:
        result = [p for p in result if p.noise_level in filters.noise]

    return result
