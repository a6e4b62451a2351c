from __future__ import annotations

from typing import Any

from .models import CatalogState
from .reviews import DEFAULT_USER_NAME


def compute_profile(state: CatalogState, user_name: str = DEFAULT_USER_NAME) -> dict[str, Any]:
    """Counts shown on the profile tab. Ids no longer in the catalog are ignored."""
    catalog_ids = {p.id for p in state.places}
    return {
        "places_visited": len(state.visited & catalog_ids),
        "favorites": len(state.favorites & catalog_ids),
        "reviews_written": sum(
            1 for p in state.places for r in p.reviews if r.user_name == user_name
        ),
        "custom_places": len(state.custom_ids & catalog_ids),
    }
