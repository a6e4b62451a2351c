from __future__ import annotations

from .models import NoiseLevel, Place, PlaceType, Review

# Seed ratings are kept consistent with their reviews:
# rating == round_half_up(mean(review ratings), 1).
_SEED_TIMESTAMP = 1_735_689_600_000  # 2025-01-01T00:00:00Z


def _review(place_id: str, n: int, user_name: str, rating: int, text: str) -> Review:
    return Review(
        id=f"seed-{place_id}-{n}",
        place_id=place_id,
        user_name=user_name,
        rating=rating,
        text=text,
        timestamp=_SEED_TIMESTAMP + n * 60_000,
    )


SEED_PLACES: tuple[Place, ...] = (
    Place(
        id="1",
        name="Central Library",
        type=PlaceType.library,
        description="Five floors of desks and group rooms in the heart of campus. "
        "The top floor is reserved for silent study.",
        image="https://picsum.photos/800/600?random=1",
        rating=4.5,
        review_count=2,
        noise_level=NoiseLevel.quiet,
        has_outlets=True,
        has_wifi=True,
        has_food=False,
        is_open_late=True,
        reviews=(
            _review("1", 1, "Maya", 5, "Plenty of outlets on every floor."),
            _review("1", 2, "Jonas", 4, "Gets busy around finals week."),
        ),
    ),
    Place(
        id="2",
        name="The Daily Grind",
        type=PlaceType.cafe,
        description="Busy cafe next to the student union with good espresso and long tables.",
        image="https://picsum.photos/800/600?random=2",
        rating=3.7,
        review_count=3,
        noise_level=NoiseLevel.lively,
        has_outlets=True,
        has_wifi=True,
        has_food=True,
        is_open_late=False,
        is_crowded=True,
        reviews=(
            _review("2", 1, "Priya", 4, "Great coffee, a bit loud."),
            _review("2", 2, "Sam", 3, "Hard to find a seat at noon."),
            _review("2", 3, "Lee", 4, "Good for group work."),
        ),
    ),
    Place(
        id="3",
        name="Botanic Garden Benches",
        type=PlaceType.outdoor,
        description="Shaded benches between the greenhouses. Best on dry afternoons.",
        image="https://picsum.photos/800/600?random=3",
        noise_level=NoiseLevel.moderate,
    ),
    Place(
        id="4",
        name="Engineering Quiet Room",
        type=PlaceType.classroom,
        description="An unused lecture room kept open for individual study. Phones off.",
        image="https://picsum.photos/800/600?random=4",
        rating=5.0,
        review_count=1,
        noise_level=NoiseLevel.silent,
        has_outlets=True,
        has_wifi=True,
        has_food=False,
        is_open_late=True,
        reviews=(_review("4", 1, "Ava", 5, "Nobody talks in here. Perfect."),),
    ),
    Place(
        id="5",
        name="Student Union Lounge",
        type=PlaceType.lounge,
        description="Sofas and beanbags above the food court, open until midnight.",
        image="https://picsum.photos/800/600?random=5",
        rating=3.5,
        review_count=2,
        noise_level=NoiseLevel.moderate,
        has_outlets=True,
        has_wifi=True,
        has_food=True,
        is_open_late=True,
        reviews=(
            _review("5", 1, "Noah", 3, "Comfy but people chat a lot."),
            _review("5", 2, "Zoe", 4, "Late night snacks downstairs."),
        ),
    ),
    Place(
        id="6",
        name="Science Library Reading Room",
        type=PlaceType.library,
        description="High ceilings, long oak tables and strict silence.",
        image="https://picsum.photos/800/600?random=6",
        rating=4.0,
        review_count=1,
        noise_level=NoiseLevel.silent,
        has_outlets=False,
        has_wifi=True,
        has_food=False,
        is_open_late=False,
        reviews=(_review("6", 1, "Omar", 4, "Beautiful room, few outlets."),),
    ),
)
