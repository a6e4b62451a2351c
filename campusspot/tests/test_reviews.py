from __future__ import annotations

from campusspot.catalog.models import NoiseLevel, Place, PlaceType
from campusspot.catalog.reviews import add_review, round_half_up


def _place(place_id: str = "p1", name: str = "Central Library", **kwargs) -> Place:
    defaults = {
        "type": PlaceType.library,
        "noise_level": NoiseLevel.quiet,
        "has_outlets": True,
    }
    defaults.update(kwargs)
    return Place(id=place_id, name=name, **defaults)


def _target(catalog, place_id="p1"):
    return next(p for p in catalog if p.id == place_id)


class TestRoundHalfUp:
    def test_rounds_half_up(self):
        assert round_half_up(2.25) == 2.3
        assert round_half_up(2.35) == 2.4

    def test_repeating_decimal(self):
        assert round_half_up(11 / 3) == 3.7
        assert round_half_up(10 / 3) == 3.3

    def test_whole_number(self):
        assert round_half_up(3.0) == 3.0


def test_two_reviews_average():
    catalog = (_place(),)

    catalog = add_review(catalog, "p1", 4, "Nice and quiet")
    catalog = add_review(catalog, "p1", 2, "Too cold")

    place = _target(catalog)
    assert place.rating == 3.0
    assert place.review_count == 2
    assert [r.text for r in place.reviews] == ["Nice and quiet", "Too cold"]
    assert [r.rating for r in place.reviews] == [4, 2]


def test_rating_matches_mean_after_every_review():
    catalog = (_place(),)
    ratings = [5, 4, 4, 1, 3, 5, 2, 2]

    for i, rating in enumerate(ratings, start=1):
        catalog = add_review(catalog, "p1", rating, f"review {i}")
        place = _target(catalog)
        expected = round_half_up(sum(ratings[:i]) / i, 1)
        assert place.rating == expected
        assert place.review_count == len(place.reviews) == i


def test_exact_half_rounds_up():
    catalog = (_place(),)
    for rating in (2, 2, 3, 2):  # mean 2.25
        catalog = add_review(catalog, "p1", rating, "ok")
    assert _target(catalog).rating == 2.3


def test_out_of_range_ratings_are_clamped():
    catalog = add_review((_place(),), "p1", 9, "amazing")
    assert _target(catalog).reviews[-1].rating == 5

    catalog = add_review(catalog, "p1", 0, "awful")
    assert _target(catalog).reviews[-1].rating == 1
    assert _target(catalog).rating == 3.0


def test_unknown_place_is_a_no_op():
    catalog = (_place("p1"), _place("p2", name="Other"))
    result = add_review(catalog, "missing", 5, "hello")
    assert result == catalog
    assert all(a is b for a, b in zip(result, catalog))


def test_other_places_are_untouched():
    other = _place("p2", name="Other")
    catalog = (_place("p1"), other)
    result = add_review(catalog, "p1", 5, "great")
    assert result[1] is other
    assert result[0] is not catalog[0]
    assert catalog[0].review_count == 0


def test_review_fields():
    catalog = add_review((_place(),), "p1", 4, "Lovely", user_name="Maya", now=1_700_000_000_000)
    review = _target(catalog).reviews[0]
    assert review.place_id == "p1"
    assert review.user_name == "Maya"
    assert review.timestamp == 1_700_000_000_000
    assert review.id


def test_review_ids_unique_and_timestamps_non_decreasing():
    catalog = (_place(),)
    for i in range(20):
        catalog = add_review(catalog, "p1", 3, f"r{i}")
    reviews = _target(catalog).reviews
    assert len({r.id for r in reviews}) == 20
    timestamps = [r.timestamp for r in reviews]
    assert timestamps == sorted(timestamps)


def test_legacy_count_without_review_bodies():
    place = _place(rating=4.0, review_count=10)
    catalog = add_review((place,), "p1", 1, "meh")
    updated = _target(catalog)
    assert updated.rating == 3.7  # (40 + 1) / 11
    assert updated.review_count == 11
    assert len(updated.reviews) == 1
