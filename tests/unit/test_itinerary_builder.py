import pytest

from app.core.business_aggregator import BusinessAggregator
from app.core.errors import NoPlacesAvailableError
from app.core.itinerary_builder import (
    bucket_places,
    categorize_place,
    generate_itinerary,
    slots_for_day,
)
from app.core.schemas import BusinessRecord, TravelerContext
from tests.fakes import FakeYelpClient, make_business


def record(business_id, **kwargs):
    return BusinessRecord.model_validate(make_business(business_id, **kwargs))


@pytest.mark.parametrize(
    "categories,price,expected",
    [
        ((("coffee", "Coffee & Tea"),), None, "breakfast"),
        ((("bakeries", "Bakeries"),), None, "breakfast"),
        ((("museums", "Museums"),), None, "morning"),
        ((("parks", "Parks"),), None, "morning"),
        ((("cocktailbars", "Cocktail Bars"),), None, "evening"),
        ((("restaurants", "Restaurants"),), "$$", "lunch"),
        ((("restaurants", "Restaurants"),), "$$$", "dinner"),
        ((("restaurants", "Restaurants"),), "$$$$", "dinner"),
        ((("hair", "Hair Salons"),), None, "afternoon"),
        ((), None, "afternoon"),
        # first matching group wins
        ((("breakfast_brunch", "Breakfast & Brunch"), ("bars", "Bars")), None, "breakfast"),
    ],
)
def test_categorize_place(categories, price, expected):
    assert categorize_place(record("p", categories=categories, price=price)) == expected


def test_buckets_sorted_by_rating():
    places = [
        record("low", rating=3.0, categories=(("museums", "Museums"),)),
        record("none", rating=None, categories=(("museums", "Museums"),)),
        record("high", rating=4.9, categories=(("museums", "Museums"),)),
    ]
    assert [p.id for p in bucket_places(places)["morning"]] == ["high", "low", "none"]


def test_evening_slot_every_other_day():
    assert len(slots_for_day(0)) == 6
    assert len(slots_for_day(1)) == 5
    assert slots_for_day(2)[-1].slot_type == "evening"
    assert [s.time for s in slots_for_day(1)] == ["9:00 AM", "11:00 AM", "1:00 PM", "3:30 PM", "7:00 PM"]


def test_empty_pool_is_an_error():
    with pytest.raises(NoPlacesAvailableError):
        generate_itinerary([], 3, "Paris, France")


def _full_pool(per_bucket=5):
    kinds = {
        "cafe": ((("coffee", "Coffee & Tea"),), None),
        "museum": ((("museums", "Museums"),), None),
        "bistro": ((("restaurants", "Restaurants"),), "$"),
        "salon": ((("spas", "Day Spas"),), None),
        "steak": ((("restaurants", "Restaurants"),), "$$$"),
        "pub": ((("pubs", "Pubs"),), None),
    }
    places = []
    for kind, (categories, price) in kinds.items():
        for i in range(per_bucket):
            places.append(record(f"{kind}-{i}", categories=categories, price=price, rating=4.0 + i / 10))
    return places


def test_full_pool_fills_every_slot():
    days = generate_itinerary(_full_pool(), 3, "Paris, France")

    assert [d.date for d in days] == ["Day 1", "Day 2", "Day 3"]
    assert [len(d.activities) for d in days] == [6, 5, 6]
    first_day = days[0].activities
    assert [a.slot_type for a in first_day] == [
        "breakfast", "morning", "lunch", "afternoon", "dinner", "evening",
    ]
    # highest-rated first
    assert first_day[0].business_id == "cafe-4"
    assert days[1].activities[0].business_id == "cafe-3"
    assert all(a.completed is False for d in days for a in d.activities)


def test_no_place_is_used_twice_across_days():
    days = generate_itinerary(_full_pool(per_bucket=2), 7, "Paris, France")

    ids = [a.business_id for d in days for a in d.activities]
    assert len(ids) == len(set(ids)) == 12
    for index, day in enumerate(days):
        assert len(day.activities) <= (6 if index % 2 == 0 else 5)


def test_exhausted_bucket_falls_back():
    places = [
        record("museum", categories=(("museums", "Museums"),)),
        record("spa", categories=(("spas", "Day Spas"),)),
    ]
    day = generate_itinerary(places, 1, "Paris, France")[0]

    # breakfast is empty so it takes from afternoon first
    assert [(a.slot_type, a.business_id) for a in day.activities] == [
        ("breakfast", "spa"),
        ("morning", "museum"),
    ]


def test_dinner_and_evening_are_never_fallbacks():
    places = [record("pub", categories=(("pubs", "Pubs"),))]
    days = generate_itinerary(places, 2, "Paris, France")
    assert [(a.slot_type, a.business_id) for a in days[0].activities] == [("evening", "pub")]
    assert days[1].activities == []


def test_single_lunch_place_over_two_days():
    places = [record("bistro", categories=(("restaurants", "Restaurants"),), price="$")]

    days = generate_itinerary(places, 2, "Paris, France")

    assert len(days) == 2
    assert [a.business_id for a in days[0].activities] == ["bistro"]
    # breakfast comes first and takes it through the lunch fallback
    assert (days[0].activities[0].slot_type, days[0].activities[0].time) == ("breakfast", "9:00 AM")
    assert days[1].activities == []


def test_travel_time_between_consecutive_places():
    places = [
        record("cafe", categories=(("coffee", "Coffee"),), coordinates=(48.8566, 2.3522)),
        record("museum", categories=(("museums", "Museums"),), coordinates=(48.8606, 2.3376)),
        record("bistro", categories=(("restaurants", "Restaurants"),), coordinates=None),
        record("spa", categories=(("spas", "Spas"),), coordinates=(48.8606, 2.3376)),
        record("steak", categories=(("restaurants", "Restaurants"),), price="$$$", coordinates=(48.8606, 2.3376)),
        record("far", categories=(("pubs", "Pubs"),), coordinates=(51.5074, -0.1278)),
    ]
    activities = generate_itinerary(places, 1, "Paris, France")[0].activities
    travel = {a.business_id: a.travel_time_from_previous_minutes for a in activities}

    assert travel["cafe"] is None
    # ~1.15 km at 5 km/h with 1.2 detour
    assert travel["museum"] == 17
    assert travel["bistro"] is None
    assert travel["spa"] is None  # previous placed activity has no coordinates
    assert travel["steak"] is None  # same spot rounds to 0
    assert travel["far"] == 120


def test_aggregator_output_feeds_builder():
    client = FakeYelpClient(
        responses={
            ("restaurants", "best_match"): [
                make_business("bistro", coordinates=(48.85, 2.35)),
                make_business("louvre", categories=(("museums", "Museums"),), coordinates=(48.86, 2.33)),
            ],
            ("best", "rating"): [make_business("no-coords", categories=())],
        }
    )
    result = BusinessAggregator(client).aggregate(TravelerContext(location="Paris, France"))

    days = generate_itinerary(result.businesses, 3, "Paris, France")

    scheduled = [a.business_id for d in days for a in d.activities]
    assert sorted(scheduled) == ["bistro", "louvre", "no-coords"]
