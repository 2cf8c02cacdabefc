"""
Build a day-by-day itinerary from a pool of Yelp businesses.

Each place is put in exactly one time-of-day bucket by its categories, buckets
are ranked by rating, and every day's slot template is filled from the matching
bucket (falling back to afternoon, lunch, then morning). A place is used at most
once across the whole trip.
"""

import logging
from typing import NamedTuple

from app.core.errors import NoPlacesAvailableError
from app.core.geo_utils import distance_between
from app.core.schemas import Activity, BusinessRecord, DayPlan
from app.core.travel_time_utils import estimate_walking_minutes

logger = logging.getLogger(__name__)

BREAKFAST = "breakfast"
MORNING = "morning"
LUNCH = "lunch"
AFTERNOON = "afternoon"
DINNER = "dinner"
EVENING = "evening"

SLOT_TYPES = (BREAKFAST, MORNING, LUNCH, AFTERNOON, DINNER, EVENING)

# Checked in order; first match wins.
BREAKFAST_KEYWORDS = ("breakfast", "coffee", "bakery", "bakeries", "brunch")
MORNING_KEYWORDS = ("museum", "landmark", "park", "tour", "arts")
EVENING_KEYWORDS = ("bar", "nightlife", "cocktail", "pub", "lounge")
RESTAURANT_KEYWORDS = ("restaurant", "food")
UPSCALE_PRICES = ("$$$", "$$$$")

FALLBACK_ORDER = (AFTERNOON, LUNCH, MORNING)


class Slot(NamedTuple):
    time: str
    slot_type: str


DAILY_SLOTS = (
    Slot("9:00 AM", BREAKFAST),
    Slot("11:00 AM", MORNING),
    Slot("1:00 PM", LUNCH),
    Slot("3:30 PM", AFTERNOON),
    Slot("7:00 PM", DINNER),
)
EVENING_SLOT = Slot("9:00 PM", EVENING)


def slots_for_day(day_index: int) -> list[Slot]:
    """Five fixed slots, plus an evening slot on every other day starting with the first."""
    slots = list(DAILY_SLOTS)
    if day_index % 2 == 0:
        slots.append(EVENING_SLOT)
    return slots


def categorize_place(business: BusinessRecord) -> str:
    text = " ".join(f"{c.alias} {c.title}".lower() for c in business.categories)

    if any(keyword in text for keyword in BREAKFAST_KEYWORDS):
        return BREAKFAST
    if any(keyword in text for keyword in MORNING_KEYWORDS):
        return MORNING
    if any(keyword in text for keyword in EVENING_KEYWORDS):
        return EVENING
    if any(keyword in text for keyword in RESTAURANT_KEYWORDS):
        return DINNER if business.price in UPSCALE_PRICES else LUNCH
    return AFTERNOON


def bucket_places(places: list[BusinessRecord]) -> dict[str, list[BusinessRecord]]:
    """Group places by slot type, each bucket sorted by rating (highest first)."""
    buckets: dict[str, list[BusinessRecord]] = {slot_type: [] for slot_type in SLOT_TYPES}
    for place in places:
        buckets[categorize_place(place)].append(place)
    for bucket in buckets.values():
        bucket.sort(key=lambda p: p.rating or 0, reverse=True)
    return buckets


def _first_unused(bucket: list[BusinessRecord], used_ids: set[str]) -> BusinessRecord | None:
    for place in bucket:
        if place.id not in used_ids:
            return place
    return None


def pick_place(
    slot_type: str, buckets: dict[str, list[BusinessRecord]], used_ids: set[str]
) -> BusinessRecord | None:
    for candidate_type in (slot_type, *FALLBACK_ORDER):
        place = _first_unused(buckets[candidate_type], used_ids)
        if place is not None:
            return place
    return None


def build_activity(
    day_index: int,
    slot: Slot,
    place: BusinessRecord,
    location_label: str,
    previous: BusinessRecord | None,
) -> Activity:
    travel_minutes = None
    if previous is not None:
        distance_km = distance_between(previous, place)
        if distance_km is not None:
            travel_minutes = estimate_walking_minutes(distance_km)

    return Activity(
        id=f"day{day_index + 1}-{slot.slot_type}-{place.id}",
        time=slot.time,
        title=place.name,
        location=location_label or None,
        address=place.display_address(),
        business_id=place.id,
        rating=place.rating,
        price=place.price,
        image_url=place.image_url,
        categories=[c.title for c in place.categories],
        completed=False,
        travel_time_from_previous_minutes=travel_minutes,
        slot_type=slot.slot_type,
    )


def generate_itinerary(
    places: list[BusinessRecord], num_days: int, location_label: str = ""
) -> list[DayPlan]:
    """
    Partition a pool of places into a day-by-day schedule.

    Args:
        places: Candidate businesses (e.g. the aggregator's output)
        num_days: Number of days to plan
        location_label: Destination label copied onto each activity

    Returns:
        One DayPlan per day, labelled "Day 1".."Day N"

    Raises:
        NoPlacesAvailableError: if places is empty
    """
    if not places:
        raise NoPlacesAvailableError("No places available")

    buckets = bucket_places(places)
    used_ids: set[str] = set()
    days: list[DayPlan] = []

    for day_index in range(num_days):
        activities: list[Activity] = []
        previous: BusinessRecord | None = None

        for slot in slots_for_day(day_index):
            place = pick_place(slot.slot_type, buckets, used_ids)
            if place is None:
                continue
            used_ids.add(place.id)
            activities.append(build_activity(day_index, slot, place, location_label, previous))
            previous = place

        days.append(DayPlan(date=f"Day {day_index + 1}", activities=activities))

    logger.info(
        f"Generated {num_days}-day itinerary for '{location_label}': "
        f"{len(used_ids)} of {len(places)} places scheduled"
    )
    return days
