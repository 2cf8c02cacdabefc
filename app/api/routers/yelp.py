import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request

from app.core.business_aggregator import BusinessAggregator
from app.core.errors import ConfigurationError, InvalidLocationError, ProviderError
from app.core.schemas import AggregatedBusinesses, TravelerContext
from app.core.yelp_cache import build_cache_key
from app.core.yelp_service import YelpService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/yelp", tags=["yelp"])


def get_yelp_service() -> YelpService:
    try:
        return YelpService()
    except ConfigurationError as e:
        logger.error(str(e))
        raise HTTPException(status_code=500, detail=str(e))


def normalize_location(location: str) -> str:
    """
    Keep at most 'City, Region'; Yelp matches long location strings poorly.

    Raises:
        InvalidLocationError: if nothing but commas and whitespace is left
    """
    parts = [part.strip() for part in location.split(",") if part.strip()]
    if not parts:
        raise InvalidLocationError("location parameter is required")
    return ", ".join(parts[:2])


def parse_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_ages(value: str | None) -> list[int]:
    """Comma-separated ages; blanks, non-numbers and zeros are dropped."""
    ages = []
    for item in parse_csv(value):
        try:
            age = int(item)
        except ValueError:
            continue
        if age:
            ages.append(age)
    return ages


@router.get("/search", response_model=AggregatedBusinesses)
def search_businesses(
    request: Request,
    location: str = Query(..., min_length=1, max_length=200),
    term: str = Query("", max_length=120),
    categories: str = Query("", max_length=200),
    interests: str | None = Query(None, description="Comma-separated interests"),
    traveling_with_kids: bool = Query(False, alias="travelingWithKids"),
    kids_ages: str | None = Query(None, alias="kidsAges"),
    companion_ages: str | None = Query(None, alias="companionAges"),
    user_age: str | None = Query(None, alias="userAge"),
    yelp: YelpService = Depends(get_yelp_service),
) -> AggregatedBusinesses:
    """Return tagged, ranked Yelp businesses for a destination and traveler profile."""
    try:
        trimmed = normalize_location(location)
    except InvalidLocationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    user_ages = parse_ages(user_age)
    traveler = TravelerContext(
        location=trimmed,
        term=term,
        categories=categories,
        interests=tuple(parse_csv(interests)),
        user_age=user_ages[0] if user_ages else None,
        companion_ages=tuple(parse_ages(companion_ages)),
        traveling_with_kids=traveling_with_kids,
        kids_ages=tuple(parse_ages(kids_ages)),
    )

    aggregator = BusinessAggregator(yelp, request.app.state.yelp_cache)
    try:
        return aggregator.aggregate(traveler)
    except ProviderError as e:
        logger.error(f"Yelp search failed for '{trimmed}': {e}")
        raise HTTPException(status_code=502, detail=f"Failed to fetch from Yelp: {e}")


@router.get("/business/{business_id}")
def get_business(
    request: Request,
    business_id: str = Path(
        ...,
        min_length=1,
        max_length=100,
        pattern="^[a-zA-Z0-9_-]+$",
        description="Yelp business ID",
    ),
    yelp: YelpService = Depends(get_yelp_service),
) -> dict:
    cache = request.app.state.yelp_cache
    key = build_cache_key("business", business_id)

    cached = cache.get(key)
    if cached is not None:
        return cached

    try:
        details = yelp.get_business(business_id)
    except ProviderError as e:
        if e.status_code == 404:
            raise HTTPException(status_code=404, detail="Business not found")
        raise HTTPException(status_code=502, detail=f"Failed to fetch business details: {e}")

    cache.set(key, details)
    return details
