import logging

from fastapi import APIRouter, Depends, HTTPException

from app.core.errors import NoPlacesAvailableError
from app.core.itinerary_builder import generate_itinerary
from app.core.schemas import ItineraryGenerateRequest, ItineraryResponse
from app.core.session_store import Session, require_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/itinerary", tags=["itinerary"])


@router.post("/generate", response_model=ItineraryResponse)
def generate(
    payload: ItineraryGenerateRequest,
    session: Session = Depends(require_session),
) -> ItineraryResponse:
    """
    Turn the businesses the client already fetched into a day-by-day plan.

    The client passes its cached search results so no Yelp call is made here.
    """
    try:
        days = generate_itinerary(payload.businesses, payload.num_days, payload.location)
    except NoPlacesAvailableError:
        raise HTTPException(
            status_code=400,
            detail="No places available. Search for places before generating an itinerary.",
        )

    logger.info(f"User {session.user_id} generated a {payload.num_days}-day itinerary")
    return ItineraryResponse(itinerary=days)
