from fastapi import APIRouter, Depends

from app.core.recommendations import recommend
from app.core.schemas import Recommendation, RecommendationRequest
from app.core.session_store import Session, require_session

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.post("", response_model=list[Recommendation])
def get_recommendations(
    payload: RecommendationRequest,
    session: Session = Depends(require_session),
) -> list[Recommendation]:
    """Explain which of the given businesses best suit the traveler and why."""
    return recommend(payload)
