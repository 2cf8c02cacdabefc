"""
Rule-based recommendation reasons for the top businesses of a search.
"""

from app.core.schemas import Recommendation, RecommendationRequest

MAX_RECOMMENDATIONS = 5


def recommend(request: RecommendationRequest) -> list[Recommendation]:
    """Explain why each of the first few businesses suits this traveler and group."""
    companion_interests = {i for c in request.companions for i in c.interests}
    shared_interests = [i for i in request.interests if i in companion_interests]

    recommendations = []
    for business in request.businesses[:MAX_RECOMMENDATIONS]:
        titles = [c.title.lower() for c in business.categories]
        matched = [i for i in request.interests if any(i.lower() in t for t in titles)]

        if matched:
            reason = f"Perfect for your interest in {matched[0]}"
        else:
            reason = f"Highly rated with {business.review_count or 0} reviews"

        if request.traveling_with_kids and request.kids_ages:
            reason += " and family-friendly"

        if request.companions:
            if shared_interests:
                reason += " - everyone will enjoy it"
            else:
                reason += " - great for your group"

        recommendations.append(
            Recommendation(business_id=business.id, business_name=business.name, reason=reason)
        )

    return recommendations
