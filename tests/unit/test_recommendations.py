from app.core.recommendations import recommend
from app.core.schemas import RecommendationRequest
from tests.fakes import make_business


def _request(**kwargs):
    businesses = kwargs.pop(
        "businesses",
        [
            make_business("louvre", review_count=5000, categories=(("museums", "Museums"),)),
            make_business("bistro", review_count=42),
        ],
    )
    return RecommendationRequest(businesses=businesses, **kwargs)


def test_reason_mentions_matching_interest():
    recs = recommend(_request(interests=["Museums"]))
    assert recs[0].business_id == "louvre"
    assert recs[0].reason == "Perfect for your interest in Museums"
    assert recs[1].reason == "Highly rated with 42 reviews"


def test_family_and_group_suffixes():
    recs = recommend(
        _request(
            interests=["Museums"],
            traveling_with_kids=True,
            kids_ages=[6],
            companions=[{"name": "Sam", "age": 40, "interests": ["Museums"]}],
        )
    )
    assert recs[0].reason == (
        "Perfect for your interest in Museums and family-friendly - everyone will enjoy it"
    )

    recs = recommend(_request(companions=[{"name": "Sam", "interests": ["Hiking"]}]))
    assert recs[1].reason.endswith(" - great for your group")


def test_at_most_five():
    businesses = [make_business(f"b-{i}") for i in range(8)]
    assert len(recommend(_request(businesses=businesses))) == 5
