"""
Static mapping from user interest selections to Yelp search terms and categories.
"""

from types import MappingProxyType
from typing import NamedTuple


class InterestQuery(NamedTuple):
    terms: tuple[str, ...]
    categories: tuple[str, ...]

    @property
    def term(self) -> str:
        """The term actually sent to Yelp (the first one)."""
        return self.terms[0] if self.terms else ""

    @property
    def categories_param(self) -> str:
        return ",".join(self.categories)


INTEREST_MAPPING = MappingProxyType(
    {
        # Dining
        "Fine Dining": InterestQuery(("fine dining", "upscale restaurants"), ("restaurants",)),
        "Street Food": InterestQuery(
            ("street food", "food trucks", "street vendor"), ("foodtrucks", "street_vendors")
        ),
        "Coffee": InterestQuery(("coffee shops", "cafes"), ("coffee", "cafes")),
        # Outdoors
        "Hiking": InterestQuery(("hiking trails", "outdoor adventure"), ("hiking", "parks", "outdoor")),
        "Nature": InterestQuery(
            ("parks", "nature", "natural attractions"), ("parks", "hiking", "outdoors")
        ),
        "Photography": InterestQuery(
            ("scenic views", "landmarks", "viewpoints"), ("landmarks", "parks")
        ),
        # Culture
        "Museums": InterestQuery(("museums", "art galleries"), ("museums", "galleries")),
        "History": InterestQuery(
            ("historical sites", "historical tours", "heritage"), ("landmarks", "tours")
        ),
        "Architecture": InterestQuery(
            ("architecture", "architectural tours", "buildings"), ("landmarks", "tours")
        ),
        # Nightlife
        "Nightlife": InterestQuery(
            ("bars", "nightclubs", "cocktail bars"), ("nightlife", "bars", "clubs")
        ),
        "Live Music": InterestQuery(
            ("live music", "music venues", "concerts"), ("musicvenues", "nightlife")
        ),
        # Shopping
        "Shopping": InterestQuery(("shopping", "boutiques", "shopping centers"), ("shopping", "malls")),
    }
)

FAMILY_QUERY = InterestQuery(
    ("family friendly kids activities",),
    ("kids_activities", "amusementparks", "zoos", "aquariums", "playgrounds"),
)


def lookup_interest(interest: str) -> InterestQuery:
    """
    Map an interest label to its Yelp query.

    Unknown interests fall back to the lower-cased label as the term, no categories.
    """
    query = INTEREST_MAPPING.get(interest)
    if query is not None:
        return query
    return InterestQuery((interest.lower(),), ())
