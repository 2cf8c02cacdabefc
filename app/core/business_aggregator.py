"""
Aggregate Yelp results for a traveler into one tagged, ranked list of businesses.

Several searches are issued against the same provider (context-aware primary
search, rating search, one per interest, optional family search), merged in a
fixed precedence order with duplicates dropped, tagged with coarse categories,
and sorted by a rating x popularity score.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Protocol

from app.core.errors import ProviderError
from app.core.interest_mapping import FAMILY_QUERY, lookup_interest
from app.core.schemas import AggregatedBusinesses, BusinessRecord, TravelerContext
from app.core.yelp_cache import build_cache_key

logger = logging.getLogger(__name__)

PRIMARY_LIMIT = 50
RATING_LIMIT = 50
INTEREST_LIMIT = 30
FAMILY_LIMIT = 30
MAX_INTEREST_QUERIES = 4
DEFAULT_AVERAGE_AGE = 30

TAG_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    (
        "Food",
        re.compile(
            r"restaurant|food|cafe|coffee|dining|bar|bakery|dessert|pizza|burger|sushi|mexican"
            r"|italian|chinese|thai|indian|breakfast|brunch|lunch|dinner|eatery|bistro|grill"
            r"|deli|sandwich",
            re.IGNORECASE,
        ),
    ),
    (
        "Activities",
        re.compile(
            r"activity|tour|entertainment|recreation|sport|adventure|museum|gallery|theater"
            r"|cinema|bowling|arcade|escape|game|park|zoo|aquarium|attraction|sightseeing"
            r"|hiking|biking|kayak|boat",
            re.IGNORECASE,
        ),
    ),
    (
        "Nightlife",
        re.compile(
            r"nightlife|bar|club|lounge|pub|cocktail|wine|beer|brewery|distillery|dance|dj"
            r"|live music|karaoke",
            re.IGNORECASE,
        ),
    ),
    (
        "Culture",
        re.compile(
            r"landmark|scenic|viewpoint|park|museum|gallery|historic|architecture|monument"
            r"|observation|tower|bridge|garden|botanical|beach|waterfront|overlook|vista",
            re.IGNORECASE,
        ),
    ),
)


class BusinessSearchClient(Protocol):
    def search_businesses(
        self,
        location: str,
        term: str = "",
        categories: str = "",
        limit: int = 50,
        sort_by: str = "best_match",
    ) -> dict[str, Any]: ...


class ResponseCache(Protocol):
    def get(self, key: str) -> Any | None: ...

    def set(self, key: str, data: Any, ttl_seconds: int | None = None) -> None: ...


@dataclass
class SubQueryResult:
    """Outcome of one optional sub-query: its businesses, or the reason it failed."""

    label: str
    businesses: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class SearchContext:
    search_term: str
    context_terms: str
    attributes: tuple[str, ...]


def build_search_context(traveler: TravelerContext) -> SearchContext:
    """
    Derive the search phrase from the traveler's group and ages.

    Kid-related attributes only apply when traveling with kids; a young group with
    no explicit term searches "trendy popular", an older group adds "quiet".
    """
    search_term = traveler.term.strip()
    attributes: list[str] = []

    if traveler.traveling_with_kids:
        attributes.append("family-friendly")
        if any(age < 5 for age in traveler.kids_ages):
            attributes.append("kid-friendly")
        if any(5 <= age <= 12 for age in traveler.kids_ages):
            attributes.append("good for kids")

    if traveler.group_size >= 6:
        attributes.append("good for groups")

    ages = [age for age in [traveler.user_age or DEFAULT_AVERAGE_AGE, *traveler.companion_ages] if age]
    avg_age = sum(ages) / len(ages) if ages else DEFAULT_AVERAGE_AGE

    if avg_age < 25:
        if not search_term:
            search_term = "trendy popular"
    elif avg_age > 55:
        attributes.append("quiet")

    if attributes:
        context_terms = f"{search_term} {' '.join(attributes)}".strip()
    else:
        context_terms = search_term or "restaurants"

    return SearchContext(search_term, context_terms, tuple(attributes))


def assign_custom_tags(business: BusinessRecord) -> list[str]:
    """Always 'All', plus every keyword group matching the category titles/aliases."""
    titles = [c.title.lower() for c in business.categories]
    aliases = [c.alias.lower() for c in business.categories]
    haystack = " ".join(titles + aliases)

    tags = ["All"]
    for tag, pattern in TAG_PATTERNS:
        if pattern.search(haystack):
            tags.append(tag)
    return tags


def business_score(business: BusinessRecord) -> float:
    """rating * log10(review_count + 1); a missing or zero review count counts as 1."""
    rating = business.rating or 0
    return rating * math.log10((business.review_count or 1) + 1)


def merge_unique(
    result_lists: list[list[dict[str, Any]]],
) -> list[dict[str, Any]]:
    """Concatenate in order, keeping the first occurrence of each business id."""
    seen_ids: set[str] = set()
    merged: list[dict[str, Any]] = []
    for results in result_lists:
        for business in results:
            business_id = business.get("id")
            if not business_id or business_id in seen_ids:
                continue
            seen_ids.add(business_id)
            merged.append(business)
    return merged


class BusinessAggregator:
    """Fans out Yelp searches for a traveler and returns one ranked, deduplicated list."""

    def __init__(self, client: BusinessSearchClient, cache: ResponseCache | None = None):
        self.client = client
        self.cache = cache

    def cache_key(self, traveler: TravelerContext, search: SearchContext) -> str:
        return build_cache_key(
            traveler.location,
            search.context_terms,
            traveler.categories,
            traveler.traveling_with_kids,
            traveler.group_size,
        )

    def _optional_search(self, label: str, **params: Any) -> SubQueryResult:
        try:
            data = self.client.search_businesses(**params)
        except ProviderError as e:
            logger.warning(f"{label} search failed, continuing: {e}")
            return SubQueryResult(label, error=str(e))
        return SubQueryResult(label, businesses=data.get("businesses") or [])

    def _interest_searches(self, traveler: TravelerContext) -> list[SubQueryResult]:
        results = []
        for interest in traveler.interests[:MAX_INTEREST_QUERIES]:
            query = lookup_interest(interest)
            results.append(
                self._optional_search(
                    f"Interest '{interest}'",
                    location=traveler.location,
                    term=query.term,
                    categories=query.categories_param,
                    limit=INTEREST_LIMIT,
                    sort_by="best_match",
                )
            )
        return results

    def _family_search(self, traveler: TravelerContext) -> SubQueryResult:
        return self._optional_search(
            "Family",
            location=traveler.location,
            term=FAMILY_QUERY.term,
            categories=FAMILY_QUERY.categories_param,
            limit=FAMILY_LIMIT,
            sort_by="best_match",
        )

    def aggregate(self, traveler: TravelerContext) -> AggregatedBusinesses:
        """
        Build the ranked business list for a traveler.

        Raises:
            ProviderError: if the primary or rating search fails
        """
        search = build_search_context(traveler)
        key = self.cache_key(traveler, search)

        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                return AggregatedBusinesses.model_validate(cached)

        primary = self.client.search_businesses(
            location=traveler.location,
            term=search.context_terms,
            categories=traveler.categories,
            limit=PRIMARY_LIMIT,
            sort_by="best_match",
        )
        by_rating = self.client.search_businesses(
            location=traveler.location,
            term=search.search_term or "best",
            limit=RATING_LIMIT,
            sort_by="rating",
        )

        sub_queries = self._interest_searches(traveler)
        if traveler.traveling_with_kids:
            sub_queries.append(self._family_search(traveler))

        merged = merge_unique(
            [primary.get("businesses") or [], by_rating.get("businesses") or []]
            + [result.businesses for result in sub_queries if result.ok]
        )

        businesses = []
        for raw in merged:
            business = BusinessRecord.model_validate(raw)
            business.custom_tags = assign_custom_tags(business)
            businesses.append(business)
        businesses.sort(key=business_score, reverse=True)

        result = AggregatedBusinesses(
            businesses=businesses,
            total=len(businesses),
            region=primary.get("region"),
        )

        failed = [r.label for r in sub_queries if not r.ok]
        logger.info(
            f"Aggregated {result.total} businesses for '{traveler.location}' "
            f"(terms='{search.context_terms}', failed sub-queries={failed})"
        )

        if self.cache is not None:
            self.cache.set(key, result.model_dump(mode="json"))
        return result
