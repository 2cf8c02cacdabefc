from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Provider (Yelp) Business Schemas
# =============================================================================


class Category(BaseModel):
    alias: str = ""
    title: str = ""

    @field_validator("alias", "title", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return "" if value is None else value


class Coordinates(BaseModel):
    latitude: float | None = None
    longitude: float | None = None

    @property
    def is_complete(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class BusinessRecord(BaseModel):
    """
    One point of interest as returned by the Yelp business search.

    Unknown provider fields are kept so the record can be handed back to the
    client unchanged.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    rating: float | None = Field(None, description="Yelp rating (0-5)")
    review_count: int | None = Field(None, ge=0)
    categories: list[Category] = Field(default_factory=list)
    price: str | None = Field(None, description="Price tier, '$' to '$$$$'")
    coordinates: Coordinates | None = None
    image_url: str | None = None
    phone: str | None = None
    url: str | None = None
    location: dict | None = Field(None, description="Yelp display address block")
    custom_tags: list[str] = Field(
        default_factory=list, description="Coarse tags assigned during aggregation"
    )

    @field_validator("name", mode="before")
    @classmethod
    def name_none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("categories", "custom_tags", mode="before")
    @classmethod
    def list_none_as_empty(cls, value):
        return [] if value is None else value

    def has_coordinates(self) -> bool:
        return self.coordinates is not None and self.coordinates.is_complete

    def display_address(self) -> str | None:
        if not self.location:
            return None
        lines = self.location.get("display_address") or []
        if lines:
            return ", ".join(lines)
        return self.location.get("address1")


class AggregatedBusinesses(BaseModel):
    businesses: list[BusinessRecord] = Field(default_factory=list)
    total: int = 0
    region: dict | None = None


# =============================================================================
# Traveler Context
# =============================================================================


class TravelerContext(BaseModel):
    """Per-request traveler preferences used to steer the Yelp searches."""

    model_config = ConfigDict(frozen=True)

    location: str
    term: str = ""
    categories: str = ""
    interests: tuple[str, ...] = ()
    user_age: int | None = None
    companion_ages: tuple[int, ...] = ()
    traveling_with_kids: bool = False
    kids_ages: tuple[int, ...] = ()

    @field_validator("location")
    @classmethod
    def location_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("location must not be empty")
        return value

    @property
    def group_size(self) -> int:
        # Derived server-side; a client supplied group size is never trusted.
        return 1 + len(self.companion_ages)


# =============================================================================
# Itinerary Schemas
# =============================================================================


class Activity(BaseModel):
    id: str
    time: str = Field(..., description="Local time label, e.g., '9:00 AM'")
    title: str
    location: str | None = None
    address: str | None = None
    business_id: str | None = Field(None, description="Yelp business ID")
    rating: float | None = None
    price: str | None = None
    image_url: str | None = None
    categories: list[str] = Field(default_factory=list)
    completed: bool = False
    travel_time_from_previous_minutes: int | None = Field(
        None, ge=1, le=120, description="Walking minutes from the previous activity"
    )
    slot_type: str


class DayPlan(BaseModel):
    date: str = Field(..., description="Day label, e.g., 'Day 1'")
    activities: list[Activity] = Field(default_factory=list)


class ItineraryGenerateRequest(BaseModel):
    num_days: int = Field(3, ge=1, le=14)
    location: str = ""
    businesses: list[BusinessRecord] = Field(default_factory=list)


class ItineraryResponse(BaseModel):
    itinerary: list[DayPlan]


# =============================================================================
# Recommendation Schemas
# =============================================================================


class Companion(BaseModel):
    name: str = ""
    age: int | None = None
    interests: list[str] = Field(default_factory=list)


class RecommendationRequest(BaseModel):
    businesses: list[BusinessRecord]
    interests: list[str] = Field(default_factory=list)
    companions: list[Companion] = Field(default_factory=list)
    location: str | None = None
    user_age: int | None = None
    traveling_with_kids: bool = False
    kids_ages: list[int] = Field(default_factory=list)


class Recommendation(BaseModel):
    business_id: str
    business_name: str
    reason: str
