"""Domain models for the itinerary engine.

Pydantic models for catalog locations and transportation legs, assembled
itineraries, route search records, search parameters, and validation results.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator


# --- Enums ---


class LocationType(str, Enum):
    """Kinds of catalog location."""

    AIRPORT = "AIRPORT"
    CITY_POINT = "CITY_POINT"


class LegKind(str, Enum):
    """Transportation leg kind. Closed set: rules match on both variants."""

    FLIGHT = "FLIGHT"
    OTHER = "OTHER"  # Bus, train, taxi, transfer...


class ErrorCode(str, Enum):
    """Stable machine-readable validation codes."""

    # Itinerary structure
    FLIGHT_REQUIREMENT = "FLIGHT_REQUIREMENT"
    TRANSPORTATION_COUNT = "TRANSPORTATION_COUNT"
    MULTIPLE_BEFORE_TRANSFERS = "MULTIPLE_BEFORE_TRANSFERS"
    INVALID_BEFORE_TRANSFER_TYPE = "INVALID_BEFORE_TRANSFER_TYPE"
    MULTIPLE_AFTER_TRANSFERS = "MULTIPLE_AFTER_TRANSFERS"
    INVALID_AFTER_TRANSFER_TYPE = "INVALID_AFTER_TRANSFER_TYPE"
    INVALID_CONNECTION = "INVALID_CONNECTION"
    # Search parameters
    ORIGIN_REQUIRED = "ORIGIN_REQUIRED"
    DESTINATION_REQUIRED = "DESTINATION_REQUIRED"
    SAME_LOCATION = "SAME_LOCATION"
    INVALID_LOCATION_ID = "INVALID_LOCATION_ID"
    # A rule crashed instead of returning a verdict
    RULE_EXECUTION = "RULE_EXECUTION"


# --- Catalog Models ---


class Location(BaseModel):
    """A catalog location (airport or city point)."""

    id: int
    name: str
    type: LocationType
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    city: str = ""
    country: str = ""

    model_config = {"frozen": True}

    @field_validator("type", mode="before")
    @classmethod
    def uppercase_type(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class TransportationLeg(BaseModel):
    """A single point-to-point transportation leg."""

    id: int
    origin_location_id: int = Field(alias="originLocationId")
    destination_location_id: int = Field(alias="destinationLocationId")
    transportation_type: LegKind = Field(alias="transportationType")
    origin_location_name: str = Field(default="", alias="originLocationName")
    destination_location_name: str = Field(default="", alias="destinationLocationName")
    duration: float = Field(default=0.0, ge=0)
    price: float = Field(default=0.0, ge=0)

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("transportation_type", mode="before")
    @classmethod
    def uppercase_kind(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    @property
    def is_flight(self) -> bool:
        return self.transportation_type == LegKind.FLIGHT

    @property
    def label(self) -> str:
        """Human-readable 'Origin -> Destination' label, falling back to ids."""
        origin = self.origin_location_name or str(self.origin_location_id)
        dest = self.destination_location_name or str(self.destination_location_id)
        return f"{origin} -> {dest}"


class Catalog(BaseModel):
    """A materialized snapshot of the catalog."""

    locations: list[Location] = Field(default_factory=list)
    legs: list[TransportationLeg] = Field(default_factory=list)

    def location(self, location_id: int) -> Optional[Location]:
        for loc in self.locations:
            if loc.id == location_id:
                return loc
        return None


# --- Itinerary Models ---


class Itinerary(BaseModel):
    """An ordered sequence of legs.

    The before/flight/after partition is derived from the position of the
    first FLIGHT leg; it is never stored separately.
    """

    legs: list[TransportationLeg] = Field(min_length=1)

    @property
    def flight_index(self) -> Optional[int]:
        return find_flight_index(self.legs)

    @property
    def before_flight_legs(self) -> list[TransportationLeg]:
        idx = self.flight_index
        return [] if idx is None else self.legs[:idx]

    @property
    def after_flight_legs(self) -> list[TransportationLeg]:
        idx = self.flight_index
        return [] if idx is None else self.legs[idx + 1 :]

    @property
    def flight(self) -> Optional[TransportationLeg]:
        idx = self.flight_index
        return None if idx is None else self.legs[idx]

    @property
    def before_flight(self) -> Optional[TransportationLeg]:
        before = self.before_flight_legs
        return before[0] if len(before) == 1 else None

    @property
    def after_flight(self) -> Optional[TransportationLeg]:
        after = self.after_flight_legs
        return after[0] if len(after) == 1 else None

    @property
    def origin_location_id(self) -> int:
        return self.legs[0].origin_location_id

    @property
    def destination_location_id(self) -> int:
        return self.legs[-1].destination_location_id


def find_flight_index(legs: list[TransportationLeg]) -> Optional[int]:
    """Index of the first FLIGHT leg, or None."""
    for i, leg in enumerate(legs):
        if leg.transportation_type == LegKind.FLIGHT:
            return i
    return None


class RouteOption(BaseModel):
    """A route search record: before/flight/after parts plus aggregates."""

    before_flight: Optional[TransportationLeg] = Field(default=None, alias="beforeFlight")
    flight: TransportationLeg
    after_flight: Optional[TransportationLeg] = Field(default=None, alias="afterFlight")
    total_stops: int = Field(default=0, ge=0, alias="totalStops")
    total_duration: float = Field(default=0.0, alias="totalDuration")
    total_price: float = Field(default=0.0, alias="totalPrice")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_legs(cls, legs: list[TransportationLeg]) -> "RouteOption":
        """Split an already-validated leg sequence and aggregate it."""
        itinerary = Itinerary(legs=legs)
        if itinerary.flight is None:
            raise ValueError("Cannot build a route option without a flight leg")
        return cls(
            before_flight=itinerary.before_flight,
            flight=itinerary.flight,
            after_flight=itinerary.after_flight,
            total_stops=len(legs) - 1,
            total_duration=sum(leg.duration for leg in legs),
            total_price=sum(leg.price for leg in legs),
        )

    @property
    def legs(self) -> list[TransportationLeg]:
        """The ordered leg sequence, skipping absent before/after parts."""
        return [
            leg
            for leg in (self.before_flight, self.flight, self.after_flight)
            if leg is not None
        ]


class SearchParameters(BaseModel):
    """Raw route search input, as typed by the user."""

    origin_location_id: Optional[Union[int, str]] = Field(default=None, alias="originLocationId")
    destination_location_id: Optional[Union[int, str]] = Field(
        default=None, alias="destinationLocationId"
    )

    model_config = {"populate_by_name": True}


# --- Result Models ---


class ValidationError(BaseModel):
    """A single violated rule."""

    code: ErrorCode
    message: str
    rule_id: str = ""

    model_config = {"frozen": True}


class ValidationReport(BaseModel):
    """All violations found for one leg sequence."""

    legs: list[TransportationLeg] = Field(default_factory=list)
    errors: list[ValidationError] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def codes(self) -> set[ErrorCode]:
        return {e.code for e in self.errors}

    @property
    def error_count(self) -> int:
        return len(self.errors)
