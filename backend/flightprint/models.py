from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import date, datetime
from enum import Enum


class TravelClass(str, Enum):
    ECONOMY = "ECONOMY"
    PREMIUM_ECONOMY = "PREMIUM_ECONOMY"
    BUSINESS = "BUSINESS"
    FIRST = "FIRST"


class FlightModel(BaseModel):
    """Base for the canonical flight types: immutable, camelCase on the wire."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class SegmentEndpoint(FlightModel):
    iata_code: str
    terminal: Optional[str] = None  # e.g. "4"
    at: datetime


class Layover(FlightModel):
    airport: str
    duration_minutes: int


class Segment(FlightModel):
    departure: SegmentEndpoint
    arrival: SegmentEndpoint
    carrier_code: str
    carrier_name: str
    flight_number: str = ""
    aircraft: Optional[str] = None  # e.g. "788"
    duration: Optional[str] = None  # ISO 8601, e.g. "PT5H30M"
    number_of_stops: int = Field(default=0, ge=0)  # technical stops, no plane change

    @model_validator(mode="after")
    def check_times(self):
        dep, arr = self.departure.at, self.arrival.at
        if (dep.tzinfo is None) != (arr.tzinfo is None):
            raise ValueError("departure and arrival mix naive and offset timestamps")
        # Naive times are airport-local; only offset times are comparable
        if dep.tzinfo is not None and arr < dep:
            raise ValueError(f"arrival {arr.isoformat()} is before departure {dep.isoformat()}")
        return self


class Itinerary(FlightModel):
    duration: Optional[str] = None
    segments: List[Segment] = Field(min_length=1)

    @model_validator(mode="after")
    def check_connections(self):
        for current, following in zip(self.segments, self.segments[1:]):
            if (current.arrival.at.tzinfo is None) != (following.departure.at.tzinfo is None):
                raise ValueError(
                    f"connection at {current.arrival.iata_code} mixes naive and offset timestamps"
                )
        return self

    @computed_field
    @property
    def layovers(self) -> List[Layover]:
        """Ground time between consecutive segments; negative gaps are left out."""
        result = []
        for current, following in zip(self.segments, self.segments[1:]):
            gap = following.departure.at - current.arrival.at
            minutes = int(gap.total_seconds() // 60)
            if minutes >= 0:
                result.append(Layover(airport=current.arrival.iata_code, duration_minutes=minutes))
        return result


class Price(FlightModel):
    currency: str = "USD"
    total: float = Field(ge=0)
    base: float = 0.0
    grand_total: float = Field(default=0.0, ge=0)


class Airline(FlightModel):
    code: str
    name: str


class CarbonEmissions(FlightModel):
    weight: float = Field(ge=0)  # kg CO2 per passenger
    weight_unit: str = "KG"
    cabin: TravelClass = TravelClass.ECONOMY


class EcoInsights(FlightModel):
    trees_needed: int
    car_km_equivalent: int
    home_energy_days: float


class Flight(FlightModel):
    flight_offer_id: str
    origin: str
    destination: str
    departure_date: date
    itineraries: List[Itinerary] = Field(min_length=1, max_length=2)
    price: Price
    travel_class: TravelClass = TravelClass.ECONOMY
    stops: int = Field(ge=0)
    airlines: List[Airline]
    carbon_emissions: CarbonEmissions
    eco_insights: EcoInsights
    validating_airline_codes: List[str] = []
    number_of_bookable_seats: int = Field(default=0, ge=0)


class FlightSearchResult(BaseModel):
    flights: List[Flight]
    total_found: int
    skipped: int = 0
