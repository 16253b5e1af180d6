"""
Flight search orchestration: validate, fetch, normalize, rank, cap.
"""
from dataclasses import dataclass
from datetime import date, datetime
import logging
from typing import Callable, List, Optional

from flightprint.config import settings
from flightprint.core.errors import (
    InvalidAirportCode,
    InvalidDateFormat,
    InvalidPassengerCount,
    InvalidReturnDate,
    InvalidTravelClass,
    PastDepartureDate,
)
from flightprint.core.ranking import DISPLAY_SORT_KEYS, rank_flights, sort_for_display
from flightprint.models import FlightSearchResult, TravelClass
from flightprint.skills import search_offers
from flightprint.skills.normalize_offers import normalize_offers

logger = logging.getLogger(__name__)

MIN_ADULTS = 1
MAX_ADULTS = 9


@dataclass(frozen=True)
class SearchQuery:
    origin: str
    destination: str
    departure_date: date
    return_date: Optional[date]
    adults: int
    travel_class: TravelClass


def _is_airport_code(value) -> bool:
    return isinstance(value, str) and len(value) == 3 and value.isascii() and value.isalpha()


def _parse_date(value, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidDateFormat(f"Invalid {field} format. Use YYYY-MM-DD")


def validate_search_request(origin, destination, departure_date, return_date=None,
                            adults=1, travel_class="ECONOMY",
                            today: Optional[date] = None) -> SearchQuery:
    """
    Check a search request and return it normalized.
    Raises a SearchValidationError subclass on the first problem found.
    """
    if not origin or not destination:
        raise InvalidAirportCode("Origin and destination are required")
    if not _is_airport_code(origin) or not _is_airport_code(destination):
        raise InvalidAirportCode("Invalid airport codes. Please use 3-letter IATA codes (e.g., JFK, LAX)")

    if not departure_date:
        raise InvalidDateFormat("Departure date is required")
    depart = _parse_date(departure_date, "departure date")
    today = today or date.today()
    if depart < today:
        raise PastDepartureDate("Departure date cannot be in the past")

    ret = None
    if return_date:
        ret = _parse_date(return_date, "return date")
        if ret < depart:
            raise InvalidReturnDate("Return date must be on or after departure date")

    try:
        adults = int(adults)
    except (TypeError, ValueError):
        raise InvalidPassengerCount(f"Adults must be between {MIN_ADULTS} and {MAX_ADULTS}")
    if not MIN_ADULTS <= adults <= MAX_ADULTS:
        raise InvalidPassengerCount(f"Adults must be between {MIN_ADULTS} and {MAX_ADULTS}")

    try:
        cabin = TravelClass(str(travel_class or "ECONOMY").strip().upper())
    except ValueError:
        allowed = ", ".join(c.value for c in TravelClass)
        raise InvalidTravelClass(f"Invalid travel class {travel_class!r}. Use one of: {allowed}")

    return SearchQuery(
        origin=origin.upper(),
        destination=destination.upper(),
        departure_date=depart,
        return_date=ret,
        adults=adults,
        travel_class=cabin,
    )


def search_flights(origin, destination, departure_date, return_date=None, adults=1,
                   travel_class="ECONOMY", sort_by: Optional[str] = None,
                   provider: Optional[Callable[[SearchQuery], List[dict]]] = None,
                   today: Optional[date] = None) -> FlightSearchResult:
    """
    Run a full search.

    `provider` takes the validated SearchQuery and returns raw Amadeus offers;
    it defaults to the Amadeus SDK. ProviderError from it propagates.
    """
    query = validate_search_request(origin, destination, departure_date, return_date,
                                    adults, travel_class, today=today)
    if sort_by is not None and sort_by not in DISPLAY_SORT_KEYS:
        raise ValueError(f"Unknown sort key: {sort_by!r}")

    provider = provider or search_offers.fetch_flight_offers
    raw_offers = provider(query)
    logger.info(f"Provider returned {len(raw_offers)} raw offers for {query.origin}->{query.destination}")

    flights, errors = normalize_offers(raw_offers, query.origin, query.destination, query.departure_date)
    if errors:
        logger.info(f"Dropped {len(errors)} malformed offers")

    ranked = rank_flights(flights)
    top = ranked[:settings.RESULT_LIMIT]
    if sort_by:
        top = sort_for_display(top, sort_by)

    return FlightSearchResult(flights=top, total_found=len(flights), skipped=len(errors))
