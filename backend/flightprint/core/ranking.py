from flightprint.models import Flight
from flightprint.core.airlines import is_premium
from typing import Dict, List
import re

DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?")

# Score weights
DIRECT_BONUS = 1000.0
PREMIUM_BONUS = 500.0
STOP_PENALTY = 200.0
PRICE_DIVISOR = 10.0
SEAT_BONUS = 2.0
MINUTE_PENALTY = 0.5

# Minutes assumed when a duration cannot be read
UNKNOWN_DURATION_MINUTES = 9999

DISPLAY_SORT_KEYS = ("price", "duration", "emissions")


def parse_duration_minutes(value) -> int:
    """Parse an ISO 8601 duration (PT2H30M) to minutes, 9999 when unreadable."""
    if not value or not isinstance(value, str):
        return UNKNOWN_DURATION_MINUTES
    match = DURATION_RE.search(value)
    if not match:
        return UNKNOWN_DURATION_MINUTES
    h = int(match.group(1) or 0)
    m = int(match.group(2) or 0)
    return h * 60 + m


def first_itinerary_minutes(flight: Flight) -> int:
    # Return legs are deliberately not counted
    if not flight.itineraries:
        return UNKNOWN_DURATION_MINUTES
    return parse_duration_minutes(flight.itineraries[0].duration)


def score_breakdown(flight: Flight) -> Dict[str, float]:
    """
    Per-factor contributions to the priority score.
    Higher total is better.
    """
    return {
        "direct": DIRECT_BONUS if flight.stops == 0 else 0.0,
        "premium": PREMIUM_BONUS if any(is_premium(a.code) for a in flight.airlines) else 0.0,
        "stops": -STOP_PENALTY * flight.stops,
        "price": -flight.price.grand_total / PRICE_DIVISOR,
        "seats": SEAT_BONUS * flight.number_of_bookable_seats,
        "duration": -MINUTE_PENALTY * first_itinerary_minutes(flight),
    }


def calculate_score(flight: Flight) -> float:
    return sum(score_breakdown(flight).values())


def rank_flights(flights: List[Flight]) -> List[Flight]:
    """
    Sort flights by priority score, best first.
    Equal scores keep their input order.
    """
    scores = [calculate_score(f) for f in flights]
    order = sorted(range(len(flights)), key=lambda i: (-scores[i], i))
    return [flights[i] for i in order]


def sort_for_display(flights: List[Flight], sort_by: str = "price") -> List[Flight]:
    """
    Re-sort for presentation: fewest stops first, then the chosen key.
    Flights that tie on both keep their ranked order.
    """
    if sort_by == "price":
        metric = lambda f: f.price.total
    elif sort_by == "duration":
        metric = first_itinerary_minutes
    elif sort_by == "emissions":
        metric = lambda f: f.carbon_emissions.weight
    else:
        raise ValueError(f"Unknown sort key: {sort_by!r} (expected one of {', '.join(DISPLAY_SORT_KEYS)})")
    return sorted(flights, key=lambda f: (f.stops, metric(f)))
