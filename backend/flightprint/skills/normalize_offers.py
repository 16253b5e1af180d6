"""
Amadeus flight-offer normalization.

Turns the raw offer dicts returned by the flight-offers search into
canonical Flight models. Provider data is irregular, so every field is
read defensively and anything unusable raises OfferProcessingError.
"""
from datetime import date, datetime
import logging
from typing import List, Optional, Tuple

from pydantic import ValidationError

from flightprint.config import settings
from flightprint.core.airlines import get_airline_name
from flightprint.core.emissions import (
    build_eco_insights,
    estimate_emissions,
    estimate_flight_distance,
    resolve_cabin,
)
from flightprint.core.errors import OfferProcessingError
from flightprint.models import (
    Airline,
    CarbonEmissions,
    Flight,
    Itinerary,
    Price,
    Segment,
    SegmentEndpoint,
    TravelClass,
)

logger = logging.getLogger(__name__)


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _to_float(value, field: str, default: Optional[float] = None) -> float:
    if value is None or value == "":
        if default is None:
            raise OfferProcessingError(f"missing {field}")
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise OfferProcessingError(f"{field} is not a number: {value!r}")


def _to_int(value, field: str, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise OfferProcessingError(f"{field} is not an integer: {value!r}")


def _parse_timestamp(value, field: str) -> datetime:
    if not isinstance(value, str) or not value:
        raise OfferProcessingError(f"missing {field}")
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise OfferProcessingError(f"unreadable {field}: {value!r}")


def _parse_endpoint(raw: dict, field: str) -> SegmentEndpoint:
    iata = raw.get("iataCode")
    if not isinstance(iata, str) or not iata:
        raise OfferProcessingError(f"missing {field}.iataCode")
    return SegmentEndpoint(
        iata_code=iata,
        terminal=raw.get("terminal"),
        at=_parse_timestamp(raw.get("at"), f"{field}.at"),
    )


def _parse_segment(raw: dict) -> Segment:
    carrier = raw.get("carrierCode")
    if not isinstance(carrier, str) or not carrier:
        raise OfferProcessingError("segment without carrierCode")
    return Segment(
        departure=_parse_endpoint(_as_dict(raw.get("departure")), "departure"),
        arrival=_parse_endpoint(_as_dict(raw.get("arrival")), "arrival"),
        carrier_code=carrier,
        carrier_name=get_airline_name(carrier),
        flight_number=str(raw.get("number") or ""),
        aircraft=_as_dict(raw.get("aircraft")).get("code"),
        duration=raw.get("duration"),
        number_of_stops=_to_int(raw.get("numberOfStops"), "numberOfStops"),
    )


def _parse_itinerary(raw: dict, index: int) -> Itinerary:
    raw_segments = _as_list(raw.get("segments"))
    if not raw_segments:
        raise OfferProcessingError(f"itinerary {index} has no segments")
    segments = [_parse_segment(_as_dict(s)) for s in raw_segments]
    return Itinerary(duration=raw.get("duration"), segments=segments)


def count_stops(itineraries: List[Itinerary]) -> int:
    """Plane changes plus technical stops, summed over every itinerary."""
    total = 0
    for itinerary in itineraries:
        technical = sum(s.number_of_stops for s in itinerary.segments)
        total += max(0, len(itinerary.segments) - 1) + technical
    return total


def collect_airlines(itineraries: List[Itinerary]) -> List[Airline]:
    airlines = []
    seen = set()
    for itinerary in itineraries:
        for segment in itinerary.segments:
            if segment.carrier_code not in seen:
                seen.add(segment.carrier_code)
                airlines.append(Airline(code=segment.carrier_code, name=segment.carrier_name))
    return airlines


def extract_cabin(raw: dict) -> TravelClass:
    """Cabin of the first traveler's first fare segment, ECONOMY when absent."""
    tps = _as_list(raw.get("travelerPricings"))
    fds = _as_list(_as_dict(tps[0]).get("fareDetailsBySegment")) if tps else []
    cabin = _as_dict(fds[0]).get("cabin") if fds else None
    resolved = resolve_cabin(cabin)
    if cabin and resolved.value != str(cabin).strip().upper():
        logger.warning(f"Unknown cabin {cabin!r}, treating as {resolved.value}")
    return resolved


def declared_emissions(raw: dict) -> float:
    """Sum of provider CO2 weights over the first traveler's fare segments."""
    tps = _as_list(raw.get("travelerPricings"))
    if not tps:
        return 0.0
    total = 0.0
    for fd in _as_list(_as_dict(tps[0]).get("fareDetailsBySegment")):
        co2 = _as_list(_as_dict(fd).get("co2Emissions"))
        if not co2:
            continue
        try:
            total += float(_as_dict(co2[0]).get("weight") or 0)
        except (TypeError, ValueError):
            continue
    return total


def resolve_emissions(raw: dict, itineraries: List[Itinerary], cabin: TravelClass,
                      stops: int, origin: str, destination: str) -> CarbonEmissions:
    weight = declared_emissions(raw)
    if weight <= 0:
        # Estimator works per direction; a round trip counts twice
        distance = estimate_flight_distance(origin, destination)
        weight = estimate_emissions(distance, cabin, stops) * len(itineraries)
    return CarbonEmissions(weight=weight, cabin=cabin)


def extract_price(raw: dict) -> Price:
    price = _as_dict(raw.get("price"))
    total = _to_float(price.get("total"), "price.total")
    grand_total = _to_float(price.get("grandTotal"), "price.grandTotal", total)
    if grand_total <= 0:
        grand_total = max(total, 0.0)
    return Price(
        currency=price.get("currency") or settings.DEFAULT_CURRENCY,
        total=total,
        base=_to_float(price.get("base"), "price.base", 0.0),
        grand_total=grand_total,
    )


def normalize_offer(raw: dict, origin: str, destination: str, departure_date) -> Flight:
    """
    Build a Flight from one Amadeus offer.

    Raises OfferProcessingError when the offer cannot be used.
    """
    if not isinstance(raw, dict):
        raise OfferProcessingError(f"offer is not an object: {type(raw).__name__}")

    offer_id = raw.get("id")
    if offer_id is None or offer_id == "":
        raise OfferProcessingError("offer without id")
    offer_id = str(offer_id)

    if isinstance(departure_date, datetime):
        departure_date = departure_date.date()

    try:
        raw_itineraries = _as_list(raw.get("itineraries"))
        if not 1 <= len(raw_itineraries) <= 2:
            raise OfferProcessingError(f"expected 1 or 2 itineraries, got {len(raw_itineraries)}")
        itineraries = [_parse_itinerary(_as_dict(it), i) for i, it in enumerate(raw_itineraries)]

        stops = count_stops(itineraries)
        cabin = extract_cabin(raw)
        emissions = resolve_emissions(raw, itineraries, cabin, stops, origin, destination)

        return Flight(
            flight_offer_id=offer_id,
            origin=origin,
            destination=destination,
            departure_date=departure_date,
            itineraries=itineraries,
            price=extract_price(raw),
            travel_class=cabin,
            stops=stops,
            airlines=collect_airlines(itineraries),
            carbon_emissions=emissions,
            eco_insights=build_eco_insights(emissions.weight),
            validating_airline_codes=[c for c in _as_list(raw.get("validatingAirlineCodes")) if isinstance(c, str)],
            number_of_bookable_seats=_to_int(raw.get("numberOfBookableSeats"), "numberOfBookableSeats"),
        )
    except OfferProcessingError as e:
        e.offer_id = offer_id
        raise
    except ValidationError as e:
        raise OfferProcessingError(f"invalid offer data: {e.errors()[0].get('msg')}", offer_id) from e


def normalize_offers(raw_offers: list, origin: str, destination: str,
                     departure_date: date) -> Tuple[List[Flight], List[OfferProcessingError]]:
    """
    Normalize a batch of offers. Bad offers are logged and returned as errors,
    never raised.
    """
    flights = []
    errors = []
    for raw in raw_offers:
        try:
            flights.append(normalize_offer(raw, origin, destination, departure_date))
        except OfferProcessingError as e:
            logger.warning(f"Skipping offer: {e}")
            errors.append(e)
        except Exception as e:
            offer_id = raw.get("id") if isinstance(raw, dict) else None
            logger.exception(f"Unexpected error normalizing offer {offer_id}")
            errors.append(OfferProcessingError(str(e), offer_id))
    return flights, errors
