from amadeus import Client, ResponseError
from flightprint.config import settings
from flightprint.core.errors import ProviderError
import logging

logger = logging.getLogger(__name__)

# Created on first search so the app can start without credentials
_amadeus = None


def get_amadeus_client() -> Client:
    global _amadeus
    if _amadeus is None:
        if not settings.AMADEUS_CLIENT_ID or not settings.AMADEUS_CLIENT_SECRET:
            raise ProviderError("Amadeus credentials are not configured.")
        try:
            _amadeus = Client(
                client_id=settings.AMADEUS_CLIENT_ID,
                client_secret=settings.AMADEUS_CLIENT_SECRET,
                hostname=settings.AMADEUS_HOSTNAME
            )
        except Exception as e:
            logger.error(f"Failed to initialize Amadeus client: {e}")
            raise ProviderError(f"Failed to initialize Amadeus client: {e}") from e
    return _amadeus


def build_search_params(query) -> dict:
    """Amadeus flight-offers parameters for a validated SearchQuery."""
    params = {
        "originLocationCode": query.origin,
        "destinationLocationCode": query.destination,
        "departureDate": query.departure_date.isoformat(),
        "adults": query.adults,
        "travelClass": query.travel_class.value,
        "currencyCode": settings.DEFAULT_CURRENCY,
        "max": settings.MAX_PROVIDER_RESULTS,
        "nonStop": "false",  # connections allowed
    }
    if query.return_date:
        params["returnDate"] = query.return_date.isoformat()
    return params


def fetch_flight_offers(query) -> list[dict]:
    """
    Call Amadeus Flight Offers Search and return the raw offer dicts.
    Any failure is raised as ProviderError; there is no retry here.
    """
    amadeus = get_amadeus_client()
    params = build_search_params(query)
    logger.info(f"Searching Amadeus: {query.origin}->{query.destination} on {params['departureDate']}")

    try:
        response = amadeus.shopping.flight_offers_search.get(**params)
    except ResponseError as e:
        status = getattr(getattr(e, "response", None), "status_code", None)
        logger.error(f"Amadeus API Error: {getattr(e, 'code', None)} (status={status})")
        raise ProviderError(
            "Flight search provider request failed.",
            details={"code": getattr(e, "code", None), "status": status},
        ) from e

    offers = response.data or []
    logger.info(f"Amadeus found {len(offers)} offers")
    return offers
