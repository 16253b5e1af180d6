from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from flightprint.config import settings
from flightprint.core.errors import FlightPrintError
from flightprint.skills import search_offers
from flightprint.skills.search_flights import search_flights
from typing import Literal, Optional
import logging

# Setup Logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="FlightPrint API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(FlightPrintError)
async def flightprint_error_handler(request: Request, exc: FlightPrintError):
    if exc.status_code >= 500:
        logger.error(f"{request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.url.path} rejected: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": exc.message, "code": exc.code},
    )


def get_offer_provider():
    """Raw-offer source for searches; overridden in tests."""
    return search_offers.fetch_flight_offers


# Plain def: the Amadeus SDK blocks, so FastAPI runs this in its threadpool
@app.get("/api/flights/search")
def search(
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    departure_date: Optional[str] = Query(None, alias="departureDate"),
    return_date: Optional[str] = Query(None, alias="returnDate"),
    adults: Optional[str] = "1",  # range-checked by validate_search_request
    travel_class: str = Query("ECONOMY", alias="travelClass"),
    sort_by: Optional[Literal["price", "duration", "emissions"]] = Query(None, alias="sortBy"),
    provider=Depends(get_offer_provider),
):
    logger.info(f"Search request: {origin}->{destination} on {departure_date}, return={return_date}")

    result = search_flights(
        origin=origin,
        destination=destination,
        departure_date=departure_date,
        return_date=return_date,
        adults=adults,
        travel_class=travel_class,
        sort_by=sort_by,
        provider=provider,
    )

    return {
        "status": "success",
        "results": len(result.flights),
        "totalFound": result.total_found,
        "data": {
            "flights": [f.model_dump(mode="json", by_alias=True) for f in result.flights],
        },
    }


@app.get("/health")
def health_check():
    return {"status": "ok", "env": settings.ENV}
