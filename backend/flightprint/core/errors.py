"""
Error taxonomy for flight searches.

Validation errors are raised before the provider is called and map to 400.
Provider errors fail the whole search and map to 502.
Offer processing errors never leave the normalizer batch.
"""
from typing import Optional


class FlightPrintError(Exception):
    status_code = 500
    code = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SearchValidationError(FlightPrintError):
    status_code = 400
    code = "validation_error"


class InvalidAirportCode(SearchValidationError):
    code = "invalid_airport_code"


class InvalidDateFormat(SearchValidationError):
    code = "invalid_date_format"


class PastDepartureDate(SearchValidationError):
    code = "past_departure_date"


class InvalidReturnDate(SearchValidationError):
    code = "invalid_return_date"


class InvalidPassengerCount(SearchValidationError):
    code = "invalid_passenger_count"


class InvalidTravelClass(SearchValidationError):
    code = "invalid_travel_class"


class ProviderError(FlightPrintError):
    status_code = 502
    code = "provider_error"

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.details = details or {}


class OfferProcessingError(FlightPrintError):
    code = "offer_processing_error"

    def __init__(self, message: str, offer_id: Optional[str] = None):
        super().__init__(message)
        self.offer_id = offer_id

    def __str__(self):
        if self.offer_id is not None:
            return f"offer {self.offer_id}: {self.message}"
        return self.message
