"""
CO2 estimation used when Amadeus returns no emissions data for an offer.

Figures are per passenger and approximate.
"""
import math
from types import MappingProxyType

from flightprint.models import EcoInsights, TravelClass

# kg CO2 per passenger-km
EMISSION_FACTORS = MappingProxyType({
    TravelClass.ECONOMY: 0.09,
    TravelClass.PREMIUM_ECONOMY: 0.13,
    TravelClass.BUSINESS: 0.20,
    TravelClass.FIRST: 0.27,
})

# Each stop adds another takeoff and landing
STOP_PENALTY = 0.20

DEFAULT_DISTANCE_KM = 1500

# Known great-circle distances in km, keyed by sorted airport pair
ROUTE_DISTANCES = MappingProxyType({
    ("JFK", "LAX"): 3983,
    ("JFK", "LHR"): 5541,
    ("LAX", "SFO"): 543,
    ("DFW", "LAS"): 1789,
    ("LAX", "ORD"): 2799,
})

# Eco equivalences
TREE_KG_PER_YEAR = 21
CAR_KG_PER_KM = 0.12
HOME_KG_PER_DAY = 30


def round_half_up(value: float, ndigits: int = 0) -> float:
    scale = 10 ** ndigits
    return math.floor(value * scale + 0.5) / scale


def resolve_cabin(cabin) -> TravelClass:
    """Map any cabin label to a TravelClass, falling back to ECONOMY."""
    if isinstance(cabin, TravelClass):
        return cabin
    if isinstance(cabin, str):
        try:
            return TravelClass(cabin.strip().upper())
        except ValueError:
            pass
    return TravelClass.ECONOMY


def estimate_emissions(distance_km: float, cabin=TravelClass.ECONOMY, stops: int = 0) -> int:
    """
    Estimate one-direction CO2 in kg for a single passenger.

    Unknown cabins use the economy factor; negative inputs count as zero.
    """
    factor = EMISSION_FACTORS[resolve_cabin(cabin)]
    distance = max(0.0, float(distance_km or 0))
    multiplier = 1 + STOP_PENALTY * max(0, stops or 0)
    return int(round_half_up(distance * factor * multiplier))


def estimate_flight_distance(origin: str, destination: str) -> int:
    if not origin or not destination:
        return DEFAULT_DISTANCE_KM
    pair = tuple(sorted((origin.upper(), destination.upper())))
    return ROUTE_DISTANCES.get(pair, DEFAULT_DISTANCE_KM)


def build_eco_insights(weight_kg: float) -> EcoInsights:
    weight = max(0.0, float(weight_kg))
    return EcoInsights(
        trees_needed=math.ceil(weight / TREE_KG_PER_YEAR),
        car_km_equivalent=int(round_half_up(weight / CAR_KG_PER_KM)),
        home_energy_days=round_half_up(weight / HOME_KG_PER_DAY, 1),
    )
