"""Airline code -> display name lookup, plus the premium carriers favoured by ranking."""
from types import MappingProxyType

AIRLINE_NAMES = MappingProxyType({
    # Major international
    "AA": "American Airlines",
    "UA": "United Airlines",
    "DL": "Delta Air Lines",
    "BA": "British Airways",
    "AF": "Air France",
    "LH": "Lufthansa",
    "EK": "Emirates",
    "QR": "Qatar Airways",
    "SQ": "Singapore Airlines",
    "EY": "Etihad Airways",
    "TK": "Turkish Airlines",
    "KL": "KLM",
    "AC": "Air Canada",
    "NH": "ANA",
    "JL": "Japan Airlines",
    "CX": "Cathay Pacific",
    "QF": "Qantas",
    "VS": "Virgin Atlantic",
    "AZ": "ITA Airways",
    "IB": "Iberia",
    "LX": "Swiss International Air Lines",
    "OS": "Austrian Airlines",
    "SN": "Brussels Airlines",
    "SK": "SAS Scandinavian Airlines",
    "AY": "Finnair",
    "TP": "TAP Air Portugal",
    # Asia
    "UL": "SriLankan Airlines",
    "AI": "Air India",
    "SV": "Saudia",
    "MS": "EgyptAir",
    "TG": "Thai Airways",
    "MH": "Malaysia Airlines",
    "GA": "Garuda Indonesia",
    "KE": "Korean Air",
    "OZ": "Asiana Airlines",
    "BR": "EVA Air",
    "CI": "China Airlines",
    "CA": "Air China",
    "MU": "China Eastern",
    "CZ": "China Southern",
    "HU": "Hainan Airlines",
    # Middle East
    "GF": "Gulf Air",
    "RJ": "Royal Jordanian",
    "ME": "Middle East Airlines",
    "WY": "Oman Air",
    "KU": "Kuwait Airways",
    # Low-cost
    "WN": "Southwest Airlines",
    "B6": "JetBlue Airways",
    "NK": "Spirit Airlines",
    "F9": "Frontier Airlines",
    "G4": "Allegiant Air",
    "FR": "Ryanair",
    "U2": "easyJet",
    "VY": "Vueling",
    "W6": "Wizz Air",
    "FZ": "flydubai",
    "WK": "Edelweiss Air",
    "6E": "IndiGo",
    "SG": "SpiceJet",
    # Others
    "AS": "Alaska Airlines",
    "WS": "WestJet",
    "LA": "LATAM Airlines",
    "AM": "Aeroméxico",
    "CM": "Copa Airlines",
    "ET": "Ethiopian Airlines",
    "KQ": "Kenya Airways",
    "SA": "South African Airways",
})

# Carriers that earn the ranking bonus
PREMIUM_AIRLINES = frozenset({
    "EK", "QR", "SQ", "EY", "BA", "AF", "LH", "AA", "UA", "DL",
    "CX", "QF", "NH", "JL", "TK", "KL", "VS", "AC", "UL", "AI",
    "TG", "MH", "KE", "LX", "OS", "IB", "AZ",
})


def get_airline_name(code: str) -> str:
    """Return the display name for a carrier code, or the code itself when unknown."""
    if not code:
        return code
    return AIRLINE_NAMES.get(code.upper(), code)


def is_premium(code: str) -> bool:
    return bool(code) and code.upper() in PREMIUM_AIRLINES
