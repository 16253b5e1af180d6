import pytest


def build_segment(origin, dest, dep="2030-05-01T08:00:00", arr="2030-05-01T11:00:00",
                  carrier="AA", number="100", stops=0, duration="PT3H"):
    segment = {
        "departure": {"iataCode": origin, "terminal": "1", "at": dep},
        "arrival": {"iataCode": dest, "at": arr},
        "carrierCode": carrier,
        "number": number,
        "aircraft": {"code": "321"},
        "duration": duration,
    }
    if stops:
        segment["numberOfStops"] = stops
    return segment


def build_offer(offer_id="1", itineraries=None, durations=None, total="250.00", base="200.00",
                grand_total=None, currency="USD", cabin="ECONOMY", co2=None, seats=9,
                validating=("AA",)):
    """
    Amadeus-shaped flight offer. `itineraries` is a list of segment lists;
    `co2` is an optional list of per-segment weights.
    """
    if itineraries is None:
        itineraries = [[build_segment("BOS", "MIA")]]
    durations = durations or ["PT3H"] * len(itineraries)

    fare_details = []
    seg_index = 0
    for segments in itineraries:
        for _ in segments:
            fd = {"segmentId": str(seg_index + 1), "cabin": cabin}
            if co2 is not None:
                fd["co2Emissions"] = [{"weight": co2[seg_index], "weightUnit": "KG", "cabin": cabin}]
            fare_details.append(fd)
            seg_index += 1

    price = {"currency": currency, "total": total, "base": base}
    if grand_total is not None:
        price["grandTotal"] = grand_total

    return {
        "type": "flight-offer",
        "id": offer_id,
        "itineraries": [
            {"duration": d, "segments": segs} for d, segs in zip(durations, itineraries)
        ],
        "price": price,
        "validatingAirlineCodes": list(validating),
        "numberOfBookableSeats": seats,
        "travelerPricings": [
            {"travelerId": "1", "fareOption": "STANDARD", "fareDetailsBySegment": fare_details}
        ],
    }


@pytest.fixture
def make_segment():
    return build_segment


@pytest.fixture
def make_offer():
    return build_offer
