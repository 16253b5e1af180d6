from datetime import date

import pytest

from flightprint.core.ranking import (
    calculate_score,
    parse_duration_minutes,
    rank_flights,
    score_breakdown,
    sort_for_display,
)
from flightprint.skills.normalize_offers import normalize_offer

DEPART = date(2030, 5, 1)


@pytest.fixture
def flight(make_offer, make_segment):
    """Build a Flight with the ranking inputs set explicitly."""
    def _flight(offer_id="1", stops=0, carrier="B6", price="100.00", seats=0, duration="PT3H", co2=None):
        segments = [make_segment("BOS", "MIA", "2030-05-01T08:00:00", "2030-05-01T09:00:00", carrier=carrier)]
        for i in range(stops):
            segments.append(make_segment(
                "MIA", "MIA", f"2030-05-01T{10 + 2 * i:02d}:00:00", f"2030-05-01T{11 + 2 * i:02d}:00:00",
                carrier=carrier,
            ))
        offer = make_offer(offer_id=offer_id, itineraries=[segments], durations=[duration],
                           total=price, grand_total=price, seats=seats,
                           co2=co2 and [co2] + [0] * stops)
        return normalize_offer(offer, "BOS", "MIA", DEPART)
    return _flight


@pytest.mark.parametrize("value,expected", [
    ("PT2H30M", 150),
    ("PT5H", 300),
    ("PT45M", 45),
    ("PT26H5M", 1565),
    (None, 9999),
    ("", 9999),
    ("2 hours", 9999),
])
def test_parse_duration_minutes(value, expected):
    assert parse_duration_minutes(value) == expected


def test_direct_non_premium_beats_one_stop_premium(flight):
    a = flight(offer_id="A", stops=0, carrier="B6", price="500", seats=0, duration="PT5H")
    b = flight(offer_id="B", stops=1, carrier="EK", price="300", seats=0, duration="PT3H20M")

    assert calculate_score(a) == pytest.approx(1000 - 50 - 150)
    assert calculate_score(b) == pytest.approx(500 - 200 - 30 - 100)
    assert [f.flight_offer_id for f in rank_flights([b, a])] == ["A", "B"]


def test_two_stop_premium_outranks_one_stop_non_premium(flight):
    premium = flight(offer_id="P", stops=2, carrier="LH", price="0", duration="PT0M")
    budget = flight(offer_id="N", stops=1, carrier="FR", price="0", duration="PT0M")

    assert calculate_score(premium) == pytest.approx(100)
    assert calculate_score(budget) == pytest.approx(-200)
    assert [f.flight_offer_id for f in rank_flights([budget, premium])] == ["P", "N"]


def test_score_breakdown(flight):
    f = flight(stops=1, carrier="QR", price="420", seats=4, duration="PT2H")
    assert score_breakdown(f) == pytest.approx({
        "direct": 0.0,
        "premium": 500.0,
        "stops": -200.0,
        "price": -42.0,
        "seats": 8.0,
        "duration": -60.0,
    })


def test_unreadable_duration_is_heavily_penalized(flight):
    known = flight(offer_id="known", duration="PT10H")
    unknown = flight(offer_id="unknown", duration="P1D")
    assert score_breakdown(unknown)["duration"] == -0.5 * 9999
    assert rank_flights([unknown, known])[0].flight_offer_id == "known"


def test_only_first_itinerary_duration_counts(make_offer, make_segment):
    def round_trip(return_duration):
        offer = make_offer(
            itineraries=[
                [make_segment("BOS", "MIA")],
                [make_segment("MIA", "BOS", "2030-05-08T09:00:00", "2030-05-08T12:00:00")],
            ],
            durations=["PT3H", return_duration],
        )
        return normalize_offer(offer, "BOS", "MIA", DEPART)

    assert calculate_score(round_trip("PT3H")) == calculate_score(round_trip("PT20H"))


def test_fewer_stops_never_rank_lower(flight):
    for carrier in ("B6", "EK"):
        ranked = rank_flights([flight(offer_id=str(s), stops=s, carrier=carrier) for s in (3, 1, 2, 0)])
        assert [f.stops for f in ranked] == [0, 1, 2, 3]


def test_ties_keep_input_order(flight):
    flights = [flight(offer_id=str(i)) for i in range(5)]
    assert [f.flight_offer_id for f in rank_flights(flights)] == ["0", "1", "2", "3", "4"]


def test_ranking_is_deterministic(flight):
    flights = [
        flight(offer_id="1", stops=1, carrier="AA", price="320"),
        flight(offer_id="2", stops=0, carrier="WN", price="180", seats=3),
        flight(offer_id="3", stops=0, carrier="DL", price="410", duration="PT6H"),
        flight(offer_id="4", stops=2, carrier="F9", price="90"),
    ]
    first = [f.flight_offer_id for f in rank_flights(flights)]
    for _ in range(3):
        assert [f.flight_offer_id for f in rank_flights(list(flights))] == first
    assert rank_flights([]) == []


def test_display_sort_puts_direct_flights_first(flight):
    cheap_stop = flight(offer_id="cheap", stops=1, price="100", duration="PT4H", co2=100)
    pricey_direct = flight(offer_id="pricey", stops=0, price="400", duration="PT3H", co2=300)
    mid_direct = flight(offer_id="mid", stops=0, price="250", duration="PT5H", co2=200)
    flights = [cheap_stop, pricey_direct, mid_direct]

    by_price = [f.flight_offer_id for f in sort_for_display(flights, "price")]
    by_duration = [f.flight_offer_id for f in sort_for_display(flights, "duration")]
    by_emissions = [f.flight_offer_id for f in sort_for_display(flights, "emissions")]

    assert by_price == ["mid", "pricey", "cheap"]
    assert by_duration == ["pricey", "mid", "cheap"]
    assert by_emissions == ["mid", "pricey", "cheap"]


def test_display_sort_rejects_unknown_key(flight):
    with pytest.raises(ValueError):
        sort_for_display([flight()], "airline")
