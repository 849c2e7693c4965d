import pytest

from trip_logistics.engine.modes import build_options, classify_restriction, estimate_duration, recommend_mode
from trip_logistics.engine.travel_config import DEFAULT_TRAVEL_CONFIG, ModeProfile, TravelConfig
from trip_logistics.schemas import RestrictionKind, TravelMode


def _modes(options):
    return [opt.mode for opt in options]


def _by_mode(options):
    return {opt.mode: opt for opt in options}


def test_default_table_matches_business_assumptions():
    expected = {
        TravelMode.FLIGHT: (800, 120),
        TravelMode.TRAIN: (120, 30),
        TravelMode.CAR: (80, 10),
        TravelMode.BUS: (60, 15),
    }
    for mode, (speed, overhead) in expected.items():
        profile = DEFAULT_TRAVEL_CONFIG.profile(mode)
        assert (profile.speed_kmh, profile.overhead_minutes) == (speed, overhead)


def test_estimate_duration_includes_overhead():
    assert estimate_duration(250, TravelMode.TRAIN) == 155
    assert estimate_duration(250, TravelMode.CAR) == 198
    assert estimate_duration(250, TravelMode.FLIGHT) == 139
    assert estimate_duration(250, TravelMode.BUS) == 265
    assert estimate_duration(0, TravelMode.FLIGHT) == 120


def test_classify_threshold_boundary():
    assert classify_restriction(400, "FR", "DE") is None
    assert classify_restriction(401, "FR", "DE") is RestrictionKind.DISTANCE_EXCEEDED


def test_cross_continental_takes_precedence_over_distance():
    assert classify_restriction(1, "FR", "US") is RestrictionKind.CROSS_CONTINENTAL
    assert classify_restriction(9000, "FR", "US") is RestrictionKind.CROSS_CONTINENTAL


def test_classify_with_unknown_codes_only_checks_distance():
    assert classify_restriction(50, None, "US") is None
    assert classify_restriction(500, None, None) is RestrictionKind.DISTANCE_EXCEEDED


@pytest.mark.parametrize(
    "distance, expected",
    [
        (10, TravelMode.CAR),
        (49, TravelMode.CAR),
        (50, TravelMode.CAR),
        (99, TravelMode.CAR),
        (100, TravelMode.TRAIN),
        (250, TravelMode.TRAIN),
        (399, TravelMode.TRAIN),
        (400, TravelMode.FLIGHT),
        (401, TravelMode.FLIGHT),
    ],
)
def test_recommend_mode_same_country(distance, expected):
    assert recommend_mode(distance, "FR", "FR") is expected


def test_recommend_flight_for_cross_continental_hop():
    assert recommend_mode(5, "ES", "MA") is TravelMode.FLIGHT


def test_recommend_car_when_train_is_decisively_slower():
    slow_trains = TravelConfig(
        profiles={
            **DEFAULT_TRAVEL_CONFIG.profiles,
            TravelMode.TRAIN: ModeProfile(speed_kmh=40, overhead_minutes=30),
        }
    )
    # train 330 min vs car 160 + 30 tolerance
    assert recommend_mode(200, "FR", "FR", config=slow_trains) is TravelMode.CAR


def test_short_hop_prefers_car_and_blocks_flight():
    options = build_options(30, "FR", "FR")

    assert _modes(options) == [TravelMode.CAR, TravelMode.TRAIN, TravelMode.BUS, TravelMode.FLIGHT]
    car, flight = options[0], options[-1]
    assert car.is_recommended and car.is_allowed
    assert not flight.is_allowed and not flight.is_recommended
    assert flight.restriction_reason == "Too short for flight (< 100 km)"
    assert classify_restriction(30, "FR", "FR") is None


def test_medium_hop_ranks_train_first_then_by_duration():
    options = build_options(250, "FR", "DE")

    assert _modes(options) == [TravelMode.TRAIN, TravelMode.FLIGHT, TravelMode.CAR, TravelMode.BUS]
    assert [opt.duration_minutes for opt in options] == [155, 139, 198, 265]
    assert all(opt.is_allowed for opt in options)
    assert all(opt.restriction_reason is None for opt in options)


def test_threshold_distance_is_unrestricted_with_flight_recommended():
    options = build_options(400, "FR", "DE")

    assert _modes(options) == [TravelMode.FLIGHT, TravelMode.TRAIN, TravelMode.CAR, TravelMode.BUS]
    assert options[0].is_recommended
    assert all(opt.is_allowed for opt in options)


def test_distance_restriction_allows_only_flight():
    options = build_options(401, "FR", "DE")

    assert _modes(options) == [TravelMode.FLIGHT, TravelMode.TRAIN, TravelMode.CAR, TravelMode.BUS]
    flight = options[0]
    assert flight.is_allowed and flight.is_recommended and flight.restriction_reason is None
    for opt in options[1:]:
        assert not opt.is_allowed
        assert not opt.is_recommended
        assert opt.restriction_reason == "Distance exceeds 400 km - flight required"


def test_cross_continental_short_hop_allows_only_flight():
    options = build_options(50, "FR", "US")

    assert _modes(options) == [TravelMode.FLIGHT, TravelMode.TRAIN, TravelMode.CAR, TravelMode.BUS]
    assert [opt.is_allowed for opt in options] == [True, False, False, False]
    assert [opt.is_recommended for opt in options] == [True, False, False, False]
    assert options[1].restriction_reason == "Cross-continental travel requires flight"


def test_car_and_bus_filters_apply_when_threshold_is_raised():
    continental = TravelConfig(distance_threshold_km=5000)
    options = build_options(2000, "FR", "DE", config=continental)

    assert _modes(options) == [TravelMode.TRAIN, TravelMode.FLIGHT, TravelMode.CAR, TravelMode.BUS]
    by_mode = _by_mode(options)
    assert by_mode[TravelMode.TRAIN].is_recommended
    assert by_mode[TravelMode.CAR].restriction_reason == "Too long for car (> 1500 km)"
    assert by_mode[TravelMode.BUS].restriction_reason == "Too long for bus (> 1500 km)"
    assert not by_mode[TravelMode.CAR].is_allowed and not by_mode[TravelMode.BUS].is_allowed


@pytest.mark.parametrize("distance", [0, 1, 30, 99, 100, 101, 250, 399, 400, 401, 1500, 12000])
@pytest.mark.parametrize("codes", [("FR", "FR"), ("FR", "US"), (None, "DE"), ("ZZ", "FR")])
def test_every_mode_once_and_single_allowed_recommendation(distance, codes):
    options = build_options(distance, *codes)

    assert sorted(opt.mode.value for opt in options) == sorted(mode.value for mode in TravelMode)
    recommended = [opt for opt in options if opt.is_recommended]
    assert len(recommended) == 1
    assert recommended[0].is_allowed
    assert recommended[0].mode is recommend_mode(distance, *codes)
    if classify_restriction(distance, *codes) is not None:
        assert [opt.mode for opt in options if opt.is_allowed] == [TravelMode.FLIGHT]
