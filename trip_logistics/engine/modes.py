"""Travel-mode rules: duration estimates, restrictions, recommendation and ranking.

The rule chains are ordered guard clauses; the first match wins.
"""
from __future__ import annotations

from typing import List, Optional

from trip_logistics.engine.continents import is_cross_continental
from trip_logistics.engine.distance import round_half_up
from trip_logistics.engine.travel_config import DEFAULT_TRAVEL_CONFIG, TravelConfig
from trip_logistics.schemas import ModeOption, RestrictionKind, TravelMode


def estimate_duration(distance_km: float, mode: TravelMode, *, config: TravelConfig = DEFAULT_TRAVEL_CONFIG) -> int:
    """Door-to-door minutes: time at cruising speed plus the mode's fixed overhead."""
    profile = config.profile(mode)
    return round_half_up(distance_km / profile.speed_kmh * 60) + profile.overhead_minutes


def classify_restriction(
    distance_km: float,
    code_a: Optional[str],
    code_b: Optional[str],
    *,
    config: TravelConfig = DEFAULT_TRAVEL_CONFIG,
) -> Optional[RestrictionKind]:
    """Return why a leg is flight-only, or ``None`` when any mode may be used."""
    if is_cross_continental(code_a, code_b):
        return RestrictionKind.CROSS_CONTINENTAL
    if distance_km > config.distance_threshold_km:
        return RestrictionKind.DISTANCE_EXCEEDED
    return None


def recommend_mode(
    distance_km: float,
    code_a: Optional[str],
    code_b: Optional[str],
    *,
    config: TravelConfig = DEFAULT_TRAVEL_CONFIG,
) -> TravelMode:
    if is_cross_continental(code_a, code_b):
        return TravelMode.FLIGHT
    if distance_km > config.distance_threshold_km:
        return TravelMode.FLIGHT
    if distance_km < config.car_preferred_below_km:
        return TravelMode.CAR
    if distance_km < config.distance_threshold_km:
        train_time = estimate_duration(distance_km, TravelMode.TRAIN, config=config)
        car_time = estimate_duration(distance_km, TravelMode.CAR, config=config)
        if train_time < car_time + config.time_efficiency_tolerance_minutes:
            return TravelMode.TRAIN
        return TravelMode.CAR
    # exactly at the threshold
    return TravelMode.FLIGHT


def build_options(
    distance_km: float,
    code_a: Optional[str],
    code_b: Optional[str],
    *,
    config: TravelConfig = DEFAULT_TRAVEL_CONFIG,
) -> List[ModeOption]:
    """One option per mode, recommended first, then allowed, then fastest.

    Restricted legs keep declaration order since only the flight is usable.
    """
    restriction = classify_restriction(distance_km, code_a, code_b, config=config)
    if restriction is not None:
        reason = _restriction_reason(restriction, config)
        return [
            ModeOption(
                mode=mode,
                duration_minutes=estimate_duration(distance_km, mode, config=config),
                is_recommended=mode is TravelMode.FLIGHT,
                is_allowed=mode is TravelMode.FLIGHT,
                restriction_reason=None if mode is TravelMode.FLIGHT else reason,
            )
            for mode in TravelMode
        ]

    recommended = recommend_mode(distance_km, code_a, code_b, config=config)
    options: List[ModeOption] = []
    for mode in TravelMode:
        reason = _filter_reason(mode, distance_km, config)
        allowed = reason is None
        options.append(
            ModeOption(
                mode=mode,
                duration_minutes=estimate_duration(distance_km, mode, config=config),
                is_recommended=allowed and mode is recommended,
                is_allowed=allowed,
                restriction_reason=reason,
            )
        )

    # sorted() is stable, so equal keys keep declaration order
    return sorted(options, key=lambda opt: (not opt.is_recommended, not opt.is_allowed, opt.duration_minutes))


def _restriction_reason(restriction: RestrictionKind, config: TravelConfig) -> str:
    if restriction is RestrictionKind.CROSS_CONTINENTAL:
        return "Cross-continental travel requires flight"
    return f"Distance exceeds {config.distance_threshold_km:g} km - flight required"


def _filter_reason(mode: TravelMode, distance_km: float, config: TravelConfig) -> Optional[str]:
    profile = config.profile(mode)
    if profile.min_distance_km is not None and distance_km < profile.min_distance_km:
        return f"Too short for {mode.value} (< {profile.min_distance_km:g} km)"
    if profile.max_distance_km is not None and distance_km > profile.max_distance_km:
        return f"Too long for {mode.value} (> {profile.max_distance_km:g} km)"
    return None
