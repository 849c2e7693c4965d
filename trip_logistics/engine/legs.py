"""Leg planning across a city sequence and spreading legs over the trip's days."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from trip_logistics.engine.continents import is_cross_continental
from trip_logistics.engine.distance import distance_km
from trip_logistics.engine.modes import build_options, classify_restriction
from trip_logistics.engine.travel_config import DEFAULT_TRAVEL_CONFIG, TravelConfig
from trip_logistics.schemas import City, TravelLeg

logger = logging.getLogger(__name__)


def plan_legs(
    cities: Sequence[City],
    origin: Optional[City] = None,
    *,
    config: TravelConfig = DEFAULT_TRAVEL_CONFIG,
) -> List[TravelLeg]:
    """Build one leg per consecutive pair, starting from ``origin`` when given."""
    if not cities:
        return []

    stops: List[City] = [origin, *cities] if origin is not None else list(cities)
    legs: List[TravelLeg] = []
    for frm, to in zip(stops[:-1], stops[1:]):
        km = distance_km(frm.geo, to.geo)
        legs.append(
            TravelLeg(
                from_city=frm,
                to_city=to,
                distance_km=km,
                options=build_options(km, frm.country_code, to.country_code, config=config),
                restriction=classify_restriction(km, frm.country_code, to.country_code, config=config),
                is_cross_continental=is_cross_continental(frm.country_code, to.country_code),
            )
        )
    logger.debug("Planned %d leg(s) across %d stop(s)", len(legs), len(stops))
    return legs


def assign_legs_to_days(legs: Sequence[TravelLeg], total_days: int) -> Dict[int, List[TravelLeg]]:
    """Spread legs evenly over the trip, never on the final day.

    The first leg leaves a couple of days early so the first city keeps its
    on-the-ground time; later legs fall every ``total_days // len(legs)`` days.
    Legs that land on the same index stack up in input order.

    Unlike a bare ``min(day_index, total_days - 2)`` clamp, the upper bound is
    floored at 0: on a one-day trip legs go on day 0 rather than day -1.
    """
    assignments: Dict[int, List[TravelLeg]] = {}
    if not legs:
        return assignments

    days_per_leg = total_days // len(legs)
    # one-day trips have no non-final day; travel then shares day 0
    last_travel_day = max(0, total_days - 2)
    for idx, leg in enumerate(legs):
        day_index = max(0, days_per_leg - 2) if idx == 0 else idx * days_per_leg
        day_index = min(day_index, last_travel_day)
        assignments.setdefault(day_index, []).append(leg)

    if len(assignments) < len(legs):
        logger.debug("%d leg(s) share days across a %d-day trip", len(legs) - len(assignments), total_days)
    return assignments
