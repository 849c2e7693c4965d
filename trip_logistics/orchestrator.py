# trip_logistics/orchestrator.py
from __future__ import annotations

import os
from typing import Any, Dict, List, Optional
from datetime import datetime, timedelta
import logging

from dotenv import load_dotenv

from trip_logistics.schemas import (
    City,
    CityNamesRequest,
    LegOptionsResponse,
    TravelDay,
    TravelLeg,
    TravelPlanRequest,
    TravelPlanResponse,
)
from trip_logistics.engine.continents import is_cross_continental
from trip_logistics.engine.legs import assign_legs_to_days, plan_legs
from trip_logistics.engine.modes import build_options, classify_restriction, recommend_mode
from trip_logistics.tools.geocoding import Geocoder, parse_city_input

load_dotenv()

logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
_level = os.getenv("TRIP_LOGISTICS_LOG_LEVEL", "INFO").upper()
logger.setLevel(getattr(logging, _level, logging.INFO))
logger.propagate = False


# ---------- pure planning over geocoded cities ----------
def plan_travel(req: TravelPlanRequest) -> TravelPlanResponse:
    """Plan legs for the trip and place each one on a day of the trip."""
    legs = plan_legs(req.cities, req.origin)
    assignments = assign_legs_to_days(legs, req.total_days)
    start_dt = _parse_date(req.start_date)

    days = [
        TravelDay(
            day_index=day_index,
            date=(start_dt + timedelta(days=day_index)).date().isoformat() if start_dt else None,
            legs=assignments[day_index],
        )
        for day_index in sorted(assignments)
    ]
    total_distance = sum(leg.distance_km for leg in legs)

    logger.info(
        "Planned %d leg(s) over %d day(s) from %s visiting %s (%d km)",
        len(legs),
        req.total_days,
        req.origin.name if req.origin else "first city",
        ", ".join(city.name for city in req.cities) or "nowhere",
        total_distance,
    )
    return TravelPlanResponse(
        legs=legs,
        days=days,
        total_distance_km=total_distance,
        notes=_travel_notes(legs, days),
    )


def describe_leg_options(
    distance_km: int,
    from_country: Optional[str] = None,
    to_country: Optional[str] = None,
) -> LegOptionsResponse:
    """Options for a single hop when only the distance and countries are known."""
    return LegOptionsResponse(
        distance_km=distance_km,
        restriction=classify_restriction(distance_km, from_country, to_country),
        is_cross_continental=is_cross_continental(from_country, to_country),
        recommended_mode=recommend_mode(distance_km, from_country, to_country),
        options=build_options(distance_km, from_country, to_country),
    )


# ---------- geocode city names, then plan ----------
async def orchestrate_travel_plan(
    payload: Dict[str, Any],
    geocoder: Geocoder | None = None,
) -> TravelPlanResponse:
    """Resolve city names with the geocoder and run ``plan_travel`` on the result."""
    payload = dict(payload)
    if isinstance(payload.get("cities"), str):
        payload["cities"] = parse_city_input(payload["cities"])
    names_req = CityNamesRequest.model_validate(payload)

    geocoder = geocoder or Geocoder()
    logger.info("Geocoding %d city name(s) (origin=%s)", len(names_req.cities), names_req.origin or "none")

    notes: List[str] = []
    cities: List[City] = []
    for name, city in await geocoder.resolve_names(names_req.cities):
        if city is not None:
            cities.append(city)
        else:
            notes.append(f"Could not locate {name}; it was left out of the travel plan.")
    if not cities:
        raise ValueError("None of the requested cities could be geocoded.")
    if notes:
        logger.warning("Skipped %d unresolved city name(s)", len(notes))

    origin: Optional[City] = None
    if names_req.origin:
        origin = await geocoder.geocode_city(names_req.origin)
        if origin is None:
            notes.append(f"Could not locate origin {names_req.origin}; planning from the first city.")

    plan = plan_travel(
        TravelPlanRequest(
            cities=cities,
            origin=origin,
            total_days=names_req.total_days,
            start_date=names_req.start_date,
        )
    )
    plan.notes = [*notes, *plan.notes]
    return plan


def _travel_notes(legs: List[TravelLeg], days: List[TravelDay]) -> List[str]:
    notes: List[str] = []
    for leg in legs:
        if leg.restriction is None:
            continue
        reason = "crosses continents" if leg.is_cross_continental else f"is {leg.distance_km} km"
        notes.append(f"Flight required from {leg.from_city.name} to {leg.to_city.name}: the leg {reason}.")
    for day in days:
        if len(day.legs) > 1:
            notes.append(f"Day {day.day_index + 1} has {len(day.legs)} travel legs; consider a longer trip.")
    return notes


def _parse_date(value: Any) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.strptime(str(value), "%Y-%m-%d")
    except ValueError:
        return None
