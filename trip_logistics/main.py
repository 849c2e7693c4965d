from __future__ import annotations

import os
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from trip_logistics.orchestrator import describe_leg_options, orchestrate_travel_plan, plan_travel
from trip_logistics.schemas import LegOptionsResponse, TravelPlanRequest, TravelPlanResponse

app = FastAPI(title="Trip Logistics API")

# Itinerary UIs run on their own dev servers; operators can narrow this via
# TRIP_LOGISTICS_ALLOWED_ORIGINS.
raw_origins = os.getenv("TRIP_LOGISTICS_ALLOWED_ORIGINS") or "*"
allowed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
if not allowed_origins:
    allowed_origins = ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz")
async def healthz() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/api/travel/legs", response_model=TravelPlanResponse)
async def api_travel_legs(payload: Dict[str, Any] = Body(...)) -> TravelPlanResponse:
    """Plan legs and travel days for cities that are already geocoded."""
    try:
        req = TravelPlanRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc
    return plan_travel(req)


@app.post("/api/travel/plan", response_model=TravelPlanResponse)
async def api_travel_plan(payload: Dict[str, Any] = Body(...)) -> TravelPlanResponse:
    """Geocode city names, then plan legs and travel days."""
    try:
        return await orchestrate_travel_plan(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.get("/api/travel/options", response_model=LegOptionsResponse)
async def api_travel_options(
    distance_km: int = Query(..., ge=0),
    from_country: Optional[str] = Query(None),
    to_country: Optional[str] = Query(None),
) -> LegOptionsResponse:
    return describe_leg_options(distance_km, from_country, to_country)
