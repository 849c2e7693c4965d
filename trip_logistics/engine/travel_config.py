"""Per-mode speed, overhead and distance limits.

Every engine function takes a ``config`` keyword defaulting to
``DEFAULT_TRAVEL_CONFIG`` so alternative tables can be swapped in without
touching the rules themselves.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from trip_logistics.schemas import TravelMode


@dataclass(frozen=True)
class ModeProfile:
    speed_kmh: float
    overhead_minutes: int
    # Allowance filters for unrestricted legs; None means no limit.
    min_distance_km: Optional[float] = None
    max_distance_km: Optional[float] = None


def _default_profiles() -> Dict[TravelMode, ModeProfile]:
    return {
        # +2h for check-in, security, boarding and taxi
        TravelMode.FLIGHT: ModeProfile(speed_kmh=800, overhead_minutes=120, min_distance_km=100),
        TravelMode.TRAIN: ModeProfile(speed_kmh=120, overhead_minutes=30),
        TravelMode.CAR: ModeProfile(speed_kmh=80, overhead_minutes=10, max_distance_km=1500),
        TravelMode.BUS: ModeProfile(speed_kmh=60, overhead_minutes=15, max_distance_km=1500),
    }


@dataclass(frozen=True)
class TravelConfig:
    profiles: Dict[TravelMode, ModeProfile] = field(default_factory=_default_profiles)
    # Beyond this only flights are permitted.
    distance_threshold_km: float = 400
    # Recommender prefers car below this; independent of the flight min_distance_km.
    car_preferred_below_km: float = 100
    # Train wins unless car is faster by more than this many minutes.
    time_efficiency_tolerance_minutes: int = 30

    def profile(self, mode: TravelMode) -> ModeProfile:
        return self.profiles[mode]


DEFAULT_TRAVEL_CONFIG = TravelConfig()
