from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from trip_logistics.engine.formatting import format_duration


# ------- Enumerations -------
class TravelMode(str, Enum):
    # Declaration order is the tie-break order when options are ranked.
    FLIGHT = "flight"
    TRAIN = "train"
    CAR = "car"
    BUS = "bus"


class RestrictionKind(str, Enum):
    DISTANCE_EXCEEDED = "distance"
    CROSS_CONTINENTAL = "cross-continent"


def _validate_iso_date(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    datetime.strptime(str(value), "%Y-%m-%d")  # raises ValueError -> ValidationError
    return str(value)


# ------- Geocoded inputs -------
class GeoPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class City(BaseModel):
    """A geocoded city. Accepts the geocoder's flat latitude/longitude shape too."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    country: str = ""
    country_code: Optional[str] = None
    geo: GeoPoint

    @model_validator(mode="before")
    @classmethod
    def _lift_flat_coordinates(cls, data: Any) -> Any:
        if isinstance(data, dict) and "geo" not in data and "latitude" in data and "longitude" in data:
            data = dict(data)
            data["geo"] = {"latitude": data.pop("latitude"), "longitude": data.pop("longitude")}
        return data

    @field_validator("country_code", mode="before")
    @classmethod
    def _normalise_country_code(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        code = str(value).strip().upper()
        return code or None


# ------- Engine outputs -------
class ModeOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: TravelMode
    duration_minutes: int = Field(..., ge=0)
    is_recommended: bool = False
    is_allowed: bool = True
    restriction_reason: Optional[str] = None

    @computed_field  # type: ignore[misc]
    @property
    def duration_label(self) -> str:
        return format_duration(self.duration_minutes)


class TravelLeg(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_city: City
    to_city: City
    distance_km: int = Field(..., ge=0)
    options: List[ModeOption]
    restriction: Optional[RestrictionKind] = None
    is_cross_continental: bool = False

    @property
    def recommended_option(self) -> Optional[ModeOption]:
        return next((opt for opt in self.options if opt.is_recommended), None)


class TravelDay(BaseModel):
    day_index: int = Field(..., ge=0)
    date: Optional[str] = None
    legs: List[TravelLeg] = Field(default_factory=list)


# ------- Request models -------
class TravelPlanRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    cities: List[City] = Field(default_factory=list)
    origin: Optional[City] = None
    total_days: int = Field(..., ge=1, validation_alias=AliasChoices("total_days", "days"))
    start_date: Optional[str] = None

    @field_validator("start_date", mode="before")
    @classmethod
    def _check_start_date(cls, value: Any) -> Optional[str]:
        return _validate_iso_date(value)


class CityNamesRequest(BaseModel):
    """Un-geocoded variant: city names the service resolves itself."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    cities: List[str] = Field(default_factory=list)
    origin: Optional[str] = None
    total_days: int = Field(..., ge=1, validation_alias=AliasChoices("total_days", "days"))
    start_date: Optional[str] = None

    @field_validator("start_date", mode="before")
    @classmethod
    def _check_start_date(cls, value: Any) -> Optional[str]:
        return _validate_iso_date(value)


# ------- Response models -------
class TravelPlanResponse(BaseModel):
    legs: List[TravelLeg] = Field(default_factory=list)
    days: List[TravelDay] = Field(default_factory=list)
    total_distance_km: int = 0
    notes: List[str] = Field(default_factory=list)


class LegOptionsResponse(BaseModel):
    distance_km: int
    restriction: Optional[RestrictionKind] = None
    is_cross_continental: bool = False
    recommended_mode: TravelMode
    options: List[ModeOption]
