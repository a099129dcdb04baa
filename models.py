from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

TravelMode = Literal["car", "bike", "bus", "train"]


class QueryCategory(str, Enum):
    DIRECTIONS = "directions"
    TRAFFIC_CHECK = "traffic_check"
    DURATION_CHECK = "duration_check"
    ROUTE_STATUS = "route_status"

    @classmethod
    def from_label(cls, label: Optional[str]) -> "QueryCategory":
        """
        Resolve a model reply to a category; anything unrecognized is DIRECTIONS.

        The resolved value is what responses report as `query_type`, not the
        model's raw text (a reply of "weather" is reported as "directions").
        """
        cleaned = (label or "").strip().strip("\"'`.").strip().lower()
        try:
            return cls(cleaned)
        except ValueError:
            return cls.DIRECTIONS


class ModeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: Literal["driving", "transit"]
    avoid: Optional[List[str]] = None
    transit_mode: Optional[List[str]] = None


class RawIntent(BaseModel):
    """Shape the intent prompt asks the model to return."""
    model_config = ConfigDict(str_strip_whitespace=True)

    origin: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    mode: Optional[str] = None


class ExtractedIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    origin: str
    destination: str
    mode: TravelMode = "car"
    mode_config: ModeConfig


class TextValue(BaseModel):
    text: Optional[str] = None
    value: Optional[int] = None


class Step(BaseModel):
    instructions: Optional[str] = None
    distance: Optional[TextValue] = None
    duration: Optional[TextValue] = None
    maneuver: Optional[str] = None


class Leg(BaseModel):
    distance: Optional[TextValue] = None
    duration: Optional[TextValue] = None
    duration_in_traffic: Optional[TextValue] = None
    steps: List[Step] = []


class RouteSummary(BaseModel):
    summary: Optional[str] = None
    legs: List[Leg] = []
    warnings: List[str] = []


class RouteTraffic(BaseModel):
    normal_duration: Optional[str] = None
    traffic_duration: Optional[str] = None
    traffic_status: str
    warnings: List[str] = []


class TrafficInfo(BaseModel):
    has_traffic: bool = True
    routes: List[RouteTraffic] = []


class RouteData(BaseModel):
    routes: List[RouteSummary]
    mode: TravelMode
    current_time: str
    traffic_info: TrafficInfo

    @property
    def first_leg(self) -> Optional[Leg]:
        if self.routes and self.routes[0].legs:
            return self.routes[0].legs[0]
        return None


class CacheEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    response: str
    query_type: str


class DirectionsResponse(BaseModel):
    response: str
    query_type: str
