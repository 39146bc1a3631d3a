# looproute/models/routing.py

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

KM_PER_MILE = 1.60934


class Coordinate(BaseModel):
    """
    Simple latitude/longitude coordinate in decimal degrees.
    """
    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)


class RouteDifficulty(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    HARD = "hard"


class RouteFilter(str, Enum):
    FLATTEST = "flattest"
    SHORTEST = "shortest"
    FASTEST = "fastest"
    MOST_SCENIC = "most_scenic"


class DistanceUnit(str, Enum):
    KILOMETERS = "kilometers"
    MILES = "miles"


class RouteType(str, Enum):
    LOOP = "loop"
    POINT_TO_POINT = "point_to_point"


class RouteRequest(BaseModel):
    """
    Request body for the /routes/generate endpoint.

    `target_distance` is expressed in `units`. Bounds are checked by
    the request validator, not here, so the error message stays user-facing.
    """
    model_config = ConfigDict(frozen=True)

    start_location: Coordinate
    target_distance: float
    units: DistanceUnit = DistanceUnit.KILOMETERS
    route_type: RouteType = RouteType.LOOP

    @property
    def target_distance_km(self) -> float:
        if self.units == DistanceUnit.MILES:
            return self.target_distance * KM_PER_MILE
        return self.target_distance


class Route(BaseModel):
    """
    A generated jogging route. Distances are always kilometres.

    Instances are frozen: annotation and favourite changes produce a new
    value through `with_annotation` / `with_favorite`.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    distance_km: float = Field(gt=0)
    duration_min: int = Field(gt=0)
    elevation_m: int = Field(ge=0)
    difficulty: RouteDifficulty
    coordinates: List[Coordinate] = Field(default_factory=list)
    start_point: Coordinate
    end_point: Coordinate
    is_loop: bool = True
    label: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_favorite: bool = False

    @model_validator(mode="after")
    def _loop_endpoints_match(self) -> "Route":
        # Only the endpoints are checked; the polyline itself may not close.
        if self.is_loop and self.start_point != self.end_point:
            raise ValueError("loop routes must start and end at the same point")
        return self

    def with_annotation(self, label: Optional[str], description: Optional[str]) -> "Route":
        return self.model_copy(update={"label": label, "description": description})

    def with_favorite(self, is_favorite: bool) -> "Route":
        return self.model_copy(update={"is_favorite": is_favorite})


class DirectionsPath(BaseModel):
    """
    Successful answer from a directions provider: the decoded path plus
    per-leg distances (metres) and durations (seconds).
    """
    coordinates: List[Coordinate]
    leg_distances_m: List[float]
    leg_durations_s: List[float]


class RouteAnnotation(BaseModel):
    label: str
    description: str


class RouteGenerationResponse(BaseModel):
    """
    Response for the /routes/generate endpoint.

    Echoes the requested distance and unit so the client can render the
    result without keeping the request around.
    """
    request_id: str
    routes: List[Route]
    target_distance: float
    units: DistanceUnit
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    mock_count: int = 0


class FilterRoutesRequest(BaseModel):
    routes: List[Route]
    criterion: RouteFilter
