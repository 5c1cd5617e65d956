"""Value types passed between the geometry, sampling and scoring layers."""
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from core.errors import InvalidInput

RelativePosition = Literal["Ahead", "Behind", "Left", "Right"]
EventKind = Literal["sunrise", "sunset"]
Recommendation = Literal["Left", "Right", "Neither"]


@dataclass(frozen=True)
class GeoPoint:
    """A position on the globe in decimal degrees."""

    latitude: float  # [-90, 90]
    longitude: float  # [-180, 180]

    def __post_init__(self):
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise InvalidInput(f"Non-finite coordinate: ({self.latitude}, {self.longitude})")
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidInput(f"Latitude out of range [-90, 90]: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidInput(f"Longitude out of range [-180, 180]: {self.longitude}")


@dataclass(frozen=True)
class SolarState:
    """What the ephemeris reports for one instant and place."""

    altitude: float  # degrees above horizon, negative below
    azimuth: float  # degrees clockwise from true north
    sunrise: Optional[datetime] = None  # None during polar day/night
    sunset: Optional[datetime] = None


@dataclass(frozen=True)
class RouteSample:
    """Aircraft position and sun state at one sampled instant."""

    position: GeoPoint
    timestamp: datetime  # UTC, tz-aware
    sun_altitude: float
    sun_azimuth: float
    sunrise: Optional[datetime] = None  # ephemeris sunrise for this position
    sunset: Optional[datetime] = None


@dataclass(frozen=True)
class SunEvent:
    kind: EventKind
    time: datetime
    position: GeoPoint
    sun_azimuth: float
    relative_position: RelativePosition


PathSegment = tuple[GeoPoint, ...]


@dataclass(frozen=True)
class SideTally:
    """Interval counts per quadrant over one flight."""

    left: int = 0
    right: int = 0
    ahead: int = 0
    behind: int = 0
    visible_intervals: int = 0
    total_intervals: int = 0

    @property
    def percent_visible(self) -> float:
        if self.total_intervals == 0:
            return 0.0
        return self.visible_intervals / self.total_intervals * 100

    def percent_of_visible(self, quadrant: RelativePosition) -> float:
        """Share of the sunlit intervals spent in ``quadrant`` (not of the whole flight)."""
        if self.visible_intervals == 0:
            return 0.0
        return getattr(self, quadrant.lower()) / self.visible_intervals * 100


@dataclass(frozen=True)
class Classification:
    recommendation: Recommendation
    tally: SideTally
    summary: str

    @property
    def label(self) -> str:
        """Recommendation as shown to travellers, qualified when the sun never rises."""
        if self.tally.visible_intervals == 0:
            return "Neither (sun not visible during flight)"
        return self.recommendation
