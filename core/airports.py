"""Airport catalogue and local-time helpers for turning user input into core inputs."""
import json
import logging
import re
from datetime import datetime, time, timedelta
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core import config
from core.errors import InvalidInput
from core.models import GeoPoint

_log = logging.getLogger(__name__)

_COORDS_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*,\s*(-?\d+(?:\.\d+)?)\s*$")


class Airport(BaseModel):
    model_config = ConfigDict(frozen=True)

    iata: str = Field(..., pattern=r"^[A-Z]{3}$")
    name: str = Field(..., min_length=1)
    city: str
    country: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    timezone: str

    @field_validator("timezone")
    @classmethod
    def _known_zone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown IANA timezone {value!r}") from None
        return value

    @property
    def point(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

def load_airports(path: Optional[Path] = None) -> dict[str, Airport]:
    """
    Read and validate an airport list from a JSON array of records.

    Raises:
        InvalidInput: If the file is not a JSON array or a record fails
                      validation (the offending record's index is named).
    """
    path = Path(path) if path is not None else config.airports_file()
    with path.open(encoding="utf-8") as fh:
        records = json.load(fh)
    if not isinstance(records, list):
        raise InvalidInput(f"{path}: expected a JSON array of airports")

    airports: dict[str, Airport] = {}
    for index, record in enumerate(records):
        try:
            airport = Airport.model_validate(record)
        except ValidationError as exc:
            raise InvalidInput(f"{path}: airport record #{index} is invalid: {exc}") from exc
        if airport.iata in airports:
            _log.warning("Duplicate airport %s in %s; keeping the last entry", airport.iata, path)
        airports[airport.iata] = airport

    _log.debug("Loaded %d airports from %s", len(airports), path)
    return airports


@lru_cache(maxsize=1)
def default_airports() -> dict[str, Airport]:
    """The configured catalogue, loaded once and treated as read-only."""
    return load_airports()


def find_airport(
    iata: str, airports: Optional[dict[str, Airport]] = None
) -> Optional[Airport]:
    if airports is None:
        airports = default_airports()
    return airports.get(iata.strip().upper())


def parse_location(
    text: str, airports: Optional[dict[str, Airport]] = None
) -> tuple[GeoPoint, Optional[Airport]]:
    """
    Resolve an IATA code or a ``"lat,lng"`` string to a point.

    Returns the point and, for IATA input, the matching airport.

    Raises:
        InvalidInput: Unknown airport code or coordinates out of range.
    """
    match = _COORDS_RE.match(text)
    if match:
        return GeoPoint(float(match.group(1)), float(match.group(2))), None

    airport = find_airport(text, airports)
    if airport is None:
        raise InvalidInput(f"Unknown airport code or coordinates: {text!r}")
    return airport.point, airport


# ---------------------------------------------------------------------------
# Local time
# ---------------------------------------------------------------------------

def localize_departure(local_dt: datetime, tz_name: str) -> datetime:
    """Attach ``tz_name`` to a naive local wall-clock time; aware values pass through."""
    if local_dt.tzinfo is not None:
        return local_dt
    return local_dt.replace(tzinfo=ZoneInfo(tz_name))


def is_dst_changeover(dt: datetime) -> bool:
    """
    True when the local calendar day containing ``dt`` switches UTC offset.

    ``dt`` must be timezone-aware; the day is taken in its own zone.
    """
    if dt.tzinfo is None:
        raise InvalidInput("DST check needs a timezone-aware datetime")
    zone = dt.tzinfo
    start = datetime.combine(dt.date(), time.min, tzinfo=zone)
    end = datetime.combine(dt.date(), time.max, tzinfo=zone)
    return start.utcoffset() != end.utcoffset()


def dst_warnings(
    departure: datetime, arrival: datetime,
    origin: Optional[Airport], destination: Optional[Airport],
) -> list[str]:
    """Human-readable warnings for departure/arrival days that change clocks."""
    warnings = []
    if origin is not None and is_dst_changeover(departure.astimezone(origin.zone)):
        warnings.append(f"Departure day is a DST changeover in {origin.city}.")
    if destination is not None and is_dst_changeover(arrival.astimezone(destination.zone)):
        warnings.append(f"Arrival day is a DST changeover in {destination.city}.")
    return warnings


def arrival_time(departure: datetime, duration_hours: float) -> datetime:
    return departure + timedelta(hours=duration_hours)
