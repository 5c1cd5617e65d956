"""API route definitions."""
import logging
from datetime import datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from core import config
from core.airports import (
    arrival_time,
    dst_warnings,
    find_airport,
    localize_departure,
    parse_location,
)
from core.errors import InvalidInput, SunFlightError
from core.events import detect_sun_events
from core.models import GeoPoint
from core.routing import great_circle_path, segment_route
from core.sampler import sample_route
from core.scorer import classify
from core.scoring import score_seat
from core.solar import get_solar_state

router = APIRouter()

_log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

class RecommendRequest(BaseModel):
    origin: str = Field(..., min_length=1, description="Origin IATA code or 'lat,lng'")
    destination: str = Field(..., min_length=1, description="Destination IATA code or 'lat,lng'")
    departure_time: datetime = Field(
        ...,
        description="Departure time in ISO 8601; naive values are local to the "
                    "origin airport (UTC for raw coordinates)",
    )
    duration_hours: float = Field(..., gt=0, le=24 * 3, description="Flight time in hours")
    interval_minutes: Optional[float] = Field(
        None, gt=0, le=120, description="Sampling interval; server default when omitted"
    )


class Point(BaseModel):
    lat: float
    lng: float


class Tally(BaseModel):
    left: int
    right: int
    ahead: int
    behind: int
    visible_intervals: int
    total_intervals: int
    percent_visible: float


class SunEventOut(BaseModel):
    kind: Literal["sunrise", "sunset"]
    time: datetime
    position: Point
    sun_azimuth: float
    relative_position: Literal["Ahead", "Behind", "Left", "Right"]


class RecommendResponse(BaseModel):
    recommendation: Literal["Left", "Right", "Neither"]
    recommendation_label: str
    summary: str
    tally: Tally
    events: list[SunEventOut]
    path_segments: list[list[Point]]
    departure_time: datetime
    arrival_time: datetime
    warnings: list[str]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _point(p: GeoPoint) -> Point:
    return Point(lat=round(p.latitude, 5), lng=round(p.longitude, 5))


def _as_utc(dt: Optional[datetime]) -> datetime:
    if dt is None:
        return datetime.now(timezone.utc)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def _state_or_502(dt: datetime, position: GeoPoint):
    try:
        return get_solar_state(dt, position)
    except Exception as exc:
        _log.warning("Ephemeris lookup failed at (%.4f, %.4f): %s",
                     position.latitude, position.longitude, exc)
        raise HTTPException(status_code=502, detail="Solar ephemeris is unavailable.")


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/sun-position")
def sun_position(
    lat: float = Query(..., description="Latitude"),
    lon: float = Query(..., description="Longitude"),
    dt: datetime = Query(default=None, description="ISO datetime (UTC); defaults to now"),
):
    try:
        position = GeoPoint(lat, lon)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    state = _state_or_502(_as_utc(dt), position)
    return {
        "altitude": state.altitude,
        "azimuth": state.azimuth,
        "sunrise": state.sunrise,
        "sunset": state.sunset,
    }


@router.get("/seat-score")
def seat_score(
    lat: float = Query(..., description="Latitude"),
    lon: float = Query(..., description="Longitude"),
    heading: float = Query(..., description="Aircraft heading in degrees (0=North, clockwise)"),
    dt: datetime = Query(default=None, description="ISO datetime (UTC); defaults to now"),
):
    try:
        position = GeoPoint(lat, lon)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    state = _state_or_502(_as_utc(dt), position)
    return {
        "altitude": state.altitude,
        "azimuth": state.azimuth,
        **score_seat(sun_azimuth=state.azimuth, heading=heading),
    }


@router.get("/airports/{iata}")
def airport(iata: str):
    found = find_airport(iata)
    if found is None:
        raise HTTPException(status_code=404, detail=f"Unknown airport {iata!r}")
    return found.model_dump()


# ---------------------------------------------------------------------------
# POST /recommend
# ---------------------------------------------------------------------------

@router.post("/recommend", response_model=RecommendResponse)
def recommend(body: RecommendRequest) -> RecommendResponse:
    """
    Full seat-recommendation pipeline:
      1. Resolve origin/destination and the local departure time
      2. Sample the sun along the great-circle route
      3. Detect sunrise/sunset crossings and tally sun sides
      4. Return the recommendation with events and a display path
    """
    # --- Step 1: inputs ---
    try:
        origin, origin_airport = parse_location(body.origin)
        destination, dest_airport = parse_location(body.destination)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    departure = body.departure_time
    if origin_airport is not None:
        departure = localize_departure(departure, origin_airport.timezone)
    departure = _as_utc(departure)
    arrival = arrival_time(departure, body.duration_hours)
    if dest_airport is not None:
        arrival = arrival.astimezone(dest_airport.zone)

    warnings = dst_warnings(departure, arrival, origin_airport, dest_airport)
    for warning in warnings:
        _log.warning(warning)

    # --- Step 2: sampling ---
    try:
        samples = sample_route(
            origin, destination, departure, body.duration_hours,
            body.interval_minutes or config.interval_minutes(),
            ephemeris=get_solar_state,
        )
        path = great_circle_path(origin, destination, config.path_steps())
    except SunFlightError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        _log.warning("Route sampling failed: %s", exc)
        raise HTTPException(status_code=502, detail="Solar ephemeris is unavailable.")

    # --- Step 3: events and sides ---
    events = detect_sun_events(samples)
    result = classify(samples)

    # --- Step 4: response assembly ---
    tally = result.tally
    return RecommendResponse(
        recommendation=result.recommendation,
        recommendation_label=result.label,
        summary=result.summary,
        tally=Tally(
            left=tally.left,
            right=tally.right,
            ahead=tally.ahead,
            behind=tally.behind,
            visible_intervals=tally.visible_intervals,
            total_intervals=tally.total_intervals,
            percent_visible=round(tally.percent_visible, 1),
        ),
        events=[
            SunEventOut(
                kind=ev.kind,
                time=ev.time,
                position=_point(ev.position),
                sun_azimuth=ev.sun_azimuth,
                relative_position=ev.relative_position,
            )
            for ev in events
        ],
        path_segments=[[_point(p) for p in seg] for seg in segment_route(path)],
        departure_time=departure,
        arrival_time=arrival,
        warnings=warnings,
    )
