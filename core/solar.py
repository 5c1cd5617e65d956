"""Solar position and sunrise/sunset lookups using pvlib."""
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import pandas as pd
import pvlib

from core.models import GeoPoint, SolarState

# Signature every ephemeris provider must follow; the sampler only needs this.
Ephemeris = Callable[[datetime, GeoPoint], SolarState]


def _as_utc(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def _solar_day_zone(longitude: float) -> timezone:
    """Fixed offset approximating local solar time, so SPA picks the right day."""
    return timezone(timedelta(hours=round(longitude / 15)))


def _to_datetime(value) -> Optional[datetime]:
    if pd.isna(value):
        return None
    return pd.Timestamp(value).tz_convert("UTC").to_pydatetime()


def get_solar_state(instant: datetime, position: GeoPoint) -> SolarState:
    """
    Return the sun's apparent altitude and azimuth at ``position`` and
    ``instant``, together with that day's sunrise and sunset.

    Args:
        instant:  Moment to evaluate (naive → assumed UTC).
        position: Observer location.

    Returns:
        SolarState with:
            altitude – degrees above horizon (negative when below)
            azimuth  – degrees clockwise from north (0–360)
            sunrise  – UTC datetime, or None when the sun never rises
            sunset   – UTC datetime, or None when the sun never sets
    """
    times = pd.DatetimeIndex([pd.Timestamp(_as_utc(instant))])
    location = pvlib.location.Location(
        latitude=position.latitude, longitude=position.longitude
    )
    solar_pos = location.get_solarposition(times)

    local_times = times.tz_convert(_solar_day_zone(position.longitude))
    events = pvlib.solarposition.sun_rise_set_transit_spa(
        local_times, position.latitude, position.longitude
    )

    return SolarState(
        altitude=round(float(solar_pos["apparent_elevation"].iloc[0]), 4),
        azimuth=round(float(solar_pos["azimuth"].iloc[0]), 4) % 360,
        sunrise=_to_datetime(events["sunrise"].iloc[0]),
        sunset=_to_datetime(events["sunset"].iloc[0]),
    )
