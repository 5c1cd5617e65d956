"""Sample the sun's position at fixed time steps along a great-circle flight."""
import logging
import math
from datetime import datetime, timedelta, timezone

from core.errors import InvalidInput
from core.models import GeoPoint, RouteSample
from core.routing import great_circle_point
from core.solar import Ephemeris, get_solar_state

_log = logging.getLogger(__name__)

# Regular steps closer than this to arrival are merged into it (60 µs).
_ARRIVAL_SLACK_MINUTES = 1e-6


def sample_route(
    origin: GeoPoint,
    destination: GeoPoint,
    departure: datetime,
    duration_hours: float,
    interval_minutes: float,
    ephemeris: Ephemeris = get_solar_state,
) -> list[RouteSample]:
    """
    Walk the route from departure to arrival and record the sun at each step.

    Samples are ``interval_minutes`` apart. When the flight time is not a
    whole number of intervals the last step is shorter, so the final sample
    always sits exactly on the destination at arrival time.

    Args:
        origin:           Departure point.
        destination:      Arrival point.
        departure:        Departure instant (naive → assumed UTC).
        duration_hours:   Flight time in hours.
        interval_minutes: Spacing between samples in minutes.
        ephemeris:        Solar provider, ``(instant, position) -> SolarState``.

    Raises:
        InvalidInput: If duration or interval is not a positive number.
    """
    if not (math.isfinite(duration_hours) and duration_hours > 0):
        raise InvalidInput(f"Flight duration must be positive, got {duration_hours}")
    if not (math.isfinite(interval_minutes) and interval_minutes > 0):
        raise InvalidInput(f"Sampling interval must be positive, got {interval_minutes}")

    if departure.tzinfo is None:
        departure = departure.replace(tzinfo=timezone.utc)
    else:
        departure = departure.astimezone(timezone.utc)

    total_minutes = duration_hours * 60
    steps = math.ceil(total_minutes / interval_minutes)

    samples: list[RouteSample] = []
    for i in range(steps + 1):
        elapsed = i * interval_minutes
        # A step landing within float noise of arrival becomes the arrival sample.
        if i > 0 and elapsed >= total_minutes - _ARRIVAL_SLACK_MINUTES:
            fraction = 1.0
            elapsed = total_minutes
        else:
            fraction = elapsed / total_minutes

        position = great_circle_point(origin, destination, fraction)
        timestamp = departure + timedelta(minutes=elapsed)
        solar = ephemeris(timestamp, position)
        samples.append(RouteSample(
            position=position,
            timestamp=timestamp,
            sun_altitude=solar.altitude,
            sun_azimuth=solar.azimuth,
            sunrise=solar.sunrise,
            sunset=solar.sunset,
        ))

        if fraction == 1.0:
            break

    _log.debug(
        "Sampled %d points over %.2f h at %.1f min intervals",
        len(samples), duration_hours, interval_minutes,
    )
    return samples
