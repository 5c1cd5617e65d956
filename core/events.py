"""Sunrise and sunset detection along a sampled flight."""
import logging
from datetime import datetime
from typing import Optional, Sequence

from core.models import EventKind, RouteSample, SunEvent
from core.routing import initial_bearing
from core.scoring import relative_angle, relative_position

_log = logging.getLogger(__name__)


def _crossing_time(
    before: RouteSample, after: RouteSample, reported: Optional[datetime]
) -> datetime:
    """
    When the sun crossed the horizon inside the bracket.

    The ephemeris' own event time wins when it falls inside the bracket;
    otherwise the zero crossing of altitude is interpolated linearly.
    """
    if reported is not None and before.timestamp <= reported <= after.timestamp:
        return reported

    change = after.sun_altitude - before.sun_altitude
    fraction = abs(before.sun_altitude) / abs(change) if change else 1.0
    return before.timestamp + fraction * (after.timestamp - before.timestamp)


def _event(kind: EventKind, before: RouteSample, after: RouteSample) -> SunEvent:
    reported = after.sunrise if kind == "sunrise" else after.sunset

    # Position and azimuth come from the later sample; the bracket is short.
    heading = initial_bearing(before.position, after.position)
    return SunEvent(
        kind=kind,
        time=_crossing_time(before, after, reported),
        position=after.position,
        sun_azimuth=after.sun_azimuth,
        relative_position=relative_position(relative_angle(after.sun_azimuth, heading)),
    )


def detect_sun_events(samples: Sequence[RouteSample]) -> list[SunEvent]:
    """
    Find every sunrise and sunset crossed between consecutive samples.

    A sunrise is a step from below the horizon (< 0°) to at/above it; a sunset
    is the reverse. Events come back in flight order.
    """
    events: list[SunEvent] = []
    for before, after in zip(samples, samples[1:]):
        if before.sun_altitude < 0 <= after.sun_altitude:
            events.append(_event("sunrise", before, after))
        elif before.sun_altitude >= 0 > after.sun_altitude:
            events.append(_event("sunset", before, after))

    _log.debug("Detected %d sun events over %d samples", len(events), len(samples))
    return events
