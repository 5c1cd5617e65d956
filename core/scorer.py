"""Per-side sun tallies across a sampled flight, and the seat recommendation."""
import logging
from collections import Counter
from typing import Sequence

from core.models import Classification, Recommendation, RouteSample, SideTally
from core.routing import initial_bearing
from core.scoring import relative_angle, relative_position

_log = logging.getLogger(__name__)

_NOT_VISIBLE_SUMMARY = "The sun is below the horizon for the entire flight."


def tally_sides(samples: Sequence[RouteSample]) -> SideTally:
    """
    Count, for every interval between consecutive samples, which quadrant the
    sun occupies at the start of the interval.

    Intervals that start with the sun below the horizon count towards
    ``total_intervals`` only.
    """
    counts: Counter = Counter()
    visible = 0

    for start, end in zip(samples, samples[1:]):
        if start.sun_altitude < 0:
            continue
        visible += 1
        heading = initial_bearing(start.position, end.position)
        counts[relative_position(relative_angle(start.sun_azimuth, heading))] += 1

    return SideTally(
        left=counts["Left"],
        right=counts["Right"],
        ahead=counts["Ahead"],
        behind=counts["Behind"],
        visible_intervals=visible,
        total_intervals=max(len(samples) - 1, 0),
    )


def recommend_side(tally: SideTally) -> Recommendation:
    """
    Pick the window side that sees the sun for more intervals.

    A tie goes to Left whenever the left side saw the sun at all; this leans
    one way on purpose and is kept as-is until product decides otherwise.
    """
    if tally.visible_intervals == 0:
        return "Neither"
    if tally.left > tally.right:
        return "Left"
    if tally.right > tally.left:
        return "Right"
    return "Left" if tally.left > 0 else "Neither"


def _build_summary(tally: SideTally) -> str:
    if tally.visible_intervals == 0:
        return _NOT_VISIBLE_SUMMARY
    return (
        f"The sun is visible for {tally.percent_visible:.0f}% of the flight: "
        f"{tally.percent_of_visible('Left'):.0f}% on the left, "
        f"{tally.percent_of_visible('Right'):.0f}% on the right, "
        f"{tally.percent_of_visible('Ahead'):.0f}% ahead, "
        f"{tally.percent_of_visible('Behind'):.0f}% behind."
    )


def classify(samples: Sequence[RouteSample]) -> Classification:
    """
    Turn a sampled flight into a seat recommendation.

    Returns:
        Classification with:
            recommendation – "Left", "Right" or "Neither"
            tally          – SideTally with per-quadrant interval counts
            summary        – one human-readable sentence
    """
    tally = tally_sides(samples)
    recommendation = recommend_side(tally)
    _log.debug("Side tally %s → %s", tally, recommendation)
    return Classification(
        recommendation=recommendation,
        tally=tally,
        summary=_build_summary(tally),
    )
