"""Exception types raised by the sun-side engine."""


class SunFlightError(Exception):
    """Base class for every error raised by the core."""


class InvalidInput(SunFlightError, ValueError):
    """Caller supplied a value the engine cannot work with (fails fast)."""


class DegenerateGeometry(SunFlightError):
    """The great circle between two points is not unique (antipodal ends)."""
