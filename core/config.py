"""Runtime settings read from the environment (and an optional .env file)."""
import os
from pathlib import Path

from dotenv import load_dotenv

from core.errors import InvalidInput

load_dotenv()

_DEFAULT_AIRPORTS_FILE = Path(__file__).resolve().parent / "data" / "airports.json"


def _positive_number(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise InvalidInput(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise InvalidInput(f"{name} must be positive, got {value}")
    return value


def interval_minutes() -> float:
    """Default spacing between solar samples (SUNFLIGHT_INTERVAL_MINUTES)."""
    return _positive_number("SUNFLIGHT_INTERVAL_MINUTES", 10.0)


def path_steps() -> int:
    """Number of steps in the display path (SUNFLIGHT_PATH_STEPS)."""
    return int(_positive_number("SUNFLIGHT_PATH_STEPS", 20))


def airports_file() -> Path:
    return Path(os.getenv("SUNFLIGHT_AIRPORTS_FILE") or _DEFAULT_AIRPORTS_FILE)
