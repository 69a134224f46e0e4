"""Human-readable strings for route HUD fields (ETA, remaining distance)."""
import math


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def format_duration(minutes: float) -> str:
    """
    Format a duration given in minutes.

    Examples:
        12.4 -> "12 min", 60 -> "1 hr", 95 -> "1 hr 35 min"
    """
    total = _round_half_up(max(minutes, 0.0))
    if total < 60:
        return f"{total} min"

    hours, mins = divmod(total, 60)
    if mins == 0:
        return f"{hours} hr"
    return f"{hours} hr {mins} min"


def format_distance(km: float) -> str:
    """Format a distance in km; values below 1 km are shown in metres."""
    if km < 1:
        return f"{_round_half_up(km * 1000)} m"
    return f"{km:.1f} km"
