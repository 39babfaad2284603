"""Display labels for distances and durations."""

import math


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _format_km(meters: float) -> str:
    # Tenths rounded half-up; format() alone rounds ties to even
    return f"{_round_half_up(meters / 100) / 10:.1f} km"


def format_distance_km(meters: float) -> str:
    """Total route distance, always in km with one decimal: '12.3 km'."""
    return _format_km(meters)


def format_duration(seconds: float) -> str:
    """'14 perc' below an hour, '1 ó 5 p' from an hour up."""
    total_minutes = _round_half_up(seconds / 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours} ó {minutes} p"
    return f"{minutes} perc"


def format_step_distance(meters: float) -> str:
    if meters >= 1000:
        return _format_km(meters)
    return f"{_round_half_up(meters)} m"
