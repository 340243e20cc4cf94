"""Energy consumption and battery planning."""

from .battery import (
    InvalidRangeError,
    calculate_charging_intervals,
    calculate_charging_time,
    calculate_remaining_battery,
)
from .model import (
    calculate_elevation_changes,
    calculate_energy_consumption,
    efficiency_rating,
    prepare_elevation_profile,
)

__all__ = [
    "InvalidRangeError",
    "calculate_charging_intervals",
    "calculate_charging_time",
    "calculate_remaining_battery",
    "calculate_elevation_changes",
    "calculate_energy_consumption",
    "efficiency_rating",
    "prepare_elevation_profile",
]
