"""Battery state and charging-time calculations."""

from __future__ import annotations

import math
from typing import Sequence

from ...models.domain import ChargingInterval, ChargingPlan, ChargingSchedule

DEFAULT_BATTERY_CAPACITY_KWH = 60.0
DEFAULT_CHARGER_POWER_KW = 7.4
MIN_BATTERY_THRESHOLD_PCT = 20.0
CHARGE_TARGET_PCT = 80.0


class InvalidRangeError(ValueError):
    """Raised when a charge is requested to a level below the current one."""


def calculate_remaining_battery(
    current_pct: float,
    energy_consumed_kwh: float,
    capacity_kwh: float = DEFAULT_BATTERY_CAPACITY_KWH,
) -> float:
    """Battery percentage left after consuming ``energy_consumed_kwh``; never below zero."""

    if capacity_kwh <= 0:
        raise ValueError("Battery capacity must be positive.")
    battery_used = max(0.0, energy_consumed_kwh) / capacity_kwh * 100
    return max(0.0, current_pct - battery_used)


def calculate_charging_time(
    current_pct: float,
    target_pct: float,
    charger_power_kw: float = DEFAULT_CHARGER_POWER_KW,
    capacity_kwh: float = DEFAULT_BATTERY_CAPACITY_KWH,
) -> ChargingPlan:
    """Time and energy needed to charge from ``current_pct`` to ``target_pct``."""

    if target_pct < current_pct:
        raise InvalidRangeError(
            f"Target battery {target_pct:.1f}% is below current battery {current_pct:.1f}%."
        )
    if charger_power_kw <= 0:
        raise ValueError("Charger power must be positive.")

    energy_needed = (target_pct - current_pct) / 100 * capacity_kwh
    hours_needed = energy_needed / charger_power_kw
    hours = math.floor(hours_needed)
    return ChargingPlan(
        hours=hours,
        minutes=round((hours_needed - hours) * 60),
        total_minutes=round(hours_needed * 60),
        energy_needed=energy_needed,
    )


def calculate_charging_intervals(
    trip_energies_kwh: Sequence[float],
    initial_battery_pct: float = CHARGE_TARGET_PCT,
    *,
    capacity_kwh: float = DEFAULT_BATTERY_CAPACITY_KWH,
    charger_power_kw: float = DEFAULT_CHARGER_POWER_KW,
    min_threshold_pct: float = MIN_BATTERY_THRESHOLD_PCT,
    charge_to_pct: float = CHARGE_TARGET_PCT,
) -> ChargingSchedule:
    """Plan top-up charges across a day of trips.

    A charge to ``charge_to_pct`` is scheduled before any trip that would otherwise leave the
    battery under ``min_threshold_pct``. A top-up is only planned when the battery is below the
    charge target; otherwise the trip runs on the current charge.
    """
    intervals: list[ChargingInterval] = []
    battery = initial_battery_pct

    for index, energy in enumerate(trip_energies_kwh, start=1):
        after_trip = calculate_remaining_battery(battery, energy, capacity_kwh)
        if after_trip < min_threshold_pct and battery < charge_to_pct:
            intervals.append(
                ChargingInterval(
                    before_trip=index,
                    current_battery=battery,
                    charge_to=charge_to_pct,
                    charging_time=calculate_charging_time(
                        battery, charge_to_pct, charger_power_kw, capacity_kwh
                    ),
                    reason=f"Battery would drop to {after_trip:.1f}% after trip {index}",
                )
            )
            battery = charge_to_pct
        battery = calculate_remaining_battery(battery, energy, capacity_kwh)

    return ChargingSchedule(intervals=intervals, final_battery=battery)
