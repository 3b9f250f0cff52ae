"""Charging-time estimation along a simplified charging curve."""

import math
from typing import Tuple

from .exceptions import InvalidRangeError
from .models import ChargeEstimate

DEFAULT_START_PCT = 20.0
DEFAULT_TARGET_PCT = 80.0

# (segment start %, segment end %, efficiency factor)
# Charging power tapers as the battery fills: full power up to 50%, 70% of it
# up to 80%, 40% of it beyond.
CHARGE_CURVE: Tuple[Tuple[float, float, float], ...] = (
    (0.0, 50.0, 1.0),
    (50.0, 80.0, 0.7),
    (80.0, 100.0, 0.4),
)


def _validate_range(start_pct: float, target_pct: float) -> None:
    for name, pct in (("start", start_pct), ("target", target_pct)):
        if not 0 <= pct <= 100:
            raise InvalidRangeError(f"{name} percentage must be within [0, 100], got {pct}")
    if target_pct < start_pct:
        raise InvalidRangeError(
            f"Target percentage {target_pct} is below start percentage {start_pct}"
        )


def energy_needed_kwh(
    battery_capacity_kwh: float,
    start_pct: float = DEFAULT_START_PCT,
    target_pct: float = DEFAULT_TARGET_PCT,
) -> float:
    """Energy required to charge from start_pct to target_pct, in kWh."""
    if battery_capacity_kwh <= 0:
        raise InvalidRangeError(f"Battery capacity must be positive, got {battery_capacity_kwh}")
    _validate_range(start_pct, target_pct)
    return battery_capacity_kwh * (target_pct - start_pct) / 100


def estimate_minutes(
    battery_capacity_kwh: float,
    effective_charging_power_kw: float,
    start_pct: float = DEFAULT_START_PCT,
    target_pct: float = DEFAULT_TARGET_PCT,
) -> int:
    """
    Estimate how long a charging session takes, in whole minutes.

    Each segment of CHARGE_CURVE overlapping [start_pct, target_pct] contributes
    energy / (power * efficiency) hours. The total is rounded once at the end.

    Args:
        battery_capacity_kwh: Usable battery capacity.
        effective_charging_power_kw: The lesser of station output and vehicle
            acceptance power, computed by the caller.
        start_pct: Current state of charge.
        target_pct: Desired state of charge.

    Returns:
        Estimated minutes, >= 0.

    Raises:
        InvalidRangeError: If target_pct < start_pct, a percentage is outside
            [0, 100], or capacity/power is not positive.
    """
    if battery_capacity_kwh <= 0:
        raise InvalidRangeError(f"Battery capacity must be positive, got {battery_capacity_kwh}")
    if effective_charging_power_kw <= 0:
        raise InvalidRangeError(
            f"Charging power must be positive, got {effective_charging_power_kw}"
        )
    _validate_range(start_pct, target_pct)

    total_minutes = 0.0
    for segment_start, segment_end, efficiency in CHARGE_CURVE:
        overlap = min(segment_end, target_pct) - max(segment_start, start_pct)
        if overlap <= 0:
            continue
        energy_kwh = battery_capacity_kwh * overlap / 100
        total_minutes += energy_kwh / (effective_charging_power_kw * efficiency) * 60

    # Round half up
    return math.floor(total_minutes + 0.5)


def estimate_charge(
    battery_capacity_kwh: float,
    effective_charging_power_kw: float,
    start_pct: float = DEFAULT_START_PCT,
    target_pct: float = DEFAULT_TARGET_PCT,
) -> ChargeEstimate:
    """Same as estimate_minutes, split into hours and remaining minutes."""
    minutes = estimate_minutes(
        battery_capacity_kwh, effective_charging_power_kw, start_pct, target_pct
    )
    return ChargeEstimate.from_minutes(minutes)


def estimate_cost(
    battery_capacity_kwh: float,
    price_per_kwh: float,
    start_pct: float = DEFAULT_START_PCT,
    target_pct: float = DEFAULT_TARGET_PCT,
) -> float:
    """Cost of the energy delivered in a session, rounded to cents."""
    if price_per_kwh < 0:
        raise InvalidRangeError(f"Price per kWh cannot be negative, got {price_per_kwh}")
    return round(energy_needed_kwh(battery_capacity_kwh, start_pct, target_pct) * price_per_kwh, 2)
