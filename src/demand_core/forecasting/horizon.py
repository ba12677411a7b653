"""Future timestamp generation for forecasts."""

from __future__ import annotations

from demand_core.exceptions import ConfigError
from demand_core.forecasting.config import HORIZON_STEP_SECONDS, HORIZON_STEPS


def generate_horizon(
    last_timestamp: int,
    step_seconds: int = HORIZON_STEP_SECONDS,
    count: int = HORIZON_STEPS,
) -> list[int]:
    """Generate ``count`` evenly spaced timestamps after ``last_timestamp``.

    Args:
        last_timestamp: Last observed unix timestamp (seconds).
        step_seconds: Spacing between horizon entries (default: 3600).
        count: Number of entries (default: 168, one week of hours).

    Returns:
        List where ``result[i] == last_timestamp + (i + 1) * step_seconds``.

    Raises:
        ConfigError: If ``step_seconds`` is not positive or ``count`` is negative.

    Examples:
        >>> generate_horizon(1000, 3600, 3)
        [4600, 8200, 11800]
    """
    if step_seconds <= 0:
        raise ConfigError(f"Horizon step must be positive, got {step_seconds}")
    if count < 0:
        raise ConfigError(f"Horizon length must not be negative, got {count}")

    last_timestamp = int(last_timestamp)
    return [last_timestamp + i * step_seconds for i in range(1, count + 1)]
