"""Data preparation utilities for time series forecasting.

This module provides the checks a training set must pass before it is
handed to a forecasting engine.
"""

from __future__ import annotations

import numpy as np

from demand_core.exceptions import FitError, InsufficientDataError
from demand_core.forecasting.config import MIN_SAMPLES
from demand_core.forecasting.types import TIMESTAMP, TrainingSet


def validate_training_set(training: TrainingSet, min_samples: int = MIN_SAMPLES) -> None:
    """Enforce the minimum sample count policy.

    Args:
        training: Training set to check.
        min_samples: Minimum number of samples required (default: 30).

    Raises:
        InsufficientDataError: If fewer than ``min_samples`` samples are present.
    """
    if len(training) < min_samples:
        raise InsufficientDataError(len(training), min_samples)


def check_chronological(training: TrainingSet) -> None:
    """Ensure training timestamps are strictly increasing.

    Engines call this before fitting: duplicate or out-of-order timestamps
    are rejected instead of being passed to the engine.

    Raises:
        FitError: If any timestamp is not greater than its predecessor.
    """
    timestamps = training[TIMESTAMP].to_numpy(dtype="int64")
    bad = np.flatnonzero(np.diff(timestamps) <= 0)
    if bad.size:
        position = int(bad[0]) + 1
        duplicate = timestamps[position] == timestamps[position - 1]
        kind = "duplicate" if duplicate else "non-chronological"
        raise FitError(
            f"Training timestamps must be strictly increasing: {kind} timestamp "
            f"{int(timestamps[position])} at position {position}"
        )
