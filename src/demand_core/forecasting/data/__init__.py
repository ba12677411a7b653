"""Data loading and preparation utilities."""

from demand_core.forecasting.data.loaders import (
    format_timestamp,
    load_training_set,
    parse_row,
    parse_timestamp,
)
from demand_core.forecasting.data.preparation import (
    check_chronological,
    validate_training_set,
)

__all__ = [
    "check_chronological",
    "format_timestamp",
    "load_training_set",
    "parse_row",
    "parse_timestamp",
    "validate_training_set",
]
