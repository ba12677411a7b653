"""Domain-specific exceptions for Demand Core.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from DemandCoreError for easy catching.
"""


class DemandCoreError(Exception):
    """Base exception for all Demand Core errors.

    This is the base class for all domain-specific exceptions in the package.
    Users can catch this exception to handle any fatal pipeline error.
    """

    pass


class ConfigError(DemandCoreError):
    """Raised when there is a configuration error.

    This exception is raised when:
    - Invalid configuration values are provided (negative horizon, bad step)
    - Model options are not supported by the selected engine
    """

    pass


class DataIOError(DemandCoreError):
    """Raised when an input source cannot be read or an output cannot be written."""

    pass


class RowParseError(DemandCoreError):
    """Raised when a single input row cannot be parsed.

    This is a row-level condition: the loader recovers from it by skipping
    the row and logging a diagnostic. It never aborts a run.
    """

    def __init__(self, message: str, row_number: int | None = None) -> None:
        super().__init__(message)
        self.row_number = row_number


class DataQualityError(DemandCoreError):
    """Raised when data quality checks fail.

    This exception is raised when:
    - No usable samples remain after filtering
    - Fewer samples than the configured minimum are available
    """

    pass


class EmptyDatasetError(DataQualityError):
    """Raised when zero rows are accepted from the input source."""

    pass


class InsufficientDataError(DataQualityError):
    """Raised when the training set is smaller than the configured minimum."""

    def __init__(self, count: int, minimum: int) -> None:
        super().__init__(
            f"Not enough data points for forecasting: {count} samples, at least {minimum} required"
        )
        self.count = count
        self.minimum = minimum


class ModelError(DemandCoreError):
    """Raised when the forecasting engine fails.

    The original engine exception is chained as ``__cause__``.
    """

    pass


class FitError(ModelError):
    """Raised when model fitting fails (non-convergence or invalid input)."""

    pass


class PredictError(ModelError):
    """Raised when prediction fails or returns a result not aligned with the horizon."""

    pass


class RenderError(DemandCoreError):
    """Raised when the forecast chart cannot be drawn or written."""

    pass
