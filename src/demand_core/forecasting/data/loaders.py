"""Data loading utilities for forecasting pipeline.

Reads a headerless delimited site export and turns it into a training set.
The file schema is fixed: the timestamp and the demand value live at known
column positions, the timestamp uses a fixed wall-clock format.
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

import numpy as np
import pandas as pd

from demand_core.exceptions import DataIOError, EmptyDatasetError, RowParseError
from demand_core.forecasting.config import (
    DELIMITER,
    TIMESTAMP_COLUMN,
    TIMESTAMP_FORMAT,
    VALUE_COLUMN,
)
from demand_core.forecasting.types import TrainingSet, make_training_set

logger = logging.getLogger(__name__)

# Naive wall-clock values are measured from this instant, no local offset applied
EPOCH = pd.Timestamp("1970-01-01")
ONE_SECOND = pd.Timedelta(seconds=1)


def parse_timestamp(text: str, fmt: str = TIMESTAMP_FORMAT) -> int:
    """Parse a naive wall-clock string into unix seconds.

    The wall-clock value is converted as-is, with no local UTC offset applied,
    so the result does not depend on the machine's timezone.

    Args:
        text: Timestamp string, e.g. "2024-01-01 13:14".
        fmt: strftime-style format of ``text``.

    Returns:
        Unix timestamp in seconds.

    Raises:
        ValueError: If ``text`` does not match ``fmt``.

    Examples:
        >>> parse_timestamp("1970-01-01 01:00")
        3600
    """
    stamp = pd.to_datetime(text, format=fmt)
    return int((stamp - EPOCH) // ONE_SECOND)


def format_timestamp(timestamp: int, fmt: str = TIMESTAMP_FORMAT) -> str:
    """Format unix seconds back into the wall-clock string used by the input file.

    Examples:
        >>> format_timestamp(3600)
        '1970-01-01 01:00'
    """
    return (EPOCH + int(timestamp) * ONE_SECOND).strftime(fmt)


def parse_row(
    record: list[str],
    timestamp_column: int = TIMESTAMP_COLUMN,
    value_column: int = VALUE_COLUMN,
    timestamp_format: str = TIMESTAMP_FORMAT,
    row_number: int | None = None,
) -> tuple[int, float]:
    """Extract the (timestamp, value) pair from one raw record.

    The loader parses whole columns at once and only calls this for rows it
    rejected, to explain why.

    Args:
        record: Fields of one CSV row.
        timestamp_column: Position of the timestamp field.
        value_column: Position of the value field.
        timestamp_format: Format of the timestamp field.
        row_number: 1-based row number, used in error messages.

    Returns:
        Tuple of (unix seconds, value). The value is not range-checked here.

    Raises:
        RowParseError: If a field is missing or cannot be parsed.
    """
    needed = max(timestamp_column, value_column) + 1
    if len(record) < needed:
        raise RowParseError(
            f"expected at least {needed} fields, got {len(record)}", row_number=row_number
        )

    ts_str = record[timestamp_column].strip()
    value_str = record[value_column].strip()

    try:
        timestamp = parse_timestamp(ts_str, timestamp_format)
    except ValueError as e:
        raise RowParseError(f"invalid timestamp {ts_str!r}: {e}", row_number=row_number) from e

    try:
        value = float(pd.to_numeric(value_str))
    except (ValueError, TypeError) as e:
        raise RowParseError(f"invalid value {value_str!r}", row_number=row_number) from e

    if not np.isfinite(value):
        raise RowParseError(f"non-finite value {value_str!r}", row_number=row_number)

    return timestamp, value


def _strip(field: object) -> object:
    return field.strip() if isinstance(field, str) else field


def _read_records(path: Path, needed: int, delimiter: str) -> pd.DataFrame:
    """Read the file as strings; short rows are padded with NaN, long rows truncated."""
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", pd.errors.ParserWarning)
            return pd.read_csv(
                path,
                header=None,
                sep=delimiter,
                names=list(range(needed)),
                index_col=False,
                dtype=str,
                keep_default_na=False,
                engine="python",
                on_bad_lines=lambda fields: fields[:needed],
                encoding="utf-8",
            )
    except pd.errors.EmptyDataError:
        return pd.DataFrame(columns=list(range(needed)), dtype=str)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError) as e:
        raise DataIOError(f"Could not read {path}: {e}") from e


def load_training_set(
    source: str | Path,
    timestamp_column: int = TIMESTAMP_COLUMN,
    value_column: int = VALUE_COLUMN,
    timestamp_format: str = TIMESTAMP_FORMAT,
    delimiter: str = DELIMITER,
) -> TrainingSet:
    """Load the training set from a headerless delimited file.

    Rows whose timestamp or value cannot be parsed are skipped with a warning.
    Rows with a non-positive value are skipped as well. Accepted samples keep
    the file's row order.

    Args:
        source: Path to the delimited file.
        timestamp_column: Position of the timestamp field (default: 1).
        value_column: Position of the demand value field (default: 7).
        timestamp_format: Format of the timestamp field.
        delimiter: Field delimiter.

    Returns:
        TrainingSet with ``timestamp`` and ``value`` columns.

    Raises:
        DataIOError: If the file does not exist or cannot be read.
        EmptyDatasetError: If no row was accepted.
    """
    path = Path(source)
    if not path.is_file():
        raise DataIOError(f"Input file not found: {path}")

    records = _read_records(path, max(timestamp_column, value_column) + 1, delimiter)

    ts_text = records[timestamp_column].map(_strip)
    value_text = records[value_column].map(_strip)
    parsed_ts = pd.to_datetime(ts_text, format=timestamp_format, errors="coerce")
    parsed_values = pd.to_numeric(value_text, errors="coerce").astype("float64")

    well_formed = parsed_ts.notna() & np.isfinite(parsed_values)
    positive = well_formed & (parsed_values > 0)

    for position in np.flatnonzero(~well_formed.to_numpy()):
        row = records.iloc[position]
        record = [field for field in row.tolist() if isinstance(field, str)]
        try:
            parse_row(
                record,
                timestamp_column=timestamp_column,
                value_column=value_column,
                timestamp_format=timestamp_format,
                row_number=position + 1,
            )
        except RowParseError as e:
            reason = str(e)
        else:
            reason = "could not be parsed"
        logger.warning("Skipping invalid row %d: %s | %s", position + 1, reason, record)

    for position in np.flatnonzero((well_formed & ~positive).to_numpy()):
        logger.info(
            "Skipping non-positive value at row %d: %s", position + 1, parsed_values.iloc[position]
        )

    skipped_invalid = int((~well_formed).sum())
    skipped_non_positive = int((well_formed & ~positive).sum())
    timestamps = (parsed_ts[positive] - EPOCH) // ONE_SECOND
    values = parsed_values[positive]

    logger.info(
        "Loaded %d samples from %s (%d invalid rows, %d non-positive values skipped)",
        len(values),
        path,
        skipped_invalid,
        skipped_non_positive,
    )

    if values.empty:
        raise EmptyDatasetError(
            f"No valid data found in {path}. Please check file format."
        )

    return make_training_set(timestamps.to_numpy(dtype="int64"), values.to_numpy())
