"""Filesystem configuration for Demand Core.

This module provides a single, simple configuration class for the input
and output locations used by the forecasting pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class DataPaths:
    """All filesystem paths used by the forecasting pipeline.

    Attributes:
        data_root: Root directory holding the site data.
        output_root: Directory where chart artifacts are written.

    Directory Structure:
        data_root/
        └── site_data.csv    # headerless demand export
        output_root/
        └── forecast.png     # actual vs. predicted chart
    """

    data_root: Path
    output_root: Path

    @classmethod
    def from_root(
        cls,
        data_root: str | Path,
        output_root: str | Path | None = None,
    ) -> DataPaths:
        """Create DataPaths from a data directory and an optional output directory.

        Args:
            data_root: Root directory for input data.
            output_root: Directory for rendered charts. Defaults to the current directory.

        Returns:
            DataPaths instance.

        Examples:
            >>> paths = DataPaths.from_root("data")
            >>> paths.site_data
            PosixPath('data/site_data.csv')
        """
        if isinstance(data_root, str):
            data_root = Path(data_root)
        if output_root is None:
            output_root = Path(".")
        elif isinstance(output_root, str):
            output_root = Path(output_root)

        return cls(data_root=data_root, output_root=output_root)

    @property
    def site_data(self) -> Path:
        """Default headerless site export consumed by the loader."""
        return self.data_root / "site_data.csv"

    @property
    def forecast_chart(self) -> Path:
        """Default location of the rendered forecast chart."""
        return self.output_root / "forecast.png"

    def ensure_dirs(self) -> None:
        """Create the output directory if it does not exist."""
        self.output_root.mkdir(parents=True, exist_ok=True)
