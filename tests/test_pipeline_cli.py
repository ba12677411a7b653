"""Tests for the forecasting command-line interface and path configuration."""

from pathlib import Path

from demand_core import DataPaths
from demand_core.forecasting import pipeline
from demand_core.forecasting.pipeline import build_parser, main
from test_utils import hourly_rows, write_site_csv


def test_data_paths_from_root() -> None:
    """Test derived input and output locations."""
    paths = DataPaths.from_root("data", "out")

    assert paths.site_data == Path("data") / "site_data.csv"
    assert paths.forecast_chart == Path("out") / "forecast.png"
    assert DataPaths.from_root("data").output_root == Path(".")


def test_data_paths_ensure_dirs(tmp_path) -> None:
    """Test that the output directory is created."""
    paths = DataPaths.from_root(tmp_path / "data", tmp_path / "out" / "charts")
    paths.ensure_dirs()

    assert paths.output_root.is_dir()


def test_parser_defaults() -> None:
    """Test the CLI defaults match the pipeline policy."""
    args = build_parser().parse_args([])

    assert args.model == "prophet"
    assert args.horizon == 168
    assert args.step == 3600
    assert args.min_samples == 30
    assert args.timestamp_column == 1
    assert args.value_column == 7
    assert args.y_range == "union"


def test_main_success_prints_report_and_writes_chart(tmp_path, capsys) -> None:
    """Test a full CLI run with the naive engine."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(40))
    chart = tmp_path / "forecast.png"

    status = main(
        ["--file", str(source), "--output", str(chart), "--model", "naive", "--horizon", "5"]
    )

    assert status == 0
    out = capsys.readouterr().out
    report = [line for line in out.splitlines() if line.startswith("2024-01-02 ")]
    assert len(report) == 5
    assert report[0].startswith("2024-01-02 16:00 | ")
    assert chart.exists()


def test_main_no_chart(tmp_path, monkeypatch) -> None:
    """Test that --no-chart skips rendering."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(30))
    monkeypatch.chdir(tmp_path)

    status = main(["--file", str(source), "--model", "naive", "--no-chart"])

    assert status == 0
    assert not (tmp_path / "forecast.png").exists()


def test_main_missing_file_exits_with_error(tmp_path, capsys) -> None:
    """Test that pipeline errors give a non-zero status and a message."""
    status = main(["--file", str(tmp_path / "missing.csv"), "--model", "naive", "--no-chart"])

    assert status == 1
    assert "ERROR" in capsys.readouterr().err


def test_main_insufficient_data(tmp_path, capsys) -> None:
    """Test the minimum sample policy from the command line."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(10))

    status = main(["--file", str(source), "--model", "naive", "--no-chart"])

    assert status == 1
    assert "Not enough data points" in capsys.readouterr().err


def test_main_prints_report_when_chart_cannot_be_written(tmp_path, capsys) -> None:
    """Test that predictions are printed before a chart failure ends the run."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(40))
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    status = main(
        [
            "--file", str(source),
            "--output", str(blocker / "forecast.png"),
            "--model", "naive",
            "--horizon", "3",
        ]
    )

    assert status == 1
    captured = capsys.readouterr()
    report = [line for line in captured.out.splitlines() if line.startswith("2024-01-02 ")]
    assert len(report) == 3
    assert "Could not write chart" in captured.err
    assert "Forecast saved to" not in captured.out


def test_main_keyboard_interrupt_exits_130(tmp_path, monkeypatch, capsys) -> None:
    """Test that Ctrl-C during a run gives exit status 130 instead of a traceback."""
    source = write_site_csv(tmp_path / "site.csv", hourly_rows(40))

    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(pipeline, "run_forecast", interrupted)

    status = main(["--file", str(source), "--model", "naive", "--no-chart"])

    assert status == 130
    assert "Interrupted" in capsys.readouterr().err
