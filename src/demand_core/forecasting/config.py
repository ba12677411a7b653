"""Configuration constants for forecasting pipeline."""

# Input schema of the site export (zero-based column positions, no header row)
TIMESTAMP_COLUMN = 1
VALUE_COLUMN = 7
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"
DELIMITER = ","

# Minimum number of accepted samples before a model is fitted
MIN_SAMPLES = 30

# Forecast horizon: one week of hourly points
HORIZON_STEP_SECONDS = 3600
HORIZON_STEPS = 168

# Seasonal periods in seconds
DAILY_PERIOD_SECONDS = 24 * 3600
WEEKLY_PERIOD_SECONDS = 7 * 24 * 3600

# Chart canvas (pixels) and labels
CHART_WIDTH = 900
CHART_HEIGHT = 600
CHART_DPI = 100
CHART_TITLE = "EV Charging Demand Forecast"
CHART_FILENAME = "forecast.png"
