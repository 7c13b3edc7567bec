"""Open-Meteo API client constants.

API docs: https://open-meteo.com/en/docs
"""

FORECAST_PATH = "/v1/forecast"

# Variables we request from the forecast endpoint
CURRENT_VARS = "temperature_2m,weather_code"
HOURLY_VARS = "precipitation_probability,precipitation"

#: Hourly precipitation probability (%) above which an hour counts as rainy.
RAIN_PROBABILITY_THRESHOLD = 30
