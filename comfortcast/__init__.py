"""Weather comfort forecasts fused from NASA POWER, Open-Meteo and recent history."""

__version__ = "0.1.0"
