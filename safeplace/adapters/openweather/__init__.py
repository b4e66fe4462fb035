from .client import OpenWeatherClient

__all__ = ["OpenWeatherClient"]
