from .weather import register_weather

__all__ = ["register_weather"]
