from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    openweather_api_key: str = ""
    allowed_origin: str = ""
    weather_api_url: str = "https://api.openweathermap.org/data/2.5/weather"
    tile_api_url: str = "https://tile.openweathermap.org/map"
    upstream_timeout: float = 5.0
    rate_limit_per_window: int = 10
    rate_limit_window: int = 60
    rate_limit_max_keys: int = 10_000
    cache_maxsize: int = 100
    cache_ttl: int = 300
    tile_cache_max_age: int = 600
    city_max_length: int = 100
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
