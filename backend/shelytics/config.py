from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Database
    database_url: str = Field(default="sqlite:///./shelytics.db")

    # Branding used in alert messages
    app_name: str = Field(default="SHElytics")
    maps_base_url: str = Field(default="https://maps.google.com/?q=")

    # Day/night buckets (local wall-clock hours)
    night_start_hour: int = Field(default=18)
    night_end_hour: int = Field(default=6)
    # IANA zone name for the server clock; empty means host local time
    timezone: str = Field(default="")

    # Fall back to the sample zones when the risk_zones table is empty
    use_sample_zones: bool = Field(default=False)

    # Live tracker
    location_log_interval_seconds: int = Field(default=30)
    api_base_url: str = Field(default="http://localhost:8000/api/v1")
    http_timeout_seconds: float = Field(default=15.0)

    # CORS
    cors_origins: str = Field(default="http://localhost:5173,http://localhost:8080")

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]


settings = Settings()
