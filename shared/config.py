"""Central configuration loaded from environment variables / .env file.

Services inherit these base settings and extend them by subclassing
Settings and adding their own fields.

Usage:
    from shared.config import Settings
    settings = Settings()
    print(settings.log_level)

To extend in a service:
    from shared.config import Settings as BaseSettings

    class MyServiceSettings(BaseSettings):
        my_custom_var: str = "default"
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- General ---
    log_level: str = "INFO"
    log_format: str = "auto"  # auto | json | console
    timezone: str = "UTC"  # clock used for time windows and date-stamped names

    # --- Docker healthcheck ---
    healthcheck_file: str = "/app/data/healthcheck"
