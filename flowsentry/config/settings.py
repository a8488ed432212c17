from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    sentry_dsn: str = ""
    sentry_environment: str = "debug"

    reporting_sink: str = "sentry"

    flows_file: str = ""
