from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    http_host: str = "0.0.0.0"
    http_port: int = 8000
    max_upload_bytes: int = 10 * 1024 * 1024
    disconnect_poll_interval_seconds: float = 0.5

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "compliance"
    db_username: str = "compliance"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    auth_jwt_secret: str = ""
    auth_jwt_algorithm: str = "HS256"
    auth_jwt_audience: str | None = "authenticated"

    pdf_strategy: str = "attachment"

    audit_provider: str = "gemini"
    audit_api_key: str = ""
    audit_model_name: str = "gemini-1.5-flash"
    audit_base_url: str | None = None
    audit_temperature: float = 0.1
    audit_response_format: str = "json_schema"
    audit_timeout_seconds: float = 45.0
    audit_max_retries: int = 2
    audit_backoff_base_seconds: float = 1.0
    audit_max_concurrency: int = 4
