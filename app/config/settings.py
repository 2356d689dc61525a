from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "statements"
    db_username: str = "statements"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    aws_region: str = "us-east-1"
    queue_url: str = ""
    queue_wait_time_seconds: int = Field(default=20, ge=0, le=20)
    queue_max_messages: int = Field(default=1, ge=1, le=10)
    queue_visibility_timeout_seconds: int = 900
    queue_error_backoff_seconds: int = 5
    object_key_prefix: str = "pdfs/"

    pdf_engine: str = "pdftotext"
    qpdf_path: str = "qpdf"
    pdftotext_path: str = "pdftotext"
    tool_timeout_seconds: int = Field(default=120, gt=0)
    temp_dir: str | None = None

    def db_conninfo(self) -> str:
        """Build a libpq connection string from the db_* fields."""
        return (
            f"host={self.db_host} "
            f"port={self.db_port} "
            f"dbname={self.db_database} "
            f"user={self.db_username} "
            f"password={self.db_password}"
        )
