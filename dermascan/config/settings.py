from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "dermascan"
    db_username: str = "dermascan"
    db_password: str = "secret"
    db_pool_max_size: int = 10
    db_open_timeout: float = Field(10.0, gt=0)

    document_store: str = "postgres"

    storage_engine: str = "local"
    files_root: str = "/app/files"
    storage_public_base_url: str = ""

    s3_bucket: str = ""
    s3_region: str = "eu-central-1"
    s3_endpoint_url: str | None = None

    image_engine: str = "pillow"
    image_quality: float = Field(0.75, gt=0.0, le=1.0)
    image_tmp_dir: str | None = None

    latest_scan_page_size: int = Field(1, ge=1)
    history_page_size: int = Field(10, ge=1)
