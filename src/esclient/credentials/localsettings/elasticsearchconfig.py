from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ElasticsearchConfig(BaseSettings):
    """
    Search engine connection settings.
    Loads from environment variables with ELASTICSEARCH__ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="ELASTICSEARCH__",
        env_file=[".env"],
        extra="ignore",
        case_sensitive=False,
    )

    # Core connection settings
    host: str = "localhost"
    port: int = 9200
    scheme: str = "http"
    username: Optional[str] = None
    password: Optional[str] = None
    use_ssl: bool = False

    timeout_seconds: int = 30
