from typing import Any, Dict, Optional

from .base import CredentialProvider
from src.esclient.credentials.localsettings.elasticsearchconfig import ElasticsearchConfig


class ElasticsearchCredentials(CredentialProvider):
    """
    Provides engine connection values from environment / .env
    through ElasticsearchConfig.
    """

    def __init__(self, config: Optional[ElasticsearchConfig] = None):
        self.config = config or ElasticsearchConfig()

    def get_credentials(self) -> Dict[str, Any]:
        return {
            "host": self.config.host,
            "port": self.config.port,
            "scheme": self.config.scheme,
            "username": self.config.username,
            "password": self.config.password,
            "use_ssl": self.config.use_ssl,
            "timeout_seconds": self.config.timeout_seconds,
        }
