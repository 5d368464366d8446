from typing import Any, Dict

from .base import CredentialProvider
from src.esclient.credentials.localsettings.elasticsearchconfig import ElasticsearchConfig
from src.esclient.utils.reader import load_yml


class YamlCredentials(CredentialProvider):
    """
    Reads connection values from a YAML file.

    The file either holds the keys at the top level or under a
    named section (``conn_id``), e.g.::

        search:
          host: es.internal
          port: 9200
    """

    def __init__(self, file_path: str, conn_id: str = None):
        self.file_path = file_path
        self.conn_id = conn_id

    def get_credentials(self) -> Dict[str, Any]:
        data = load_yml(self.file_path) or {}

        if self.conn_id:
            if self.conn_id not in data:
                raise ValueError(
                    f"Section '{self.conn_id}' not found in {self.file_path}"
                )
            data = data[self.conn_id]

        # model_validate skips env sources: only the file and the defaults apply
        config = ElasticsearchConfig.model_validate(data)
        return {
            "host": config.host,
            "port": config.port,
            "scheme": config.scheme,
            "username": config.username,
            "password": config.password,
            "use_ssl": config.use_ssl,
            "timeout_seconds": config.timeout_seconds,
        }
