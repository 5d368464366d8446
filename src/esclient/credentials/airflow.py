from airflow.hooks.base import BaseHook
from .base import CredentialProvider

class AirflowCredentials(CredentialProvider):
    """
    Airflow Credential Provider.
    Unpacks an Airflow Connection into the flat dictionary
    expected by ElasticsearchConnector.
    """
    
    def __init__(self, conn_id: str):
        self.conn_id = conn_id
    
    def get_credentials(self) -> dict:
        conn = BaseHook.get_connection(self.conn_id)

        # Extras (scheme, use_ssl, timeout_seconds ...) override the core fields
        return {
            "host": conn.host,
            "port": conn.port or 9200,
            "scheme": conn.schema or "http",
            "username": conn.login,
            "password": conn.password,
            **conn.extra_dejson
        }
