from .elasticsearch import ElasticsearchCredentials
from .yamlfile import YamlCredentials

class CredentialFactory:
    """
    Decides which 'Source' to use for connection settings.
    """
    @staticmethod
    def get_provider(mode: str, conn_id: str = None, file_path: str = None):
        if mode == "airflow":
            # Imported lazily: apache-airflow is an optional extra
            from .airflow import AirflowCredentials
            return AirflowCredentials(conn_id)

        elif mode == "yaml":
            if not file_path:
                raise ValueError("file_path is required for mode 'yaml'")
            return YamlCredentials(file_path, conn_id=conn_id)

        elif mode == "elasticsearchlocal":
            return ElasticsearchCredentials()

        else:
            raise ValueError(
                f"Unknown mode: {mode}. Use 'airflow', 'yaml' or 'elasticsearchlocal'."
            )
