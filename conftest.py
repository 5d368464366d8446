import httpx
import pytest

from src.esclient.connectors.elasticsearch import ElasticsearchConnector
from src.esclient.search.elasticsearch_service import ElasticsearchService


ENGINE_CONFIG = {
    "host": "es.test",
    "port": 9200,
    "timeout_seconds": 5,
}


@pytest.fixture
def make_service():
    """
    Build an ElasticsearchService whose HTTP calls go to `handler`
    (a function taking httpx.Request and returning httpx.Response).
    """
    def _make(handler):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        connector = ElasticsearchConnector(ENGINE_CONFIG, http_client=client)
        return ElasticsearchService(connector)

    return _make
