import httpx
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_PORT = 9200
DEFAULT_TIMEOUT_SECONDS = 30


class ElasticsearchConnector:
    """
    Infrastructure Layer - Search engine HTTP connector

    Holds the connection descriptor (host, port, scheme) and
    the httpx transport used by the service layer.

    Responsible only for:
    - Building the base URL from config
    - Creating a reusable async HTTP client
    - Managing client lifecycle
    """

    def __init__(
        self,
        config: Dict[str, Any],
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize connector with config.

        Expected config keys:
        - host: engine host name
        - port: engine port (optional, default 9200)
        - scheme: http or https (optional)
        - use_ssl: forces https when true (optional)
        - username / password: basic auth (optional)
        - timeout_seconds: HTTP timeout (optional, default 30)

        Args:
            config: flat credentials dict from a CredentialProvider
            http_client: pre-built client to use instead of creating one.
                The caller keeps ownership; close() will not close it.
        """
        if not config.get("host"):
            raise ValueError("Missing host for search engine connection")

        scheme = config.get("scheme") or "http"
        if config.get("use_ssl"):
            scheme = "https"

        self._host = config["host"]
        self._port = int(config.get("port") or DEFAULT_PORT)
        self._scheme = scheme

        self.username = config.get("username")
        self.password = config.get("password")
        self.timeout = config.get("timeout_seconds") or DEFAULT_TIMEOUT_SECONDS

        self._client: Optional[httpx.AsyncClient] = http_client
        self._owns_client = http_client is None

        logger.info(
            "ElasticsearchConnector initialized | base_url=%s timeout=%ss",
            self.base_url, self.timeout
        )

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def scheme(self) -> str:
        return self._scheme

    @property
    def base_url(self) -> str:
        return f"{self._scheme}://{self._host}:{self._port}"

    async def __call__(self) -> httpx.AsyncClient:
        """Callable version of connect()."""
        return await self.connect()

    async def connect(self) -> httpx.AsyncClient:
        """Create (if needed) and return the async HTTP client."""
        if self._client is None:
            auth = None
            if self.username and self.password:
                auth = httpx.BasicAuth(self.username, self.password)

            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                auth=auth,
                timeout=self.timeout,
            )
            self._owns_client = True

            logger.info("Created new HTTP client session for %s", self.base_url)

        else:
            logger.debug("Reusing existing HTTP client session")

        return self._client

    async def close(self):
        """
        Close the HTTP client created by this connector.

        Safe to call multiple times.
        """
        if self._client is None:
            logger.debug("Close called but no HTTP client session exists")
            return

        if self._owns_client:
            await self._client.aclose()
            logger.info("HTTP client session closed")

        self._client = None
