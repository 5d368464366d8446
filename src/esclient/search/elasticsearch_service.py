import logging
from typing import Any, Dict, List, Optional, Type

import httpx

from src.esclient.connectors.elasticsearch import ElasticsearchConnector
from src.esclient.search.bulk import encode_bulk
from src.esclient.search.decoder import decode_response
from src.esclient.search.exceptions.engineexceptions import EngineTransportError, SearchError
from src.esclient.search.schemas import request_schemas as keywords
from src.esclient.search.schemas.request_schemas import (
    Document,
    EngineRequest,
    Query,
    encode_names,
)
from src.esclient.search.schemas.response_schemas import (
    Acknowledgement,
    BulkResult,
    ClusterHealth,
    CountResult,
    DocumentResult,
    EngineResult,
    RawResult,
    SearchResult,
    StatsResult,
    StatusResult,
)

logger = logging.getLogger(__name__)

ExtraArgs = Optional[Dict[str, Any]]


class ElasticsearchService:
    """
    Service Layer - Search engine operations

    One coroutine per engine API. Each call is a single
    HTTP round trip decoded into a typed result.

    Does NOT:
    - Retry failed calls
    - Swallow engine errors (SearchError propagates)
    - Manage credentials
    """

    def __init__(self, connector: ElasticsearchConnector):
        """
        Args:
            connector: ElasticsearchConnector instance, may be shared
        """
        self.connector = connector

        logger.info(f"ElasticsearchService initialized for {connector.base_url}")

    async def _send(self, request: EngineRequest) -> httpx.Response:
        """Issue the HTTP call. Transport failures become EngineTransportError."""
        client = await self.connector.connect()
        url = self.connector.base_url + request.path()
        content = request.payload()

        headers = {}
        if content:
            headers["Content-Type"] = (
                "application/x-ndjson" if request.api == keywords.BULK else "application/json"
            )

        logger.debug("%s %s", request.method, request.url(self.connector.base_url))
        try:
            return await client.request(
                request.method,
                url,
                params=request.params(),
                content=content or None,
                headers=headers,
            )
        except httpx.TransportError as e:
            logger.error(f"Transport error on {request.method} {url}: {e!r}")
            raise EngineTransportError(
                str(e) or type(e).__name__, method=request.method, url=url
            ) from e

    async def run(
        self,
        request: EngineRequest,
        result_type: Optional[Type[EngineResult]] = None,
    ) -> EngineResult:
        """
        Send a request and decode the reply.

        Args:
            request: the request envelope
            result_type: variant to decode into; picked from the API keyword when omitted

        Raises:
            EngineTransportError: the HTTP call did not complete
            SearchError: the engine reported an error
            ResponseDecodeError: the reply could not be decoded
        """
        response = await self._send(request)
        try:
            return decode_response(request, response.status_code, response.content, result_type)
        except SearchError as e:
            logger.error(f"Engine error on {request.method} {request.path()}: {e}")
            raise

    async def _exists(self, request: EngineRequest) -> bool:
        response = await self._send(request)
        if response.status_code == 200:
            return True
        if response.status_code == 404:
            return False
        raise SearchError(
            response.text or f"Unexpected status for {request.method} {request.path()}",
            response.status_code,
        )

    # ---------------- Search ----------------

    async def search(
        self,
        query: Query,
        index_list: List[str],
        type_list: Optional[List[str]] = None,
        extra_args: ExtraArgs = None,
    ) -> SearchResult:
        request = EngineRequest(
            query=query,
            index_list=index_list,
            type_list=type_list or [],
            method="POST",
            api=keywords.SEARCH,
            extra_args=extra_args or {},
        )
        return await self.run(request, SearchResult)

    async def count(
        self,
        query: Query,
        index_list: List[str],
        type_list: Optional[List[str]] = None,
        extra_args: ExtraArgs = None,
    ) -> CountResult:
        request = EngineRequest(
            query=query,
            index_list=index_list,
            type_list=type_list or [],
            method="POST",
            api=keywords.COUNT,
            extra_args=extra_args or {},
        )
        return await self.run(request, CountResult)

    async def query(
        self,
        query: Query,
        index_list: List[str],
        type_list: Optional[List[str]] = None,
        method: str = "GET",
        extra_args: ExtraArgs = None,
    ) -> RawResult:
        """Run a query against the _query endpoint with any HTTP method."""
        request = EngineRequest(
            query=query,
            index_list=index_list,
            type_list=type_list or [],
            method=method,
            api=keywords.DELETE_BY_QUERY,
            extra_args=extra_args or {},
        )
        return await self.run(request, RawResult)

    async def delete_by_query(
        self,
        query: Query,
        index_list: List[str],
        type_list: Optional[List[str]] = None,
        extra_args: ExtraArgs = None,
    ) -> RawResult:
        return await self.query(query, index_list, type_list, "DELETE", extra_args)

    async def scan(
        self,
        query: Query,
        index_list: List[str],
        type_list: Optional[List[str]] = None,
        timeout: str = "1m",
        size: int = 10,
    ) -> SearchResult:
        """Open a scan; the returned scroll_id feeds scroll()."""
        request = EngineRequest(
            query=query,
            index_list=index_list,
            type_list=type_list or [],
            method="POST",
            api=keywords.SEARCH,
            extra_args={"search_type": "scan", "scroll": timeout, "size": size},
        )
        return await self.run(request, SearchResult)

    async def scroll(self, scroll_id: str, timeout: str = "1m") -> SearchResult:
        """Fetch the next page of a scroll cursor."""
        request = EngineRequest(
            method="POST",
            api=keywords.SCROLL,
            extra_args={"scroll": timeout},
            query={"scroll_id": scroll_id},
        )
        return await self.run(request, SearchResult)

    # ---------------- Documents ----------------

    async def bulk_send(self, documents: List[Document]) -> BulkResult:
        """
        Send many index/create/update/delete commands in one call.

        Partial failures are not raised: check result.errors and
        result.failed_items().
        """
        request = EngineRequest(
            method="POST",
            api=keywords.BULK,
            bulk_data=encode_bulk(documents),
        )
        result = await self.run(request, BulkResult)

        failed = len(result.failed_items())
        logger.info(f"Bulk sent: {len(documents)} documents, {failed} errors")
        return result

    @staticmethod
    def _document_request(document: Document, method: str, **kwargs) -> EngineRequest:
        if document.index is None:
            raise ValueError("document.index is required for single-document calls")
        return EngineRequest(
            index_list=[document.index],
            type_list=[document.type] if document.type else [],
            id=document.id,
            method=method,
            **kwargs,
        )

    async def index(self, document: Document, extra_args: ExtraArgs = None) -> DocumentResult:
        """Index one document; the engine assigns an id when document.id is None."""
        method = "POST" if document.id is None else "PUT"
        request = self._document_request(
            document, method, query=document.fields or {}, extra_args=extra_args or {}
        )
        result = await self.run(request, DocumentResult)
        logger.info(f"Indexed document: {document.index}/{result.id}")
        return result

    async def get(
        self,
        index: str,
        doc_type: str,
        id: str,
        extra_args: ExtraArgs = None,
    ) -> DocumentResult:
        """Fetch one document. A missing document decodes with found=False."""
        request = EngineRequest(
            index_list=[index],
            type_list=[doc_type] if doc_type else [],
            id=id,
            method="GET",
            extra_args=extra_args or {},
        )
        return await self.run(request, DocumentResult)

    async def delete(self, document: Document, extra_args: ExtraArgs = None) -> DocumentResult:
        if document.id is None:
            raise ValueError("document.id is required to delete a document")
        request = self._document_request(document, "DELETE", extra_args=extra_args or {})
        result = await self.run(request, DocumentResult)
        logger.info(f"Deleted document: {document.index}/{document.id}")
        return result

    async def update(
        self,
        document: Document,
        query: Query,
        extra_args: ExtraArgs = None,
    ) -> DocumentResult:
        """Partial update through the _update API (doc or script in query)."""
        if document.id is None:
            raise ValueError("document.id is required to update a document")
        request = self._document_request(
            document, "POST", api=keywords.UPDATE, query=query, extra_args=extra_args or {}
        )
        return await self.run(request, DocumentResult)

    # ---------------- Index management ----------------

    async def create_index(self, name: str, mapping: Optional[Query] = None) -> Acknowledgement:
        request = EngineRequest(index_list=[name], method="PUT", query=mapping)
        result = await self.run(request, Acknowledgement)
        logger.info(f"Created index: {name}")
        return result

    async def delete_index(self, name: str) -> Acknowledgement:
        request = EngineRequest(index_list=[name], method="DELETE")
        result = await self.run(request, Acknowledgement)
        logger.info(f"Deleted index: {name}")
        return result

    async def refresh_index(self, name: str) -> Acknowledgement:
        request = EngineRequest(index_list=[name], method="POST", api=keywords.REFRESH)
        return await self.run(request, Acknowledgement)

    async def update_index_settings(self, name: str, settings: Query) -> Acknowledgement:
        request = EngineRequest(
            index_list=[name], method="PUT", api=keywords.SETTINGS, query=settings
        )
        return await self.run(request, Acknowledgement)

    async def optimize(
        self,
        index_list: Optional[List[str]] = None,
        extra_args: ExtraArgs = None,
    ) -> Acknowledgement:
        request = EngineRequest(
            index_list=index_list or [],
            method="POST",
            api=keywords.OPTIMIZE,
            extra_args=extra_args or {},
        )
        return await self.run(request, Acknowledgement)

    async def indices_exist(self, indexes: List[str]) -> bool:
        return await self._exists(EngineRequest(index_list=indexes, method="HEAD"))

    # ---------------- Stats / status ----------------

    async def stats(
        self,
        index_list: Optional[List[str]] = None,
        extra_args: ExtraArgs = None,
    ) -> StatsResult:
        request = EngineRequest(
            index_list=index_list or [],
            method="GET",
            api=keywords.STATS,
            extra_args=extra_args or {},
        )
        return await self.run(request, StatsResult)

    async def index_status(self, index_list: Optional[List[str]] = None) -> StatusResult:
        request = EngineRequest(index_list=index_list or [], method="GET", api=keywords.STATUS)
        return await self.run(request, StatusResult)

    async def health(self, extra_args: ExtraArgs = None) -> ClusterHealth:
        """Check cluster health (green / yellow / red)."""
        request = EngineRequest(
            method="GET", api=keywords.CLUSTER_HEALTH, extra_args=extra_args or {}
        )
        return await self.run(request, ClusterHealth)

    # ---------------- Mappings ----------------

    async def put_mapping(
        self,
        type_name: str,
        mapping: Query,
        indexes: List[str],
    ) -> Acknowledgement:
        request = EngineRequest(
            index_list=indexes,
            method="PUT",
            api=f"{keywords.MAPPING}/{type_name}",
            query=mapping,
        )
        return await self.run(request, Acknowledgement)

    async def get_mapping(
        self,
        types: Optional[List[str]] = None,
        indexes: Optional[List[str]] = None,
    ) -> RawResult:
        """Mappings are keyed by index name; read them from result.raw."""
        api = keywords.MAPPING
        if types:
            api += "/" + encode_names(types)
        request = EngineRequest(index_list=indexes or [], method="GET", api=api)
        return await self.run(request, RawResult)

    async def delete_mapping(self, type_name: str, indexes: List[str]) -> Acknowledgement:
        request = EngineRequest(
            index_list=indexes,
            type_list=[type_name],
            method="DELETE",
            api=keywords.MAPPING,
        )
        return await self.run(request, Acknowledgement)

    # ---------------- Aliases ----------------

    async def _modify_alias(self, action: str, alias: str, indexes: List[str]) -> Acknowledgement:
        actions = [{action: {"index": index, "alias": alias}} for index in indexes]
        request = EngineRequest(
            method="POST", api=keywords.ALIASES, query={"actions": actions}
        )
        return await self.run(request, Acknowledgement)

    async def add_alias(self, alias: str, indexes: List[str]) -> Acknowledgement:
        return await self._modify_alias("add", alias, indexes)

    async def remove_alias(self, alias: str, indexes: List[str]) -> Acknowledgement:
        return await self._modify_alias("remove", alias, indexes)

    async def alias_exists(self, alias: str) -> bool:
        request = EngineRequest(method="HEAD", api=f"_alias/{encode_names([alias])}")
        return await self._exists(request)

    async def close(self):
        """Close the connector."""
        await self.connector.close()
