import json
import logging
from typing import Any, Dict, Optional, Type

from pydantic import ValidationError

from src.esclient.search.exceptions.engineexceptions import ResponseDecodeError, SearchError
from src.esclient.search.schemas import request_schemas as keywords
from src.esclient.search.schemas.request_schemas import EngineRequest
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

RESULT_TYPES: Dict[str, Type[EngineResult]] = {
    keywords.SEARCH: SearchResult,
    keywords.SCROLL: SearchResult,
    keywords.COUNT: CountResult,
    keywords.BULK: BulkResult,
    keywords.STATS: StatsResult,
    keywords.STATUS: StatusResult,
    keywords.CLUSTER_HEALTH: ClusterHealth,
    keywords.UPDATE: DocumentResult,
    keywords.REFRESH: Acknowledgement,
    keywords.OPTIMIZE: Acknowledgement,
    keywords.SETTINGS: Acknowledgement,
    keywords.ALIASES: Acknowledgement,
}


def result_type_for(request: EngineRequest) -> Type[EngineResult]:
    """Pick the result variant matching the request's API keyword."""
    if request.api in RESULT_TYPES:
        return RESULT_TYPES[request.api]

    # _stats/docs, _search/template ...
    head = request.api.split("/", 1)[0]
    if head in RESULT_TYPES:
        return RESULT_TYPES[head]

    if not request.api and request.id:
        return DocumentResult

    # PUT /index, DELETE /index
    if (
        not request.api
        and request.index_list
        and not request.type_list
        and request.method in ("PUT", "DELETE")
    ):
        return Acknowledgement

    if head == keywords.MAPPING and request.method in ("PUT", "DELETE"):
        return Acknowledgement

    return RawResult


def _error_message(error: Any) -> str:
    # 1.x engines send a string, later ones an object with type/reason
    if isinstance(error, dict):
        reason = error.get("reason")
        kind = error.get("type")
        if kind and reason:
            return f"{kind}: {reason}"
        return reason or kind or json.dumps(error)
    return str(error)


def _body_status(status_code: int, result_type: Type[EngineResult]) -> bool:
    if status_code == 404:
        return True
    return status_code == 408 and result_type is ClusterHealth


def decode_response(
    request: EngineRequest,
    status_code: int,
    content: bytes,
    result_type: Optional[Type[EngineResult]] = None,
) -> EngineResult:
    """
    Decode an engine reply into the variant for this request.

    Raises:
        SearchError: the engine reported an error
        ResponseDecodeError: the body is not a JSON object of the expected shape
    """
    result_type = result_type or result_type_for(request)
    text = content.decode("utf-8", errors="replace")

    try:
        payload = json.loads(content)
    except ValueError as e:
        if status_code >= 400:
            raise SearchError(text, status_code) from e
        raise ResponseDecodeError(f"Response body is not JSON: {e}", content) from e

    if not isinstance(payload, dict):
        if status_code >= 400:
            raise SearchError(text, status_code)
        raise ResponseDecodeError(
            f"Expected a JSON object, got {type(payload).__name__}", content
        )

    if payload.get("error"):
        status = payload.get("status") or status_code
        raise SearchError(_error_message(payload["error"]), int(status), payload)

    # 404 without an error body is a normal "not found" reply (found: false);
    # health answers 408 with a full body when a wait_for_* condition times out
    if status_code >= 300 and not _body_status(status_code, result_type):
        raise SearchError(text, status_code, payload)

    try:
        result = result_type.model_validate(payload)
    except ValidationError as e:
        raise ResponseDecodeError(
            f"Response does not match {result_type.__name__}: {e}", content
        ) from e

    result.raw = payload
    logger.debug("Decoded %s for %s %s", result_type.__name__, request.method, request.path())
    return result
