import json
import logging
from typing import Any, Dict, List

from src.esclient.search.schemas.request_schemas import Document

logger = logging.getLogger(__name__)


def _action_line(doc: Document) -> Dict[str, Any]:
    meta: Dict[str, Any] = {}
    if doc.index is not None:
        meta["_index"] = doc.index
    if doc.type:
        meta["_type"] = doc.type
    if doc.id is not None:
        meta["_id"] = doc.id
    return {doc.bulk_command: meta}


def encode_bulk(documents: List[Document]) -> bytes:
    """
    Build the newline-delimited body of a _bulk call.

    One action line per document, followed by its source line
    unless the command is delete or the document has no fields.
    The engine requires a trailing newline after the last line.
    """
    if not documents:
        raise ValueError("bulk requires at least one document")

    lines = []
    for doc in documents:
        lines.append(json.dumps(_action_line(doc), separators=(",", ":")))
        if doc.bulk_command != "delete" and doc.fields is not None:
            lines.append(json.dumps(doc.fields, separators=(",", ":")))

    logger.debug("Encoded bulk payload | documents=%d lines=%d", len(documents), len(lines))
    return ("\n".join(lines) + "\n").encode("utf-8")
