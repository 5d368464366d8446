import json
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import quote, urlencode

from pydantic import BaseModel, Field, field_validator, model_validator

# API keywords
SEARCH = "_search"
SCROLL = "_search/scroll"
COUNT = "_count"
BULK = "_bulk"
STATS = "_stats"
STATUS = "_status"
UPDATE = "_update"
REFRESH = "_refresh"
OPTIMIZE = "_optimize"
SETTINGS = "_settings"
MAPPING = "_mapping"
ALIASES = "_aliases"
DELETE_BY_QUERY = "_query"
CLUSTER_HEALTH = "_cluster/health"

BULK_COMMANDS = ("index", "create", "update", "delete")

Query = Dict[str, Any]
ArgValue = Union[str, int, float, bool]


def encode_names(names: List[str]) -> str:
    return ",".join(quote(str(name), safe="*") for name in names)


def _arg(value: ArgValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class EngineRequest(BaseModel):
    """
    A single request to the engine.

    At most one payload (query, bulk_data, body) may be set;
    payload() picks the bytes to send from it.
    """

    index_list: List[str] = Field(default_factory=list, description="Indices to target, in order")
    type_list: List[str] = Field(default_factory=list, description="Document types to target, in order")
    method: str = Field(default="GET", description="HTTP method")
    api: str = Field(default="", description="API keyword such as _search or _bulk")
    query: Optional[Query] = Field(None, description="JSON query sent as the body")
    bulk_data: Optional[bytes] = Field(None, description="Newline-delimited bulk payload")
    body: Optional[bytes] = Field(None, description="Raw body sent as-is")
    extra_args: Dict[str, Union[ArgValue, List[ArgValue]]] = Field(
        default_factory=dict, description="Extra URL query-string arguments"
    )
    id: Optional[str] = Field(None, description="Document id")

    @field_validator("method")
    @classmethod
    def _upper_method(cls, value: str) -> str:
        return value.upper()

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @model_validator(mode="after")
    def _single_payload(self) -> "EngineRequest":
        given = [
            name for name in ("query", "bulk_data", "body")
            if getattr(self, name) is not None
        ]
        if len(given) > 1:
            raise ValueError(f"only one payload may be set, got {', '.join(given)}")
        if self.bulk_data is not None and self.api != BULK:
            raise ValueError(f"bulk_data requires api '{BULK}', got '{self.api}'")
        return self

    def path(self) -> str:
        path = ""
        if self.index_list:
            path += "/" + encode_names(self.index_list)
        if self.type_list:
            path += "/" + encode_names(self.type_list)
        if self.id:
            path += "/" + quote(self.id, safe="")
        if self.api:
            path += "/" + self.api
        return path or "/"

    def params(self) -> List[Tuple[str, str]]:
        pairs = []
        for key, value in self.extra_args.items():
            if isinstance(value, (list, tuple)):
                pairs.extend((key, _arg(v)) for v in value)
            else:
                pairs.append((key, _arg(value)))
        return pairs

    def url(self, base_url: str) -> str:
        url = base_url.rstrip("/") + self.path()
        params = self.params()
        if params:
            url += "?" + urlencode(params)
        return url

    def payload(self) -> bytes:
        if self.body:
            return self.body
        if self.api == BULK and self.bulk_data is not None:
            return self.bulk_data
        if self.query is not None:
            return json.dumps(self.query, separators=(",", ":")).encode("utf-8")
        return b""


class Document(BaseModel):
    """A document to index, update or delete."""

    index: Optional[str] = Field(None, description="Target index; left to the URL when absent")
    type: str = Field(default="", description="Document type")
    id: Optional[Union[str, int]] = Field(None, description="Document id; engine assigns one when absent")
    bulk_command: str = Field(default="index", description="One of index, create, update, delete")
    fields: Optional[Dict[str, Any]] = Field(None, description="Document body")

    @field_validator("bulk_command")
    @classmethod
    def _known_command(cls, value: str) -> str:
        if value not in BULK_COMMANDS:
            raise ValueError(f"bulk_command must be one of {BULK_COMMANDS}, got '{value}'")
        return value
