from typing import Annotated, Any, ClassVar, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EngineModel(BaseModel):
    """Base for records decoded from engine JSON. Unknown keys are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class EngineResult(EngineModel):
    """Base for top-level result variants."""

    # Keys dropped from to_wire() output when they hold None
    omit_when_absent: ClassVar[Tuple[str, ...]] = ()

    raw: Dict[str, Any] = Field(default_factory=dict, exclude=True, description="Decoded JSON body")

    def to_wire(self) -> Dict[str, Any]:
        """Serialize back to the engine's JSON keys."""
        data = self.model_dump(by_alias=True, exclude={"kind"})
        for key in self.omit_when_absent:
            if data.get(key) is None:
                data.pop(key, None)
        return data


# ---------------- Leaf records ----------------

class ShardCounts(EngineModel):
    """The "_shards" block."""
    total: int = 0
    successful: int = 0
    failed: int = 0
    skipped: int = 0


class Hit(EngineModel):
    """Individual search hit."""
    index: str = Field(default="", alias="_index")
    type: str = Field(default="", alias="_type")
    id: str = Field(default="", alias="_id")
    # null when results are sorted on a field
    score: Optional[float] = Field(None, alias="_score")
    source: Dict[str, Any] = Field(default_factory=dict, alias="_source")
    highlight: Dict[str, Any] = Field(default_factory=dict)
    fields: Dict[str, Any] = Field(default_factory=dict)
    sort: List[Any] = Field(default_factory=list)


class Hits(EngineModel):
    total: int = 0
    # max_score may be null; None stays distinct from 0.0
    max_score: Optional[float] = None
    hits: List[Hit] = Field(default_factory=list)

    @field_validator("total", mode="before")
    @classmethod
    def _total_value(cls, value: Any) -> Any:
        # Newer engines report {"value": n, "relation": "eq"}
        if isinstance(value, dict):
            return value.get("value", 0)
        return value


class Bucket(EngineModel):
    """One aggregation bucket. Nested aggregations are kept as extra keys."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    key: Any = None
    key_as_string: Optional[str] = None
    doc_count: int = 0

    def aggregation(self, name: str) -> Optional["Aggregation"]:
        value = (self.model_extra or {}).get(name)
        if not isinstance(value, dict):
            return None
        return Aggregation.model_validate(value)


class Aggregation(EngineModel):
    """An aggregation result. Metric fields beyond value are kept as extra keys."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    buckets: List[Bucket] = Field(default_factory=list)
    # kept as decoded; scripted_metric values can be any JSON
    value: Any = None
    doc_count: Optional[int] = None

    @field_validator("buckets", mode="before")
    @classmethod
    def _keyed_buckets(cls, value: Any) -> Any:
        # keyed aggregations return {"name": {...}} instead of a list
        if isinstance(value, dict):
            return [dict(bucket, key=key) for key, bucket in value.items()]
        return value

    def sub_aggregation(self, name: str) -> Optional["Aggregation"]:
        value = (self.model_extra or {}).get(name)
        if not isinstance(value, dict):
            return None
        return Aggregation.model_validate(value)


class BulkItemResult(EngineModel):
    """Outcome of one command inside a _bulk call."""
    index: str = Field(default="", alias="_index")
    type: str = Field(default="", alias="_type")
    id: str = Field(default="", alias="_id")
    version: int = Field(default=0, alias="_version")
    result: str = ""
    error: Optional[str] = None
    status: int = 0

    @field_validator("error", mode="before")
    @classmethod
    def _flatten_error(cls, value: Any) -> Any:
        if isinstance(value, dict):
            kind = value.get("type", "")
            reason = value.get("reason", "")
            return f"{kind}: {reason}" if kind else str(reason)
        return value

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status < 300


class StatPrimary(EngineModel):
    """One stats family (docs, store, indexing ...). Non-count keys kept as extras."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    count: int = 0
    deleted: int = 0


class StatIndex(EngineModel):
    primaries: Dict[str, StatPrimary] = Field(default_factory=dict)
    total: Dict[str, StatPrimary] = Field(default_factory=dict)


class StatsAll(EngineModel):
    """The "_all" block of a _stats call."""
    primaries: Dict[str, StatPrimary] = Field(default_factory=dict)
    total: Dict[str, StatPrimary] = Field(default_factory=dict)
    indices: Dict[str, StatIndex] = Field(default_factory=dict)


class IndexStatus(EngineModel):
    """Status of one index as returned by _status."""
    # free-form sections keep JSON numeric types as decoded
    index: Dict[str, Any] = Field(default_factory=dict)
    translog: Dict[str, int] = Field(default_factory=dict)
    docs: Dict[str, int] = Field(default_factory=dict)
    merges: Dict[str, Any] = Field(default_factory=dict)
    refresh: Dict[str, Any] = Field(default_factory=dict)
    flush: Dict[str, Any] = Field(default_factory=dict)


# ---------------- Result variants ----------------

class SearchResult(EngineResult):
    """Result of _search, scan and _search/scroll."""
    kind: Literal["search"] = "search"
    omit_when_absent: ClassVar[Tuple[str, ...]] = ("aggregations",)

    took: int = 0
    timed_out: bool = False
    shards: ShardCounts = Field(default_factory=ShardCounts, alias="_shards")
    hits: Hits = Field(default_factory=Hits)
    scroll_id: Optional[str] = Field(None, alias="_scroll_id")
    aggregations: Optional[Dict[str, Aggregation]] = None


class CountResult(EngineResult):
    kind: Literal["count"] = "count"

    count: int = 0
    shards: ShardCounts = Field(default_factory=ShardCounts, alias="_shards")


class BulkResult(EngineResult):
    """Result of _bulk. items keeps the request order, one {command: item} per document."""
    kind: Literal["bulk"] = "bulk"
    omit_when_absent: ClassVar[Tuple[str, ...]] = ("items",)

    took: int = 0
    errors: bool = False
    items: Optional[List[Dict[str, BulkItemResult]]] = None

    def item_results(self) -> List[BulkItemResult]:
        """Per-document results, in request order."""
        return [result for item in self.items or [] for result in item.values()]

    def failed_items(self) -> List[BulkItemResult]:
        return [result for result in self.item_results() if not result.ok]


class StatsResult(EngineResult):
    kind: Literal["stats"] = "stats"

    shards: ShardCounts = Field(default_factory=ShardCounts, alias="_shards")
    all: StatsAll = Field(default_factory=StatsAll, alias="_all")
    indices: Dict[str, StatIndex] = Field(default_factory=dict)


class StatusResult(EngineResult):
    kind: Literal["status"] = "status"

    shards: ShardCounts = Field(default_factory=ShardCounts, alias="_shards")
    indices: Dict[str, IndexStatus] = Field(default_factory=dict)


class ClusterHealth(EngineResult):
    kind: Literal["health"] = "health"

    cluster_name: str = ""
    status: str = ""
    timed_out: bool = False
    number_of_nodes: int = 0
    number_of_data_nodes: int = 0
    active_primary_shards: int = 0
    active_shards: int = 0
    relocating_shards: int = 0
    initializing_shards: int = 0
    unassigned_shards: int = 0


class DocumentResult(EngineResult):
    """Result of single-document calls: get, index, delete, update."""
    kind: Literal["document"] = "document"

    index: str = Field(default="", alias="_index")
    type: str = Field(default="", alias="_type")
    id: str = Field(default="", alias="_id")
    version: int = Field(default=0, alias="_version")
    found: bool = False
    created: bool = False
    result: str = ""
    shards: ShardCounts = Field(default_factory=ShardCounts, alias="_shards")
    source: Optional[Dict[str, Any]] = Field(None, alias="_source")
    fields: Optional[Dict[str, Any]] = None


class Acknowledgement(EngineResult):
    """Result of index, alias, mapping and settings management calls."""
    kind: Literal["acknowledgement"] = "acknowledgement"

    acknowledged: bool = False
    shards: ShardCounts = Field(default_factory=ShardCounts, alias="_shards")


class RawResult(EngineResult):
    """Any other reply; only raw is populated."""
    kind: Literal["raw"] = "raw"


EngineResponse = Annotated[
    Union[
        SearchResult,
        CountResult,
        BulkResult,
        StatsResult,
        StatusResult,
        ClusterHealth,
        DocumentResult,
        Acknowledgement,
        RawResult,
    ],
    Field(discriminator="kind"),
]
