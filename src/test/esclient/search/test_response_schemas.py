from pydantic import TypeAdapter

from src.esclient.search.schemas.response_schemas import (
    BulkResult,
    DocumentResult,
    EngineResponse,
    SearchResult,
    StatsResult,
    StatusResult,
)


AGGREGATION_BODY = {
    "took": 4,
    "timed_out": False,
    "_shards": {"total": 1, "successful": 1, "failed": 0},
    "hits": {"total": 120, "max_score": 0.0, "hits": []},
    "aggregations": {
        "by_level": {
            "doc_count_error_upper_bound": 0,
            "buckets": [
                {"key": "error", "doc_count": 80, "by_host": {"buckets": [{"key": "web-1", "doc_count": 50}]}},
                {"key": "warn", "doc_count": 40},
            ],
        },
        "avg_latency": {"value": 12.5},
        "by_range": {"buckets": {"fast": {"doc_count": 90}, "slow": {"doc_count": 30}}},
    },
}

STATS_BODY = {
    "_shards": {"total": 10, "successful": 5, "failed": 0},
    "_all": {
        "primaries": {
            "docs": {"count": 1500, "deleted": 3},
            "store": {"size_in_bytes": 2048},
        },
        "total": {"docs": {"count": 3000, "deleted": 6}},
    },
    "indices": {
        "logs": {
            "primaries": {"docs": {"count": 1000, "deleted": 1}},
            "total": {"docs": {"count": 2000, "deleted": 2}},
        },
        "users": {"primaries": {"docs": {"count": 500, "deleted": 2}}},
    },
}

STATUS_BODY = {
    "_shards": {"total": 2, "successful": 2, "failed": 0},
    "indices": {
        "logs": {
            "index": {"primary_size_in_bytes": 1024, "size": "1kb"},
            "translog": {"operations": 7},
            "docs": {"num_docs": 15, "max_doc": 16, "deleted_docs": 1},
            "merges": {"current": 0, "total_time_in_millis": 12.5},
            "refresh": {"total": 3},
            "flush": {"total": 1},
        }
    },
}


def test_aggregation_buckets_and_sub_aggregations():
    result = SearchResult.model_validate(AGGREGATION_BODY)

    by_level = result.aggregations["by_level"]
    assert [bucket.key for bucket in by_level.buckets] == ["error", "warn"]
    assert [bucket.doc_count for bucket in by_level.buckets] == [80, 40]
    assert by_level.model_extra["doc_count_error_upper_bound"] == 0

    by_host = by_level.buckets[0].aggregation("by_host")
    assert by_host.buckets[0].key == "web-1"
    assert by_host.buckets[0].doc_count == 50
    assert by_level.buckets[1].aggregation("by_host") is None

    assert result.aggregations["avg_latency"].value == 12.5
    assert result.aggregations["avg_latency"].buckets == []


def test_metric_values_keep_their_json_type():
    result = SearchResult.model_validate({
        "aggregations": {
            "distinct_hosts": {"value": 5},
            "avg_latency": {"value": 12.5},
            "profile": {"value": {"sum": 240, "n": 3}},
            "top_term": {"value": "error"},
            "empty_avg": {"value": None},
        }
    })
    aggregations = result.aggregations

    assert aggregations["distinct_hosts"].value == 5
    assert type(aggregations["distinct_hosts"].value) is int
    assert type(aggregations["avg_latency"].value) is float
    assert aggregations["profile"].value == {"sum": 240, "n": 3}
    assert aggregations["top_term"].value == "error"
    assert aggregations["empty_avg"].value is None


def test_keyed_buckets_become_list():
    result = SearchResult.model_validate(AGGREGATION_BODY)

    by_range = result.aggregations["by_range"]
    assert [(b.key, b.doc_count) for b in by_range.buckets] == [("fast", 90), ("slow", 30)]


def test_stats_counts_are_integers():
    result = StatsResult.model_validate(STATS_BODY)

    assert result.shards.total == 10
    assert result.all.primaries["docs"].count == 1500
    assert result.all.primaries["docs"].deleted == 3
    assert isinstance(result.all.primaries["docs"].count, int)
    assert result.all.primaries["store"].count == 0
    assert result.all.primaries["store"].model_extra["size_in_bytes"] == 2048
    assert result.all.total["docs"].count == 3000
    assert result.indices["logs"].primaries["docs"].count == 1000
    assert result.indices["users"].total == {}


def test_status_keeps_numeric_types():
    result = StatusResult.model_validate(STATUS_BODY)

    logs = result.indices["logs"]
    assert logs.translog == {"operations": 7}
    assert logs.docs["num_docs"] == 15
    assert logs.index["size"] == "1kb"
    assert isinstance(logs.merges["current"], int)
    assert isinstance(logs.merges["total_time_in_millis"], float)


def test_search_to_wire_uses_engine_keys():
    body = {
        "took": 2,
        "timed_out": True,
        "_shards": {"total": 1, "successful": 0, "failed": 1},
        "hits": {"total": 1, "max_score": None,
                 "hits": [{"_index": "logs", "_type": "event", "_id": "1", "_score": None, "_source": {"a": 1}}]},
        "_scroll_id": "c2Nhbjs=",
    }

    wire = SearchResult.model_validate(body).to_wire()

    assert wire["timed_out"] is True
    assert wire["_shards"]["failed"] == 1
    assert wire["_scroll_id"] == "c2Nhbjs="
    assert wire["hits"]["max_score"] is None
    hit = wire["hits"]["hits"][0]
    assert (hit["_index"], hit["_type"], hit["_id"], hit["_source"]) == ("logs", "event", "1", {"a": 1})
    assert "aggregations" not in wire
    assert "kind" not in wire
    assert "raw" not in wire


def test_search_to_wire_keeps_aggregations_when_present():
    wire = SearchResult.model_validate(AGGREGATION_BODY).to_wire()

    assert wire["aggregations"]["avg_latency"]["value"] == 12.5


def test_bulk_to_wire_omits_absent_items():
    assert "items" not in BulkResult(took=1).to_wire()

    wire = BulkResult.model_validate(
        {"took": 1, "errors": False, "items": [{"index": {"_id": "1", "_version": 2, "status": 201}}]}
    ).to_wire()
    assert wire["items"][0]["index"]["_id"] == "1"
    assert wire["items"][0]["index"]["_version"] == 2


def test_stats_to_wire_uses_all_key():
    wire = StatsResult.model_validate(STATS_BODY).to_wire()

    assert wire["_all"]["primaries"]["docs"]["count"] == 1500


def test_document_result_fields():
    body = {
        "_index": "users", "_type": "user", "_id": "42", "_version": 3,
        "found": True, "_source": {"name": "Ada"},
    }

    result = DocumentResult.model_validate(body)

    assert (result.index, result.type, result.id, result.version) == ("users", "user", "42", 3)
    assert result.found is True
    assert result.source == {"name": "Ada"}
    assert result.fields is None


def test_variants_are_tagged():
    assert SearchResult().kind == "search"
    assert BulkResult().kind == "bulk"
    assert StatsResult().kind == "stats"
    assert StatusResult().kind == "status"
    assert DocumentResult().kind == "document"


def test_engine_response_dispatches_on_kind():
    adapter = TypeAdapter(EngineResponse)

    bulk = adapter.validate_python({"kind": "bulk", "took": 3, "errors": False, "items": []})
    health = adapter.validate_python({"kind": "health", "status": "green"})

    assert isinstance(bulk, BulkResult)
    assert bulk.items == []
    assert health.status == "green"
    assert health.kind == "health"
