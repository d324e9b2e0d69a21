import copy
from unittest.mock import MagicMock

import pytest
from elastic_transport import ObjectApiResponse
from elasticsearch import NotFoundError
from fastapi.testclient import TestClient

from esgateway import DocumentStore, create_app


def _api_response(body):
    return ObjectApiResponse(body=body, meta=MagicMock(status=200))


class FakeElasticsearch:
    """In-memory stand-in for the Elasticsearch client calls the store makes."""

    def __init__(self):
        self.indices = {}
        self.calls = []
        self.closed = False
        self.cluster = MagicMock()
        self.cluster.health.return_value = _api_response({
            "cluster_name": "test-cluster",
            "status": "green",
            "number_of_nodes": 1,
            "number_of_data_nodes": 1,
            "active_shards": 2,
        })

    def index(self, index, id, document, refresh=None):
        self.calls.append(("index", {"index": index, "id": id, "refresh": refresh}))
        self.indices.setdefault(index, {})[id] = copy.deepcopy(document)
        return _api_response({"_index": index, "_id": id, "result": "created"})

    def search(self, index=None, query=None, track_total_hits=None, pretty=None):
        self.calls.append(("search", {
            "index": index,
            "query": query,
            "track_total_hits": track_total_hits,
            "pretty": pretty,
        }))
        if index in (None, "", "*"):
            names = sorted(self.indices)
        elif index in self.indices:
            names = [index]
        else:
            raise NotFoundError(
                "index_not_found_exception",
                meta=MagicMock(status=404),
                body={"error": {"type": "index_not_found_exception"}, "status": 404},
            )

        hits = [
            {"_index": name, "_id": doc_id, "_score": 1.0, "_source": copy.deepcopy(doc)}
            for name in names
            for doc_id, doc in self.indices[name].items()
        ]
        return _api_response({
            "took": 1,
            "timed_out": False,
            "hits": {
                "total": {"value": len(hits), "relation": "eq"},
                "max_score": 1.0 if hits else None,
                "hits": hits,
            },
        })

    def close(self):
        self.closed = True


@pytest.fixture
def es():
    return FakeElasticsearch()


@pytest.fixture
def store(es):
    return DocumentStore(es)


@pytest.fixture
def client(store):
    return TestClient(create_app(store))


ENV_VARS = (
    "ELASTICSEARCH_URL",
    "ELASTICSEARCH_API_KEY",
    "ELASTICSEARCH_USERNAME",
    "ELASTICSEARCH_PASSWORD",
    "ELASTICSEARCH_VERIFY_CERTS",
    "ELASTICSEARCH_REQUEST_TIMEOUT",
    "GATEWAY_HOST",
    "GATEWAY_PORT",
    "LOG_LEVEL",
    "LOG_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's environment out of Settings()."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def api_response():
    """Wrap a dict the way the Elasticsearch client returns response bodies."""
    return _api_response
