"""
esgateway: HTTP Gateway for Elasticsearch Documents
===================================================

A small HTTP/JSON facade in front of an Elasticsearch cluster. It inserts
documents by id and lists every document of one index, or of all indices,
in a fixed result shape:

    {"hits": {"hits": [{"_id": "1", "_source": {"name": "pen"}}]}}

Indexing, ranking, storage and cluster management all stay with
Elasticsearch.

Usage:
    from esgateway import DocumentStore, Settings, create_app

    store = DocumentStore.from_settings(Settings())
    app = create_app(store)

License: MIT
"""

__version__ = "0.1.0"

from .config import Settings
from .core import DocumentStore
from .app import create_app

__all__ = ["DocumentStore", "Settings", "create_app"]
