"""
esgateway Core: Elasticsearch Document Store
============================================

Thin wrapper around one long-lived Elasticsearch client. Every gateway
operation maps to exactly one client call:

    insert      -> index(refresh=true)      upsert by id, visible on return
    search      -> search(match_all)        one index (or backend default)
    search_all  -> search(match_all, "*")   every index

Client and transport failures surface as ``BackendError``; a response that
does not decode into ``SearchEnvelope`` surfaces as ``ResponseShapeError``.
"""

from typing import Any, Dict, Optional

import structlog
from elasticsearch import ApiError, Elasticsearch, TransportError
from pydantic import ValidationError

from .config import Settings
from .exceptions import BackendError, ResponseShapeError
from .models import SearchEnvelope

logger = structlog.get_logger(__name__)

ALL_INDICES = "*"

MATCH_ALL_QUERY: Dict[str, Any] = {"match_all": {}}


class DocumentStore:
    """
    Insert and match-all search against an Elasticsearch cluster.

    The store never mutates its client after construction, so one instance
    is shared by every concurrent request.

    Example:
        store = DocumentStore.from_settings(Settings())
        store.insert("items", "1", {"name": "pen"})
        envelope = store.search("items")
    """

    def __init__(self, client: Elasticsearch):
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        """
        Build the Elasticsearch client from settings.

        Raises:
            ValueError: if a host URL is malformed
        """
        return cls(Elasticsearch(**settings.client_kwargs()))

    def insert(self, index: str, doc_id: str, document: Dict[str, Any]) -> None:
        """
        Index a document under ``doc_id`` and refresh before returning.

        Args:
            index: Target index name
            doc_id: Document identifier (replaces any existing document)
            document: Document body
        """
        try:
            self._client.index(
                index=index,
                id=doc_id,
                document=document,
                refresh=True
            )
        except (ApiError, TransportError) as e:
            logger.error("Insert failed", index=index, doc_id=doc_id, error=str(e))
            raise BackendError(f"insert into {index!r} failed: {e}", index=index) from e

    def search(self, index: Optional[str]) -> SearchEnvelope:
        """
        Match-all search over one index.

        An empty or missing index name is passed through unchanged and
        the backend applies its own default targeting.

        Returns:
            Hits in backend order
        """
        try:
            response = self._client.search(
                index=index,
                query=MATCH_ALL_QUERY,
                track_total_hits=True,
                pretty=True
            )
        except (ApiError, TransportError) as e:
            logger.error("Search failed", index=index, error=str(e))
            raise BackendError(f"search on {index!r} failed: {e}", index=index or "") from e

        try:
            return SearchEnvelope.model_validate(response.body)
        except ValidationError as e:
            logger.error(
                "Unexpected search response shape",
                index=index,
                errors=e.error_count()
            )
            raise ResponseShapeError(
                f"search on {index!r} returned an unexpected shape", index=index or ""
            ) from e

    def search_all(self) -> SearchEnvelope:
        """Match-all search over every index."""
        return self.search(ALL_INDICES)

    def health(self) -> dict:
        """
        Get cluster health status.

        Returns:
            Dict with cluster health information
        """
        try:
            return self._client.cluster.health().body
        except (ApiError, TransportError) as e:
            raise BackendError(f"cluster health failed: {e}") from e

    def close(self):
        """Close the Elasticsearch client connection."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
