"""
esgateway Models: Request and Result Shapes
===========================================

The insert request accepted on ``POST /doc`` and the fixed search result
shape returned by ``/docs`` and ``/alldocs``. Search responses from
Elasticsearch are decoded into ``SearchEnvelope`` at the boundary: a hit
without a string ``_id`` or an object ``_source`` fails the whole response.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, StrictStr


class InsertRequest(BaseModel):
    index: StrictStr = Field(min_length=1, description="Target index name")
    id: StrictStr = Field(min_length=1, description="Document identifier")
    doc: Dict[str, Any] = Field(description="Document body")


class DocHit(BaseModel):
    id: StrictStr = Field(alias="_id")
    source: Dict[str, Any] = Field(alias="_source")


class HitList(BaseModel):
    hits: List[DocHit]


class SearchEnvelope(BaseModel):
    """``{"hits": {"hits": [{"_id": ..., "_source": {...}}, ...]}}``"""

    hits: HitList

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
