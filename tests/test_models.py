import pytest
from pydantic import ValidationError

from esgateway.models import InsertRequest, SearchEnvelope


def test_insert_request_accepts_nested_document():
    req = InsertRequest.model_validate(
        {"index": "items", "id": "1", "doc": {"name": "pen", "tags": ["a", "b"], "n": {"x": 1}}}
    )
    assert req.index == "items"
    assert req.id == "1"
    assert req.doc["n"] == {"x": 1}


@pytest.mark.parametrize("body", [
    {"id": "1", "doc": {}},
    {"index": "items", "doc": {}},
    {"index": "items", "id": "1"},
    {"index": "", "id": "1", "doc": {}},
    {"index": "items", "id": "", "doc": {}},
    {"index": "items", "id": 1, "doc": {}},
    {"index": "items", "id": "1", "doc": ["not", "an", "object"]},
])
def test_insert_request_rejects_bad_shapes(body):
    with pytest.raises(ValidationError):
        InsertRequest.model_validate(body)


def test_envelope_keeps_backend_order_and_ignores_extra_fields():
    envelope = SearchEnvelope.model_validate({
        "took": 3,
        "hits": {
            "total": {"value": 2, "relation": "eq"},
            "hits": [
                {"_index": "a", "_id": "2", "_score": 1.0, "_source": {"k": 2}},
                {"_index": "a", "_id": "1", "_score": 1.0, "_source": {"k": 1}},
            ],
        },
    })
    assert [h.id for h in envelope.hits.hits] == ["2", "1"]
    assert envelope.to_payload() == {
        "hits": {"hits": [
            {"_id": "2", "_source": {"k": 2}},
            {"_id": "1", "_source": {"k": 1}},
        ]}
    }


def test_empty_hit_list_serializes_as_empty_list():
    envelope = SearchEnvelope.model_validate({"hits": {"hits": []}})
    assert envelope.to_payload() == {"hits": {"hits": []}}


@pytest.mark.parametrize("body", [
    {},
    {"hits": {}},
    {"hits": {"hits": None}},
    {"hits": {"hits": [{"_source": {}}]}},
    {"hits": {"hits": [{"_id": "1"}]}},
    {"hits": {"hits": [{"_id": 7, "_source": {}}]}},
    {"hits": {"hits": [{"_id": "1", "_source": "text"}]}},
])
def test_envelope_rejects_shape_mismatch(body):
    with pytest.raises(ValidationError):
        SearchEnvelope.model_validate(body)
