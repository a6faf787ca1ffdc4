"""Unit tests for the output encoders."""

from __future__ import annotations

import copy
import json

import pytest

from compute_embeddings.output import (
    VECTOR_FIELD,
    AugmentedDocumentEncoder,
    DocumentStyle,
    EmbeddedDocument,
    Point,
    PointListEncoder,
    get_encoder,
)

# ── Fixtures ────────────────────────────────────────────────────────────

SAMPLE_DOCUMENTS = [
    {
        "name": "Desk Fan",
        "categories": ["Appliances", "Fans"],
        "hierarchicalCategories": {"lvl0": "Appliances"},
        "price": 19.99,
        "objectID": "1",
    },
    {"name": "Lamp", "free_shipping": True, "objectID": "2"},
    {"name": "Kettle", "extra": None, "objectID": "3"},
]


@pytest.fixture()
def embedded() -> list[EmbeddedDocument]:
    return [
        EmbeddedDocument(index=i, document=doc, vector=[float(i), 0.5])
        for i, doc in enumerate(SAMPLE_DOCUMENTS)
    ]


# ── AugmentedDocumentEncoder ──────────────────────────────────────────


class TestAugmentedDocumentEncoder:
    def test_adds_exactly_one_vector_field(self, embedded: list[EmbeddedDocument]) -> None:
        output = AugmentedDocumentEncoder().render(embedded)

        assert len(output) == len(SAMPLE_DOCUMENTS)
        for original, rendered in zip(SAMPLE_DOCUMENTS, output):
            assert set(rendered) == set(original) | {VECTOR_FIELD}
            assert {k: v for k, v in rendered.items() if k != VECTOR_FIELD} == original

    def test_vector_attached_to_matching_document(self, embedded: list[EmbeddedDocument]) -> None:
        output = AugmentedDocumentEncoder().render(embedded)
        assert [doc[VECTOR_FIELD] for doc in output] == [[0.0, 0.5], [1.0, 0.5], [2.0, 0.5]]

    def test_existing_vector_field_is_replaced(self) -> None:
        item = EmbeddedDocument(index=0, document={"name": "x", VECTOR_FIELD: [9.0]}, vector=[1.0])
        (rendered,) = AugmentedDocumentEncoder().render([item])
        assert rendered == {"name": "x", VECTOR_FIELD: [1.0]}

    def test_does_not_mutate_input(self, embedded: list[EmbeddedDocument]) -> None:
        before = copy.deepcopy([item.document for item in embedded])
        AugmentedDocumentEncoder().render(embedded)
        assert [item.document for item in embedded] == before
        assert all(VECTOR_FIELD not in doc for doc in SAMPLE_DOCUMENTS)

    def test_output_is_json_serialisable(self, embedded: list[EmbeddedDocument]) -> None:
        text = json.dumps(AugmentedDocumentEncoder().render(embedded))
        assert json.loads(text)[1]["name"] == "Lamp"


# ── PointListEncoder ───────────────────────────────────────────────────


class TestPointListEncoder:
    def test_points_shape(self, embedded: list[EmbeddedDocument]) -> None:
        output = PointListEncoder().render(embedded)

        assert list(output) == ["points"]
        assert [p["id"] for p in output["points"]] == [0, 1, 2]
        first = output["points"][0]
        assert set(first) == {"id", "vector", "payload"}
        assert first["vector"] == [0.0, 0.5]
        assert first["payload"] == SAMPLE_DOCUMENTS[0]

    def test_payload_excludes_vector_attribute(self) -> None:
        item = EmbeddedDocument(index=4, document={"name": "x", VECTOR_FIELD: [9.0]}, vector=[1.0])
        output = PointListEncoder().render([item])
        assert output == {"points": [{"id": 4, "vector": [1.0], "payload": {"name": "x"}}]}

    def test_order_follows_index_not_arrival(self, embedded: list[EmbeddedDocument]) -> None:
        shuffled = [embedded[2], embedded[0], embedded[1]]
        output = PointListEncoder().render(shuffled)
        assert [p["id"] for p in output["points"]] == [0, 1, 2]
        assert [p["payload"]["objectID"] for p in output["points"]] == ["1", "2", "3"]

    def test_empty_input(self) -> None:
        assert PointListEncoder().render([]) == {"points": []}

    def test_point_from_embedded(self, embedded: list[EmbeddedDocument]) -> None:
        point = Point.from_embedded(embedded[1])
        assert point.id == 1
        assert point.payload["name"] == "Lamp"


def test_augmented_order_follows_index(embedded: list[EmbeddedDocument]) -> None:
    output = AugmentedDocumentEncoder().render(list(reversed(embedded)))
    assert [doc["objectID"] for doc in output] == ["1", "2", "3"]


# ── Style selection ────────────────────────────────────────────────────


class TestGetEncoder:
    @pytest.mark.parametrize(
        ("style", "expected"),
        [
            ("augmented-document", AugmentedDocumentEncoder),
            ("meilisearch", AugmentedDocumentEncoder),
            ("point-list", PointListEncoder),
            ("Qdrant", PointListEncoder),
            (DocumentStyle.POINT_LIST, PointListEncoder),
        ],
    )
    def test_style_aliases(self, style: str, expected: type) -> None:
        assert isinstance(get_encoder(style), expected)

    def test_unknown_style_raises(self) -> None:
        with pytest.raises(ValueError):
            get_encoder("elasticsearch")
