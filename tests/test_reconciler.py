"""
Unit tests for converting between persisted records, drafts and payloads.
"""
import copy

import pytest

from nomineeadmin.core.reconciler import (
    empty_record,
    from_persisted,
    record_from_dict,
    record_to_dict,
    to_persistence_payload,
)
from nomineeadmin.models.nomination import Stage, Status, is_committable


class TestFromPersisted:
    def test_new_draft_is_canonical_empty_record(self) -> None:
        record = from_persisted().snapshot()
        assert record == empty_record()
        assert record.id is None
        assert record.stage is None
        assert record.status is Status.ACTIVE

    def test_draft_keeps_the_record_id(self, persisted_record) -> None:
        assert from_persisted(persisted_record).record_id == "n1"

    def test_mutating_draft_never_touches_original(self, persisted_record) -> None:
        original = copy.deepcopy(persisted_record)
        draft = from_persisted(persisted_record)
        draft.set_field((), "round", "changed")
        draft.set_field((0,), "name", "changed")
        draft.set_field((0, 0), "contact_handle", "999")
        draft.add_artist(1)
        draft.remove_artist(0, 1)
        draft.remove_category(1)
        draft.add_category()
        assert persisted_record == original
        assert all(c.key is None for c in persisted_record.categories)


class TestPayload:
    def test_payload_shape_has_no_transient_fields(self, persisted_record) -> None:
        payload = to_persistence_payload(from_persisted(persisted_record))
        assert payload == {
            "round": "The 13th Nominees",
            "stage": "Final",
            "status": "Active",
            "categories": [
                {
                    "name": "Favorite Single of the Year",
                    "artists": [
                        {"name": "Artist A", "contactHandle": "101"},
                        {"name": "Artist B", "contactHandle": "102"},
                    ],
                },
                {
                    "name": "Best Film of the Year",
                    "artists": [{"name": "Film X", "contactHandle": "201"}],
                },
            ],
        }

    def test_returned_record_round_trips(self, persisted_record) -> None:
        data = record_to_dict(persisted_record)
        assert record_from_dict(data) == persisted_record
        restored = from_persisted(record_from_dict(data)).snapshot()
        assert restored == persisted_record


class TestRecordFromDict:
    def test_document_store_id_and_legacy_names(self) -> None:
        record = record_from_dict(
            {
                "_id": "65a1",
                "round": "The 12th Nominees",
                "stage": "Preliminary",
                "status": "Deactivated",
                "createdAt": "2024-12-10",
                "categories": [{"category": "Best Clip", "nominees": [{"name": "Z"}]}],
            }
        )
        assert record.id == "65a1"
        assert record.stage is Stage.PRELIMINARY
        assert record.status is Status.DEACTIVATED
        assert record.created_at == "2024-12-10"
        assert record.categories[0].name == "Best Clip"
        assert record.categories[0].artists[0].name == "Z"
        assert record.categories[0].artists[0].contact_handle == ""

    def test_numeric_contact_handle_becomes_text(self) -> None:
        record = record_from_dict(
            {"id": 7, "round": "r", "stage": "Final",
             "categories": [{"name": "c", "artists": [{"name": "a", "contactHandle": 101}]}]}
        )
        assert record.id == "7"
        assert record.categories[0].artists[0].contact_handle == "101"

    def test_unknown_stage_rejected(self) -> None:
        with pytest.raises(ValueError):
            record_from_dict({"round": "r", "stage": "Quarter"})

    def test_non_object_rejected(self) -> None:
        with pytest.raises(ValueError):
            record_from_dict(["not", "a", "record"])


@pytest.mark.parametrize(
    "categories",
    [["oops"], "Best Song", [{"name": "c", "artists": ["a"]}], [{"name": "c", "nominees": 3}]],
)
def test_malformed_categories_rejected(categories) -> None:
    with pytest.raises(ValueError):
        record_from_dict({"round": "r", "stage": "Final", "categories": categories})


def test_numeric_round_becomes_text() -> None:
    record = record_from_dict({"round": 13, "stage": "Final", "categories": [{"name": "c"}]})
    assert record.round == "13"
    assert is_committable(record)
