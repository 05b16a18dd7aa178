"""
Unit tests for DraftStore structural edits.
"""
import pytest

from nomineeadmin.core.reconciler import from_persisted
from nomineeadmin.models.nomination import Stage, Status


class TestSetField:
    def test_record_fields(self) -> None:
        draft = from_persisted()
        draft.set_field((), "round", "14th")
        draft.set_field((), "stage", "SemiFinal")
        draft.set_field((), "status", "Deactivated")
        record = draft.snapshot()
        assert record.round == "14th"
        assert record.stage is Stage.SEMI_FINAL
        assert record.status is Status.DEACTIVATED

    def test_clearing_stage(self) -> None:
        draft = from_persisted()
        draft.set_field((), "stage", "Final")
        draft.set_field((), "stage", None)
        assert draft.snapshot().stage is None

    def test_invalid_stage_raises(self) -> None:
        with pytest.raises(ValueError):
            from_persisted().set_field((), "stage", "Quarter")

    def test_category_and_artist_fields(self) -> None:
        draft = from_persisted()
        draft.set_field((0,), "name", "Best Song")
        draft.set_field((0, 0), "name", "Artist A")
        draft.set_field((0, 0), "contact_handle", "101")
        category = draft.snapshot().categories[0]
        assert category.name == "Best Song"
        assert category.artists[0].name == "Artist A"
        assert category.artists[0].contact_handle == "101"

    def test_unknown_field_raises(self) -> None:
        draft = from_persisted()
        with pytest.raises(ValueError):
            draft.set_field((0,), "artists", [])
        with pytest.raises(ValueError):
            draft.set_field((), "id", "x")

    @pytest.mark.parametrize("path", [(1,), (-1,), (0, 1), (0, -1), (3, 0)])
    def test_out_of_range_raises_index_error(self, path) -> None:
        with pytest.raises(IndexError):
            from_persisted().set_field(path, "name", "x")


class TestStructure:
    def test_new_category_has_one_empty_artist(self) -> None:
        draft = from_persisted()
        index = draft.add_category()
        assert index == 1
        category = draft.snapshot().categories[1]
        assert category.name == ""
        assert len(category.artists) == 1
        assert category.artists[0].name == ""

    def test_add_then_remove_category_restores_draft(self, persisted_record) -> None:
        draft = from_persisted(persisted_record)
        before = draft.snapshot()
        index = draft.add_category()
        draft.remove_category(index)
        assert draft.snapshot() == before

    def test_remove_keeps_sibling_order(self, persisted_record) -> None:
        draft = from_persisted(persisted_record)
        draft.add_category()
        draft.set_field((2,), "name", "Third")
        draft.remove_category(1)
        names = [c.name for c in draft.snapshot().categories]
        assert names == ["Favorite Single of the Year", "Third"]

    def test_removing_last_category_is_allowed(self) -> None:
        draft = from_persisted()
        draft.remove_category(0)
        assert draft.category_count == 0

    def test_add_and_remove_artist(self, persisted_record) -> None:
        draft = from_persisted(persisted_record)
        index = draft.add_artist(0)
        assert index == 2
        draft.remove_artist(0, 0)
        artists = draft.snapshot().categories[0].artists
        assert [a.name for a in artists] == ["Artist B", ""]

    def test_removing_last_artist_is_allowed(self) -> None:
        draft = from_persisted()
        draft.remove_artist(0, 0)
        assert draft.artist_count(0) == 0

    def test_remove_artist_out_of_range(self) -> None:
        with pytest.raises(IndexError):
            from_persisted().remove_artist(0, 5)


class TestKeys:
    def test_key_survives_preceding_removal(self, persisted_record) -> None:
        """A key captured before a removal still addresses the same node."""
        draft = from_persisted(persisted_record)
        second = draft.category_key(1)
        draft.remove_category(0)
        draft.add_artist_by_key(second)
        category = draft.snapshot().categories[0]
        assert category.name == "Best Film of the Year"
        assert len(category.artists) == 2

    def test_removed_key_is_rejected(self, persisted_record) -> None:
        draft = from_persisted(persisted_record)
        key = draft.category_key(0)
        draft.remove_category_by_key(key)
        with pytest.raises(KeyError):
            draft.remove_category_by_key(key)

    def test_every_node_gets_a_distinct_key(self, persisted_record) -> None:
        record = from_persisted(persisted_record).snapshot()
        keys = [c.key for c in record.categories]
        keys += [a.key for c in record.categories for a in c.artists]
        assert all(keys)
        assert len(set(keys)) == len(keys)


def test_snapshot_is_detached() -> None:
    draft = from_persisted()
    snap = draft.snapshot()
    snap.categories.clear()
    assert draft.category_count == 1
