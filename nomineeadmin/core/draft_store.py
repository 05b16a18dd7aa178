"""Working copy of a nomination record with structural edits.

Nodes are addressed internally by generated keys so an index captured before
a removal can never land on the wrong sibling. Index-based methods exist for
the editing surface and resolve to keys before mutating.
"""
import copy
import uuid
from typing import Any, Optional, Sequence, Tuple

from nomineeadmin.models.nomination import (
    Artist,
    Category,
    NominationRecord,
    Stage,
    Status,
)

RECORD_FIELDS = ("round", "stage", "status")
CATEGORY_FIELDS = ("name",)
ARTIST_FIELDS = ("name", "contact_handle")


def _new_key() -> str:
    return uuid.uuid4().hex


def _coerce_stage(value: Any) -> Optional[Stage]:
    if value is None or value == "":
        return None
    return Stage(value)


class DraftStore:
    """Owns exactly one mutable NominationRecord; hands out copies only."""

    def __init__(self, record: NominationRecord) -> None:
        # Callers pass a record they no longer hold; see reconciler.from_persisted
        self._record = record
        for category in self._record.categories:
            category.key = _new_key()
            for artist in category.artists:
                artist.key = _new_key()

    # -- reads --------------------------------------------------------------

    def snapshot(self) -> NominationRecord:
        """Deep copy of the draft, safe to keep after further edits."""
        return copy.deepcopy(self._record)

    @property
    def record_id(self) -> Optional[str]:
        return self._record.id

    @property
    def category_count(self) -> int:
        return len(self._record.categories)

    def artist_count(self, category_index: int) -> int:
        return len(self._category_at(category_index).artists)

    def category_key(self, category_index: int) -> str:
        return self._category_at(category_index).key

    def artist_key(self, category_index: int, artist_index: int) -> str:
        return self._artist_at(category_index, artist_index).key

    # -- index boundary -----------------------------------------------------

    def set_field(self, path: Sequence[int], field: str, value: Any) -> None:
        """Update one field of the record, a category or an artist.

        path is () for the record, (category_index,) for a category and
        (category_index, artist_index) for an artist.
        """
        path = tuple(path)
        if len(path) == 0:
            self._set_record_field(field, value)
        elif len(path) == 1:
            if field not in CATEGORY_FIELDS:
                raise ValueError(f"Unknown category field: {field}")
            self._category_at(path[0]).name = "" if value is None else str(value)
        elif len(path) == 2:
            if field not in ARTIST_FIELDS:
                raise ValueError(f"Unknown artist field: {field}")
            artist = self._artist_at(path[0], path[1])
            setattr(artist, field, "" if value is None else str(value))
        else:
            raise ValueError(f"Path too deep: {path}")

    def add_category(self) -> int:
        """Append an empty category with one empty artist row; return its index."""
        self.add_category_with_key()
        return len(self._record.categories) - 1

    def remove_category(self, category_index: int) -> None:
        self.remove_category_by_key(self.category_key(category_index))

    def add_artist(self, category_index: int) -> int:
        """Append an empty artist to a category; return its index."""
        key = self.category_key(category_index)
        self.add_artist_by_key(key)
        return len(self._record.categories[category_index].artists) - 1

    def remove_artist(self, category_index: int, artist_index: int) -> None:
        self.remove_artist_by_key(
            self.category_key(category_index),
            self.artist_key(category_index, artist_index),
        )

    # -- key based ----------------------------------------------------------

    def add_category_with_key(self) -> str:
        category = Category(
            artists=[Artist(key=_new_key())],
            key=_new_key(),
        )
        self._record.categories.append(category)
        return category.key

    def remove_category_by_key(self, category_key: str) -> None:
        i, _ = self._find_category(category_key)
        del self._record.categories[i]

    def add_artist_by_key(self, category_key: str) -> str:
        _, category = self._find_category(category_key)
        artist = Artist(key=_new_key())
        category.artists.append(artist)
        return artist.key

    def remove_artist_by_key(self, category_key: str, artist_key: str) -> None:
        _, category = self._find_category(category_key)
        for i, artist in enumerate(category.artists):
            if artist.key == artist_key:
                del category.artists[i]
                return
        raise KeyError(artist_key)

    # -- helpers ------------------------------------------------------------

    def _set_record_field(self, field: str, value: Any) -> None:
        if field == "round":
            self._record.round = "" if value is None else str(value)
        elif field == "stage":
            self._record.stage = _coerce_stage(value)
        elif field == "status":
            self._record.status = Status(value)
        else:
            raise ValueError(f"Unknown record field: {field}")

    def _find_category(self, category_key: str) -> Tuple[int, Category]:
        for i, category in enumerate(self._record.categories):
            if category.key == category_key:
                return i, category
        raise KeyError(category_key)

    def _category_at(self, category_index: int) -> Category:
        categories = self._record.categories
        if not 0 <= category_index < len(categories):
            raise IndexError(f"Category index out of range: {category_index}")
        return categories[category_index]

    def _artist_at(self, category_index: int, artist_index: int) -> Artist:
        artists = self._category_at(category_index).artists
        if not 0 <= artist_index < len(artists):
            raise IndexError(f"Artist index out of range: {artist_index}")
        return artists[artist_index]
