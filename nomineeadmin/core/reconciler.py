"""Convert between persisted nomination records and editable drafts."""
import copy
from typing import Any, Dict, List, Optional

from nomineeadmin.core.draft_store import DraftStore
from nomineeadmin.models.nomination import (
    Artist,
    Category,
    NominationRecord,
    Stage,
    Status,
)


def empty_record() -> NominationRecord:
    """Blank nomination set: one category with one empty artist row."""
    return NominationRecord(categories=[Category(artists=[Artist()])])


def from_persisted(record: Optional[NominationRecord] = None) -> DraftStore:
    """Open a draft on a deep copy of record (or on a blank record)."""
    if record is None:
        return DraftStore(empty_record())
    return DraftStore(copy.deepcopy(record))


def _categories_to_list(categories: List[Category]) -> List[Dict[str, Any]]:
    return [
        {
            "name": c.name,
            "artists": [
                {"name": a.name, "contactHandle": a.contact_handle}
                for a in c.artists
            ],
        }
        for c in categories
    ]


def to_persistence_payload(draft: DraftStore) -> Dict[str, Any]:
    """Body for the store's create/update calls. Drops id, created_at and node keys."""
    record = draft.snapshot()
    return {
        "round": record.round,
        "stage": record.stage.value if record.stage else None,
        "status": record.status.value,
        "categories": _categories_to_list(record.categories),
    }


def record_to_dict(record: NominationRecord) -> Dict[str, Any]:
    """Wire shape of a persisted record (payload fields plus id and created_at)."""
    return {
        "id": record.id,
        "round": record.round,
        "stage": record.stage.value if record.stage else None,
        "status": record.status.value,
        "created_at": record.created_at,
        "categories": _categories_to_list(record.categories),
    }


def _list_of_objects(value: Any, what: str) -> List[Dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise ValueError(f"{what} must be a list of objects")
    return value


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def record_from_dict(data: Dict[str, Any]) -> NominationRecord:
    """Parse a record returned by the store.

    Document stores return the id as ``_id``; older payloads name categories
    ``category`` and artists ``nominees``. Both spellings are accepted.
    Malformed shapes raise ValueError.
    """
    if not isinstance(data, dict):
        raise ValueError("Nomination record must be an object")
    record_id = data.get("id", data.get("_id"))
    stage = data.get("stage")
    categories = []
    for item in _list_of_objects(data.get("categories"), "categories"):
        artists_data = _list_of_objects(
            item.get("artists", item.get("nominees")), "artists"
        )
        categories.append(
            Category(
                name=_text(item.get("name", item.get("category"))),
                artists=[
                    Artist(
                        name=_text(a.get("name")),
                        contact_handle=_text(
                            a.get("contactHandle", a.get("contact_handle"))
                        ),
                    )
                    for a in artists_data
                ],
            )
        )
    created_at = data.get("created_at", data.get("createdAt"))
    return NominationRecord(
        id=str(record_id) if record_id is not None else None,
        round=_text(data.get("round")),
        stage=Stage(stage) if stage else None,
        status=Status(data.get("status") or Status.ACTIVE.value),
        created_at=str(created_at) if created_at is not None else None,
        categories=categories,
    )
