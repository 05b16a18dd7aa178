"""Persist and load nomination records (JSON); local stand-in for the remote store."""
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from nomineeadmin.config import NOMINATIONS_PATH, ensure_data_dir
from nomineeadmin.core.gateway import NetworkError, NotFound, ServerValidationError
from nomineeadmin.core.reconciler import record_from_dict, record_to_dict
from nomineeadmin.models.nomination import NominationRecord, validation_problems


def load_records(path: Path) -> List[NominationRecord]:
    """Load all nomination records from disk.

    An unreadable or malformed file raises NetworkError instead of reading as
    empty, so a later save can never overwrite records it failed to load.
    """
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        raise NetworkError(f"Cannot read nomination store {path}: {e}") from e
    if not isinstance(data, dict) or not isinstance(data.get("nominations", []), list):
        raise NetworkError(f"Nomination store {path} is not in the expected format")
    out = []
    for item in data.get("nominations", []):
        try:
            out.append(record_from_dict(item))
        except ValueError as e:
            raise NetworkError(f"Malformed nomination in {path}: {e}") from e
    return out


def save_records(path: Path, records: List[NominationRecord]) -> None:
    """Save all nomination records to disk."""
    data = {"nominations": [record_to_dict(r) for r in records]}
    path.write_text(json.dumps(data, indent=2))


def _parse_payload(payload: Dict[str, Any]) -> NominationRecord:
    try:
        record = record_from_dict(payload)
    except ValueError as e:
        raise ServerValidationError(f"Invalid nomination: {e}") from e
    problems = validation_problems(record)
    if problems:
        raise ServerValidationError("; ".join(problems))
    return record


class JsonNominationGateway:
    """Gateway over a JSON file. Every write reloads, edits and rewrites the file."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path

    def _file(self) -> Path:
        if self._path is None:
            ensure_data_dir()
            return NOMINATIONS_PATH
        self._path.parent.mkdir(parents=True, exist_ok=True)
        return self._path

    async def list(self) -> List[NominationRecord]:
        return load_records(self._file())

    async def create(self, payload: Dict[str, Any]) -> NominationRecord:
        """Append a new record with a fresh id and creation time."""
        record = _parse_payload(payload)
        record.id = str(uuid.uuid4())
        record.created_at = datetime.now(timezone.utc).isoformat()
        path = self._file()
        records = load_records(path)
        records.append(record)
        save_records(path, records)
        return record

    async def update(self, record_id: str, payload: Dict[str, Any]) -> NominationRecord:
        """Replace record content in place; id and created_at are kept."""
        path = self._file()
        records = load_records(path)
        for i, existing in enumerate(records):
            if existing.id == record_id:
                updated = _parse_payload(payload)
                updated.id = existing.id
                updated.created_at = existing.created_at
                records[i] = updated
                save_records(path, records)
                return updated
        raise NotFound(record_id)

    async def delete(self, record_id: str) -> None:
        path = self._file()
        records = load_records(path)
        for i, existing in enumerate(records):
            if existing.id == record_id:
                records.pop(i)
                save_records(path, records)
                return
        raise NotFound(record_id)

    async def aclose(self) -> None:
        pass
