"""Read-only preview of a draft; gates the step from editing to submission."""
import copy
from dataclasses import dataclass, field
from typing import List, Tuple

from nomineeadmin.core.draft_store import DraftStore
from nomineeadmin.core.reconciler import record_to_dict
from nomineeadmin.models.nomination import (
    NominationRecord,
    empty_categories,
    validation_problems,
)


class ValidationError(Exception):
    """Draft breaks a commit invariant; never reaches the gateway."""

    def __init__(self, problems: List[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = list(problems)


@dataclass(frozen=True)
class PreviewView:
    """Frozen preview. ``record`` hands out a fresh copy on every access."""
    _snapshot: NominationRecord = field(repr=False)
    warnings: Tuple[str, ...] = ()
    artist_counts: Tuple[Tuple[str, int], ...] = ()

    @property
    def record(self) -> NominationRecord:
        return copy.deepcopy(self._snapshot)

    def to_dict(self) -> dict:
        return {
            "record": record_to_dict(self._snapshot),
            "warnings": list(self.warnings),
            "artist_counts": [
                {"name": name, "count": count} for name, count in self.artist_counts
            ],
        }


def assemble(draft: DraftStore) -> PreviewView:
    """Snapshot the draft for rendering, or raise ValidationError."""
    record = draft.snapshot()
    problems = validation_problems(record)
    if problems:
        raise ValidationError(problems)
    warnings = tuple(
        f"Category {i + 1} ({record.categories[i].name or 'unnamed'}) has no artists"
        for i in empty_categories(record)
    )
    return PreviewView(
        _snapshot=record,
        warnings=warnings,
        artist_counts=tuple((c.name, len(c.artists)) for c in record.categories),
    )
