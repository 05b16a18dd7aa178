"""Nomination record: round -> categories -> artists, plus commit checks."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Stage(str, Enum):
    """Voting phase a nomination set is in."""
    PRELIMINARY = "Preliminary"
    SEMI_FINAL = "SemiFinal"
    FINAL = "Final"


class Status(str, Enum):
    """Whether a round is shown to voters."""
    ACTIVE = "Active"
    DEACTIVATED = "Deactivated"


@dataclass
class Artist:
    """Nominated artist and the short-code used to vote for them."""
    name: str = ""
    contact_handle: str = ""
    # Draft-only node key; never persisted
    key: Optional[str] = field(default=None, compare=False, repr=False)


@dataclass
class Category:
    """Award category; artists are kept in display order."""
    name: str = ""
    artists: List[Artist] = field(default_factory=list)
    key: Optional[str] = field(default=None, compare=False, repr=False)


@dataclass
class NominationRecord:
    """One nomination set. id and created_at are assigned by the store."""
    round: str = ""
    stage: Optional[Stage] = None
    categories: List[Category] = field(default_factory=list)
    status: Status = Status.ACTIVE
    id: Optional[str] = None
    created_at: Optional[str] = None


def validation_problems(record: NominationRecord) -> List[str]:
    """Return a message for every hard commit invariant the record breaks."""
    problems = []
    if not record.round or not record.round.strip():
        problems.append("Award round is required")
    if record.stage is None:
        problems.append("Stage is required")
    if not record.categories:
        problems.append("At least one category is required")
    return problems


def is_committable(record: NominationRecord) -> bool:
    return not validation_problems(record)


def empty_categories(record: NominationRecord) -> List[int]:
    """Indices of categories without artists (allowed, but worth a warning)."""
    return [i for i, c in enumerate(record.categories) if not c.artists]


def summarize(record: NominationRecord) -> dict:
    """List-card view: round header plus artist count per category."""
    return {
        "id": record.id,
        "round": record.round,
        "stage": record.stage.value if record.stage else None,
        "status": record.status.value,
        "created_at": record.created_at,
        "categories": [
            {"name": c.name, "count": len(c.artists)} for c in record.categories
        ],
    }
