"""Data models for nomination records."""
from nomineeadmin.models.nomination import (
    Artist,
    Category,
    NominationRecord,
    Stage,
    Status,
    empty_categories,
    is_committable,
    summarize,
    validation_problems,
)

__all__ = [
    "Artist",
    "Category",
    "NominationRecord",
    "Stage",
    "Status",
    "empty_categories",
    "is_committable",
    "summarize",
    "validation_problems",
]
