"""Shared pytest fixtures.

Fixture overview
----------------
persisted_record : stored nomination with two categories (has an id)
gateway          : in-memory gateway that records every call
nominations      : NominationList over ``gateway``
editor           : NominationEditor over ``gateway`` and ``nominations``
"""
import copy
from typing import Any, Dict, List, Optional

import pytest

from nomineeadmin.core.editor import NominationEditor
from nomineeadmin.core.gateway import GatewayError, NotFound
from nomineeadmin.core.nomination_list import NominationList
from nomineeadmin.core.reconciler import record_from_dict
from nomineeadmin.models.nomination import (
    Artist,
    Category,
    NominationRecord,
    Stage,
    Status,
)


class FakeGateway:
    """In-memory store. Set ``fail_with`` to make the next write raise it."""

    def __init__(self, records: Optional[List[NominationRecord]] = None) -> None:
        self.records = [copy.deepcopy(r) for r in records or []]
        self.calls: List[tuple] = []
        self.fail_with: Optional[GatewayError] = None
        self.fail_list_with: Optional[Exception] = None
        self._next_id = 100

    @property
    def write_calls(self) -> List[tuple]:
        return [c for c in self.calls if c[0] != "list"]

    async def list(self) -> List[NominationRecord]:
        self.calls.append(("list",))
        if self.fail_list_with is not None:
            raise self.fail_list_with
        return [copy.deepcopy(r) for r in self.records]

    async def create(self, payload: Dict[str, Any]) -> NominationRecord:
        self.calls.append(("create", copy.deepcopy(payload)))
        if self.fail_with is not None:
            raise self.fail_with
        record = record_from_dict(payload)
        self._next_id += 1
        record.id = f"n{self._next_id}"
        record.created_at = "2024-12-10T00:00:00+00:00"
        self.records.append(record)
        return copy.deepcopy(record)

    async def update(self, record_id: str, payload: Dict[str, Any]) -> NominationRecord:
        self.calls.append(("update", record_id, copy.deepcopy(payload)))
        if self.fail_with is not None:
            raise self.fail_with
        for i, existing in enumerate(self.records):
            if existing.id == record_id:
                record = record_from_dict(payload)
                record.id = record_id
                record.created_at = existing.created_at
                self.records[i] = record
                return copy.deepcopy(record)
        raise NotFound(record_id)

    async def delete(self, record_id: str) -> None:
        self.calls.append(("delete", record_id))
        if self.fail_with is not None:
            raise self.fail_with
        for i, existing in enumerate(self.records):
            if existing.id == record_id:
                del self.records[i]
                return
        raise NotFound(record_id)

    async def aclose(self) -> None:
        pass


@pytest.fixture
def persisted_record() -> NominationRecord:
    """The 13th edition, final stage, two categories."""
    return NominationRecord(
        id="n1",
        round="The 13th Nominees",
        stage=Stage.FINAL,
        status=Status.ACTIVE,
        created_at="2024-12-10T00:00:00+00:00",
        categories=[
            Category(
                name="Favorite Single of the Year",
                artists=[
                    Artist(name="Artist A", contact_handle="101"),
                    Artist(name="Artist B", contact_handle="102"),
                ],
            ),
            Category(
                name="Best Film of the Year",
                artists=[Artist(name="Film X", contact_handle="201")],
            ),
        ],
    )


@pytest.fixture
def gateway(persisted_record) -> FakeGateway:
    return FakeGateway([persisted_record])


@pytest.fixture
def nominations(gateway) -> NominationList:
    return NominationList(gateway)


@pytest.fixture
def editor(gateway, nominations) -> NominationEditor:
    return NominationEditor(gateway, nominations)
