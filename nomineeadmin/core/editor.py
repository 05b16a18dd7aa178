"""Nomination editor session: Idle -> Editing -> Previewing -> Submitting -> Idle | Error.

There is one draft per editor and at most one submission in flight; the
Submitting state only leaves through the gateway's answer.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Union

from nomineeadmin.core.draft_store import DraftStore
from nomineeadmin.core.gateway import GatewayError, NetworkError, PersistenceGateway
from nomineeadmin.core.nomination_list import NominationList
from nomineeadmin.core.preview import PreviewView, ValidationError, assemble
from nomineeadmin.core.reconciler import from_persisted, to_persistence_payload
from nomineeadmin.models.nomination import NominationRecord

logger = logging.getLogger(__name__)


class InvalidTransition(Exception):
    """Action is not allowed in the editor's current state."""


class Phase(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    PREVIEWING = "previewing"
    SUBMITTING = "submitting"
    ERROR = "error"


@dataclass(frozen=True)
class CreateMode:
    pass


@dataclass(frozen=True)
class UpdateMode:
    target_id: str


Mode = Union[CreateMode, UpdateMode]


@dataclass(frozen=True)
class Idle:
    phase = Phase.IDLE


@dataclass(frozen=True)
class Editing:
    draft: DraftStore
    mode: Mode
    message: Optional[str] = None
    phase = Phase.EDITING


@dataclass(frozen=True)
class Previewing:
    draft: DraftStore
    mode: Mode
    preview: PreviewView
    phase = Phase.PREVIEWING


@dataclass(frozen=True)
class Submitting:
    draft: DraftStore
    mode: Mode
    phase = Phase.SUBMITTING


@dataclass(frozen=True)
class Failed:
    """Error state. retry_to is EDITING for rejected payloads, PREVIEWING for transport failures."""
    message: str
    draft: DraftStore
    mode: Mode
    retry_to: Phase
    phase = Phase.ERROR


EditorState = Union[Idle, Editing, Previewing, Submitting, Failed]


def _mode_to_dict(mode: Mode) -> dict:
    if isinstance(mode, UpdateMode):
        return {"kind": "update", "target_id": mode.target_id}
    return {"kind": "create"}


def _draft_to_dict(draft: DraftStore) -> dict:
    """Draft with node keys so the editing surface can render rows stably."""
    record = draft.snapshot()
    return {
        "id": record.id,
        "round": record.round,
        "stage": record.stage.value if record.stage else None,
        "status": record.status.value,
        "categories": [
            {
                "key": c.key,
                "name": c.name,
                "artists": [
                    {"key": a.key, "name": a.name, "contactHandle": a.contact_handle}
                    for a in c.artists
                ],
            }
            for c in record.categories
        ],
    }


class NominationEditor:
    """Single editor session over the nomination list."""

    def __init__(self, gateway: PersistenceGateway, nominations: NominationList) -> None:
        self._gateway = gateway
        self._nominations = nominations
        self._state: EditorState = Idle()

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    def _require(self, *allowed):
        if not isinstance(self._state, allowed):
            names = ", ".join(cls.phase.value for cls in allowed)
            raise InvalidTransition(
                f"Not allowed while {self._state.phase.value} (needs {names})"
            )
        return self._state

    def _set_state(self, state: EditorState) -> None:
        if state.phase != self._state.phase:
            logger.info("Editor: %s -> %s", self._state.phase.value, state.phase.value)
        self._state = state

    # -- session start ------------------------------------------------------

    def start_create(self) -> Editing:
        self._require(Idle)
        state = Editing(draft=from_persisted(), mode=CreateMode())
        self._set_state(state)
        return state

    def start_edit(self, record: NominationRecord) -> Editing:
        """Open a draft on a copy of a persisted record; the record itself is left alone."""
        self._require(Idle)
        if not record.id:
            raise ValueError("Only persisted records (with an id) can be edited")
        state = Editing(draft=from_persisted(record), mode=UpdateMode(record.id))
        self._set_state(state)
        return state

    # -- draft edits (Editing only) ----------------------------------------

    def _editing_draft(self) -> DraftStore:
        return self._require(Editing).draft

    def set_field(self, path: Sequence[int], field: str, value: Any) -> None:
        self._editing_draft().set_field(path, field, value)

    def add_category(self) -> int:
        return self._editing_draft().add_category()

    def remove_category(self, category_index: int) -> None:
        self._editing_draft().remove_category(category_index)

    def add_artist(self, category_index: int) -> int:
        return self._editing_draft().add_artist(category_index)

    def remove_artist(self, category_index: int, artist_index: int) -> None:
        self._editing_draft().remove_artist(category_index, artist_index)

    # -- preview ------------------------------------------------------------

    def request_preview(self) -> PreviewView:
        """Move to Previewing. A draft that cannot be committed stays in Editing with the message set."""
        state = self._require(Editing)
        try:
            preview = assemble(state.draft)
        except ValidationError as e:
            self._set_state(Editing(state.draft, state.mode, message=str(e)))
            raise
        self._set_state(Previewing(state.draft, state.mode, preview))
        return preview

    def cancel_preview(self) -> Editing:
        state = self._require(Previewing)
        editing = Editing(state.draft, state.mode)
        self._set_state(editing)
        return editing

    # -- submission ---------------------------------------------------------

    async def confirm(self) -> Optional[NominationRecord]:
        """Send the previewed draft to the gateway.

        Returns the saved record and leaves the editor Idle with a freshly
        loaded list, or returns None with the editor in the Error state.
        """
        state = self._require(Previewing)
        draft, mode = state.draft, state.mode
        payload = to_persistence_payload(draft)
        self._set_state(Submitting(draft, mode))
        try:
            if isinstance(mode, UpdateMode):
                saved = await self._gateway.update(mode.target_id, payload)
            else:
                saved = await self._gateway.create(payload)
        except GatewayError as e:
            retry_to = Phase.PREVIEWING if isinstance(e, NetworkError) else Phase.EDITING
            logger.warning("Editor: submit failed (%s): %s", type(e).__name__, e.message)
            self._set_state(Failed(e.message, draft, mode, retry_to))
            return None
        except Exception:
            logger.exception("Editor: unexpected error while submitting")
            self._set_state(Failed("Unexpected error while saving", draft, mode, Phase.PREVIEWING))
            raise

        logger.info("Editor: saved nomination %s", saved.id)
        try:
            await self._nominations.refresh()
        except GatewayError:
            # Write succeeded; the list keeps last_error until the next refresh
            pass
        finally:
            self._set_state(Idle())
        return saved

    def retry(self) -> Union[Editing, Previewing]:
        """Leave the Error state, keeping the draft."""
        state = self._require(Failed)
        if state.retry_to == Phase.PREVIEWING:
            preview = assemble(state.draft)
            new_state = Previewing(state.draft, state.mode, preview)
        else:
            new_state = Editing(state.draft, state.mode, message=state.message)
        self._set_state(new_state)
        return new_state

    def cancel(self) -> Idle:
        """Discard the draft. Blocked while a submission is outstanding."""
        if isinstance(self._state, Submitting):
            raise InvalidTransition("Cannot cancel while a submission is in flight")
        self._set_state(Idle())
        return self._state

    # -- rendering ----------------------------------------------------------

    def state_dict(self) -> dict:
        state = self._state
        out = {"phase": state.phase.value}
        if isinstance(state, Idle):
            return out
        out["mode"] = _mode_to_dict(state.mode)
        out["draft"] = _draft_to_dict(state.draft)
        if isinstance(state, Editing):
            out["message"] = state.message
        elif isinstance(state, Previewing):
            out["preview"] = state.preview.to_dict()
        elif isinstance(state, Failed):
            out["message"] = state.message
            out["retry_to"] = state.retry_to.value
        return out
