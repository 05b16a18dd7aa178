"""Nomination editor session: create/edit a draft, preview, confirm."""
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from nomineeadmin.api.state import AppState, get_state
from nomineeadmin.core.editor import InvalidTransition
from nomineeadmin.core.preview import ValidationError

router = APIRouter()


class SetFieldBody(BaseModel):
    path: List[int] = []
    field: str
    value: Optional[Any] = None


def _run(action, *args):
    """Apply an editor action, translating domain errors into HTTP errors."""
    try:
        return action(*args)
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/")
async def get_editor(state: AppState = Depends(get_state)):
    """Current editor state, including the draft and any message."""
    return state.editor.state_dict()


@router.post("/create")
async def start_create(state: AppState = Depends(get_state)):
    editor = state.editor
    _run(editor.start_create)
    return editor.state_dict()


@router.post("/edit/{record_id}")
async def start_edit(record_id: str, state: AppState = Depends(get_state)):
    """Open a draft on a persisted record from the current list."""
    record = state.nominations.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Nomination not found")
    editor = state.editor
    _run(editor.start_edit, record)
    return editor.state_dict()


@router.patch("/draft")
async def set_field(body: SetFieldBody, state: AppState = Depends(get_state)):
    """Set round/stage/status (path []), a category name ([ci]) or an artist field ([ci, ai])."""
    editor = state.editor
    _run(editor.set_field, body.path, body.field, body.value)
    return editor.state_dict()


@router.post("/categories")
async def add_category(state: AppState = Depends(get_state)):
    editor = state.editor
    _run(editor.add_category)
    return editor.state_dict()


@router.delete("/categories/{category_index}")
async def remove_category(category_index: int, state: AppState = Depends(get_state)):
    editor = state.editor
    _run(editor.remove_category, category_index)
    return editor.state_dict()


@router.post("/categories/{category_index}/artists")
async def add_artist(category_index: int, state: AppState = Depends(get_state)):
    editor = state.editor
    _run(editor.add_artist, category_index)
    return editor.state_dict()


@router.delete("/categories/{category_index}/artists/{artist_index}")
async def remove_artist(
    category_index: int,
    artist_index: int,
    state: AppState = Depends(get_state),
):
    editor = state.editor
    _run(editor.remove_artist, category_index, artist_index)
    return editor.state_dict()


@router.post("/preview")
async def request_preview(state: AppState = Depends(get_state)):
    """Validate the draft and switch to preview. 422 lists what blocks the commit."""
    editor = state.editor
    try:
        _run(editor.request_preview)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.problems)
    return editor.state_dict()


@router.post("/preview/cancel")
async def cancel_preview(state: AppState = Depends(get_state)):
    editor = state.editor
    _run(editor.cancel_preview)
    return editor.state_dict()


@router.post("/confirm")
async def confirm(state: AppState = Depends(get_state)):
    """Submit the previewed draft. On failure the response carries phase "error" and the message."""
    editor = state.editor
    try:
        await editor.confirm()
    except InvalidTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    return editor.state_dict()


@router.post("/retry")
async def retry(state: AppState = Depends(get_state)):
    editor = state.editor
    _run(editor.retry)
    return editor.state_dict()


@router.post("/cancel")
async def cancel(state: AppState = Depends(get_state)):
    """Discard the draft (not allowed while a submission is in flight)."""
    editor = state.editor
    _run(editor.cancel)
    return editor.state_dict()
