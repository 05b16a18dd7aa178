"""Persisted nomination list: browse, view detail, delete."""
from fastapi import APIRouter, Depends, HTTPException

from nomineeadmin.api.state import AppState, get_state
from nomineeadmin.core.gateway import GatewayError, NotFound
from nomineeadmin.core.nomination_list import DeletionNotConfirmed
from nomineeadmin.core.reconciler import record_to_dict
from nomineeadmin.models.nomination import summarize

router = APIRouter()


def gateway_http_error(e: GatewayError) -> HTTPException:
    """Map a gateway failure to the response the console shows verbatim."""
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail=e.message)
    return HTTPException(status_code=502, detail=e.message)


@router.get("/")
async def list_nominations(
    refresh: bool = False,
    state: AppState = Depends(get_state),
):
    """List nomination cards (round, stage, status, artist count per category)."""
    if refresh:
        try:
            await state.nominations.refresh()
        except GatewayError as e:
            raise gateway_http_error(e)
    return {
        "nominations": [summarize(r) for r in state.nominations.records],
        "error": state.nominations.last_error,
    }


@router.get("/{record_id}")
def get_nomination(
    record_id: str,
    state: AppState = Depends(get_state),
):
    """Full record with every category and artist."""
    record = state.nominations.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Nomination not found")
    return record_to_dict(record)


@router.delete("/{record_id}", status_code=204)
async def delete_nomination(
    record_id: str,
    confirm: bool = False,
    state: AppState = Depends(get_state),
):
    """Delete a nomination. Requires ?confirm=true."""
    try:
        await state.nominations.delete(record_id, confirmed=confirm)
    except DeletionNotConfirmed as e:
        raise HTTPException(status_code=400, detail=str(e))
    except GatewayError as e:
        raise gateway_http_error(e)
