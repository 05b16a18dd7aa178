"""Persisted nomination list shown by the console; replaced wholesale, never patched."""
import logging
from typing import Optional, Tuple

from nomineeadmin.core.gateway import GatewayError, PersistenceGateway
from nomineeadmin.models.nomination import NominationRecord

logger = logging.getLogger(__name__)


class DeletionNotConfirmed(Exception):
    """Delete was requested without the user's explicit confirmation."""


class NominationList:
    def __init__(self, gateway: PersistenceGateway) -> None:
        self._gateway = gateway
        self._records: Tuple[NominationRecord, ...] = ()
        self.last_error: Optional[str] = None

    @property
    def records(self) -> Tuple[NominationRecord, ...]:
        return self._records

    def get(self, record_id: str) -> Optional[NominationRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    async def refresh(self) -> Tuple[NominationRecord, ...]:
        """Reload from the gateway. On failure the current list is kept and the error re-raised."""
        try:
            records = await self._gateway.list()
        except GatewayError as e:
            self.last_error = e.message
            logger.warning("Nomination list refresh failed: %s", e.message)
            raise
        self._records = tuple(records)
        self.last_error = None
        logger.info("Nomination list refreshed (%d records)", len(self._records))
        return self._records

    async def delete(self, record_id: str, confirmed: bool = False) -> None:
        """Delete a persisted record after explicit confirmation, then reload."""
        if not confirmed:
            raise DeletionNotConfirmed(f"Deleting {record_id} needs confirmation")
        try:
            await self._gateway.delete(record_id)
        except GatewayError as e:
            self.last_error = e.message
            logger.warning("Delete of %s failed: %s", record_id, e.message)
            raise
        logger.info("Deleted nomination %s", record_id)
        try:
            await self.refresh()
        except GatewayError:
            # Delete went through; last_error marks the list as stale
            pass
