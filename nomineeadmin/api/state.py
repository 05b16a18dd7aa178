"""Shared application state (injected into routes)."""
import logging
from typing import Optional

from nomineeadmin.config import GATEWAY_TIMEOUT_SEC, GATEWAY_URL
from nomineeadmin.core.editor import NominationEditor
from nomineeadmin.core.gateway import HttpNominationGateway, PersistenceGateway
from nomineeadmin.core.nomination_list import NominationList
from nomineeadmin.core.record_store import JsonNominationGateway

logger = logging.getLogger(__name__)


def build_gateway() -> PersistenceGateway:
    """Remote store when NOMINEE_GATEWAY_URL is set, else the local JSON file."""
    if GATEWAY_URL:
        logger.info("Using remote nominee store at %s", GATEWAY_URL)
        return HttpNominationGateway(GATEWAY_URL, timeout=GATEWAY_TIMEOUT_SEC)
    logger.info("NOMINEE_GATEWAY_URL not set; using local JSON store")
    return JsonNominationGateway()


class AppState:
    def __init__(self, gateway: Optional[PersistenceGateway] = None) -> None:
        self._gateway = gateway
        self._nominations: NominationList | None = None
        self._editor: NominationEditor | None = None

    @property
    def gateway(self) -> PersistenceGateway:
        if self._gateway is None:
            self._gateway = build_gateway()
        return self._gateway

    @property
    def nominations(self) -> NominationList:
        if self._nominations is None:
            self._nominations = NominationList(self.gateway)
        return self._nominations

    @property
    def editor(self) -> NominationEditor:
        if self._editor is None:
            self._editor = NominationEditor(self.gateway, self.nominations)
        return self._editor


_state = AppState()


def get_state() -> AppState:
    return _state
