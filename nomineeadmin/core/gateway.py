"""Persistence gateway contract and the HTTP client for the remote nominee store."""
import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from nomineeadmin.core.reconciler import record_from_dict
from nomineeadmin.models.nomination import NominationRecord

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base for every failure reported by a persistence gateway."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NetworkError(GatewayError):
    """Transport failure or unusable server response; the payload may be fine."""


class ServerValidationError(GatewayError):
    """Store rejected the payload."""


class NotFound(GatewayError):
    """Record id is unknown to the store (stale list)."""

    def __init__(self, record_id: str) -> None:
        super().__init__(f"Nomination {record_id} not found")
        self.record_id = record_id


class PersistenceGateway(Protocol):
    async def list(self) -> List[NominationRecord]: ...

    async def create(self, payload: Dict[str, Any]) -> NominationRecord: ...

    async def update(self, record_id: str, payload: Dict[str, Any]) -> NominationRecord: ...

    async def delete(self, record_id: str) -> None: ...

    async def aclose(self) -> None: ...


def _error_message(response: httpx.Response) -> str:
    """Best human-readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    text = response.text.strip()
    return text or f"Request rejected ({response.status_code})"


class HttpNominationGateway:
    """Nominee store behind a REST endpoint (GET/POST on the base, PUT/DELETE on /{id})."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            timeout=timeout,
            transport=transport,
        )

    async def _request(
        self, method: str, url: str, record_id: Optional[str] = None, **kwargs
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.warning("Gateway %s %s failed: %s", method, url, e)
            raise NetworkError(str(e) or e.__class__.__name__) from e
        if response.status_code == 404 and record_id is not None:
            raise NotFound(record_id)
        if response.status_code in (400, 409, 422):
            raise ServerValidationError(_error_message(response))
        if response.is_error:
            logger.warning("Gateway %s %s returned %s", method, url, response.status_code)
            raise NetworkError(f"Server error ({response.status_code})")
        return response

    def _parse_record(self, response: httpx.Response) -> NominationRecord:
        try:
            return record_from_dict(response.json())
        except ValueError as e:
            raise NetworkError(f"Malformed nomination in response: {e}") from e

    async def list(self) -> List[NominationRecord]:
        response = await self._request("GET", "")
        try:
            data = response.json()
        except ValueError as e:
            raise NetworkError("Response is not JSON") from e
        if not isinstance(data, list):
            raise NetworkError("Expected a list of nominations")
        try:
            return [record_from_dict(item) for item in data]
        except ValueError as e:
            raise NetworkError(f"Malformed nomination in response: {e}") from e

    async def create(self, payload: Dict[str, Any]) -> NominationRecord:
        response = await self._request("POST", "", json=payload)
        return self._parse_record(response)

    async def update(self, record_id: str, payload: Dict[str, Any]) -> NominationRecord:
        response = await self._request("PUT", record_id, record_id=record_id, json=payload)
        return self._parse_record(response)

    async def delete(self, record_id: str) -> None:
        await self._request("DELETE", record_id, record_id=record_id)

    async def aclose(self) -> None:
        await self._client.aclose()
