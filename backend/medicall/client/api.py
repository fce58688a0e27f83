import logging
from typing import Optional

import httpx

from medicall.config.settings import ClientSettings
from medicall.schemas.doctor import Doctor
from medicall.schemas.procedure import Procedure

logger = logging.getLogger(__name__)


class SyncApiClient:
    """
    Thin async wrapper over the sync REST endpoints.

    Methods return the raw ``httpx.Response``; callers decide what a non-2xx
    status means. Network failures surface as ``httpx.HTTPError``.
    """

    def __init__(self, base_url: str, timeout: float = 10.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "SyncApiClient":
        return cls(settings.api_url, timeout=settings.request_timeout)

    async def list_doctors(self) -> httpx.Response:
        return await self._client.get("/doctors")

    async def save_doctor(self, doctor: Doctor) -> httpx.Response:
        logger.debug(f"POST doctor {doctor.id}")
        return await self._client.post("/doctors", json=doctor.to_wire())

    async def delete_doctor(self, doctor_id: str) -> httpx.Response:
        return await self._client.delete(f"/doctors/{doctor_id}")

    async def delete_visit(self, doctor_id: str, visit_id: str) -> httpx.Response:
        return await self._client.delete(f"/doctors/{doctor_id}/visits/{visit_id}")

    async def list_procedures(self) -> httpx.Response:
        return await self._client.get("/procedures")

    async def save_procedure(self, procedure: Procedure) -> httpx.Response:
        logger.debug(f"POST procedure {procedure.id}")
        return await self._client.post("/procedures", json=procedure.to_wire())

    async def delete_procedure(self, procedure_id: str) -> httpx.Response:
        return await self._client.delete(f"/procedures/{procedure_id}")

    async def aclose(self) -> None:
        await self._client.aclose()
