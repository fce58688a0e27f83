"""
Client reconciliation controller.

Owns the in-memory doctors/procedures/time-off collections of one client
session and is the only thing that mutates them. It

* loads the local cache, then the server, falling back to the cache when the
  server cannot be reached at all;
* applies every user mutation locally first, persists it to the cache and
  then fires the matching write at the server, but only while online
  (offline writes are not queued, the next successful fetch overwrites them);
* merges change events pushed over the live channel into the same state.

UI code reads the public attributes and registers a listener with
:meth:`subscribe` to be told when they change.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Optional, Set

import httpx
from pydantic import TypeAdapter, ValidationError

from medicall.client.api import SyncApiClient
from medicall.client.cache import ClientCache
from medicall.client.live_channel import LiveChannel
from medicall.config.constants import ConnectionStatus, EventName, StorageKey
from medicall.config.settings import ClientSettings
from medicall.data.default_doctors import default_doctors
from medicall.schemas.doctor import Doctor
from medicall.schemas.procedure import Procedure
from medicall.schemas.shared import CamelModel, TimeOffEvent, User

logger = logging.getLogger(__name__)

ChannelFactory = Callable[["ReconciliationController"], LiveChannel]


class BackendUnreachable(Exception):
    """Neither list endpoint produced any response."""


class BackupBundle(CamelModel):
    doctors: Optional[List[Doctor]] = None
    procedures: Optional[List[Procedure]] = None
    time_off: Optional[List[TimeOffEvent]] = None


class ReconciliationController:
    def __init__(
        self,
        api: SyncApiClient,
        cache: ClientCache,
        settings: Optional[ClientSettings] = None,
        channel_factory: Optional[ChannelFactory] = None,
        default_dataset: Callable[[], List[Doctor]] = default_doctors,
    ):
        self.api = api
        self.cache = cache
        self.settings = settings or ClientSettings()
        self._channel_factory = channel_factory or _websocket_channel
        self._default_dataset = default_dataset

        self.user: Optional[User] = None
        self.doctors: List[Doctor] = []
        self.procedures: List[Procedure] = []
        self.time_off: List[TimeOffEvent] = []

        self.loading = True
        self.is_syncing = False
        self.is_online = True
        self.socket_connected = False
        self.sidebar_collapsed = cache.get(StorageKey.SIDEBAR) == "true"

        self._channel: Optional[LiveChannel] = None
        self._pending: Set[asyncio.Task] = set()
        self._listeners: List[Callable[[], None]] = []

    # ------------------------------------------------------------------ state
    @property
    def status(self) -> ConnectionStatus:
        if self.loading:
            return ConnectionStatus.LOADING
        if not self.is_online:
            return ConnectionStatus.OFFLINE
        if self.user is not None and not self.socket_connected:
            return ConnectionStatus.SYNCING
        return ConnectionStatus.ONLINE

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # -------------------------------------------------------------- lifecycle
    async def start(self) -> None:
        """Restore the session, show cached data, then refresh from the server."""
        self.user = self.cache.load_model(StorageKey.USER, User)
        self.load_from_cache()
        await self.fetch_data()
        if self.user is not None:
            self.attach_realtime()

    async def close(self) -> None:
        await self.detach_realtime()
        await self.wait_pending()
        await self.api.aclose()

    def load_from_cache(self) -> None:
        """Adopt cached collections; a corrupt entry is skipped, not fatal."""
        doctors = self.cache.load_models(StorageKey.DOCTORS, Doctor)
        if doctors is not None:
            self.doctors = doctors
        procedures = self.cache.load_models(StorageKey.PROCEDURES, Procedure)
        if procedures is not None:
            self.procedures = procedures
        self._reload_time_off()
        self._notify()

    def _reload_time_off(self) -> None:
        time_off = self.cache.load_models(StorageKey.TIMEOFF, TimeOffEvent)
        if time_off is not None:
            self.time_off = time_off

    async def fetch_data(self, background: bool = False) -> None:
        """
        Pull doctors and procedures concurrently and make them the local truth.

        Each request stands alone: one failing does not discard the other. Only
        when neither gets any response does the controller go offline and fall
        back to the cache. An empty doctor list seeds the server with the
        default dataset.
        """
        if background:
            self.is_syncing = True
        else:
            self.loading = True
        self._notify()

        try:
            doc_res, proc_res = await asyncio.gather(
                self._reach(self.api.list_doctors()),
                self._reach(self.api.list_procedures()),
            )
            has_data = False

            doctors = self._decode(doc_res, List[Doctor])
            if doctors is not None:
                if not doctors:
                    logger.info("Server has no doctors, seeding the default dataset")
                    doctors = self._default_dataset()
                    for doctor in doctors:
                        self._dispatch(self.api.save_doctor(doctor))
                self.doctors = doctors
                self.cache.save_models(StorageKey.DOCTORS, doctors)
                has_data = True

            procedures = self._decode(proc_res, List[Procedure])
            if procedures is not None:
                self.procedures = procedures
                self.cache.save_models(StorageKey.PROCEDURES, procedures)
                has_data = True

            # time-off never leaves the client
            self._reload_time_off()

            if has_data:
                self.is_online = True
            elif doc_res is None and proc_res is None:
                raise BackendUnreachable("No response from backend")
        except BackendUnreachable as e:
            logger.warning(f"Backend not reachable, offline mode active ({e})")
            self.is_online = False
            self.load_from_cache()
        finally:
            self.loading = False
            self.is_syncing = False
            self._notify()

    async def _reach(self, request: Awaitable[httpx.Response]) -> Optional[httpx.Response]:
        try:
            return await request
        except httpx.HTTPError as e:
            logger.debug(f"Request failed: {type(e).__name__} - {e}")
            return None

    def _decode(self, res: Optional[httpx.Response], shape: Any) -> Optional[list]:
        """Validated body of an OK response; None when missing, not OK or undecodable."""
        if res is None or not res.is_success:
            return None
        try:
            return TypeAdapter(shape).validate_python(res.json())
        except ValueError as e:
            # a reachable server with a bad body counts as a failed response, not as offline
            logger.warning(f"Ignoring unreadable response from {res.request.url.path}: {e}")
            return None

    # --------------------------------------------------------------- session
    async def login(self, user: User) -> None:
        self.user = user
        self.cache.save_model(StorageKey.USER, user)
        await self.fetch_data()
        self.attach_realtime()

    async def logout(self) -> None:
        self.user = None
        self.cache.remove(StorageKey.USER)
        await self.detach_realtime()
        self._notify()

    def toggle_sidebar(self) -> bool:
        self.sidebar_collapsed = not self.sidebar_collapsed
        self.cache.set(StorageKey.SIDEBAR, "true" if self.sidebar_collapsed else "false")
        self._notify()
        return self.sidebar_collapsed

    # -------------------------------------------------------------- realtime
    def attach_realtime(self) -> None:
        """Open the live channel; only meaningful once a session exists."""
        if self.user is None or self._channel is not None:
            return
        self._channel = self._channel_factory(self)
        self._channel.start()

    async def detach_realtime(self) -> None:
        channel, self._channel = self._channel, None
        if channel is not None:
            await channel.stop()
        self.socket_connected = False

    def on_socket_connect(self) -> None:
        self.socket_connected = True
        self.is_online = True
        self._notify()

    def on_socket_disconnect(self) -> None:
        self.socket_connected = False
        self._notify()

    def on_socket_error(self, error: Exception) -> None:
        self.socket_connected = False
        self._notify()

    def handle_event(self, event: str, data: Any) -> None:
        """Merge one broadcast event into local state and the cache."""
        try:
            if event == EventName.DOCTOR_UPDATED.value:
                self.merge_doctor(Doctor.model_validate(data))
            elif event == EventName.DOCTOR_DELETED.value:
                self.forget_doctor(str(data))
            elif event == EventName.PROCEDURE_UPDATED.value:
                self.merge_procedure(Procedure.model_validate(data))
            elif event == EventName.PROCEDURE_DELETED.value:
                self.forget_procedure(str(data))
            else:
                logger.debug(f"Ignoring unknown event {event!r}")
        except ValidationError as e:
            logger.warning(f"Ignoring malformed {event} payload: {e.error_count()} error(s)")

    def merge_doctor(self, doctor: Doctor) -> None:
        """Replace in place when known, otherwise put it at the top of the list."""
        logger.info(f"Received doctor update: {doctor.name}")
        if any(d.id == doctor.id for d in self.doctors):
            self.doctors = [doctor if d.id == doctor.id else d for d in self.doctors]
        else:
            self.doctors = [doctor, *self.doctors]
        self._persist_doctors()

    def forget_doctor(self, doctor_id: str) -> None:
        self.doctors = [d for d in self.doctors if d.id != doctor_id]
        self._persist_doctors()

    def merge_procedure(self, procedure: Procedure) -> None:
        """Replace in place when known, otherwise append (doctors prepend)."""
        if any(p.id == procedure.id for p in self.procedures):
            self.procedures = [procedure if p.id == procedure.id else p for p in self.procedures]
        else:
            self.procedures = [*self.procedures, procedure]
        self._persist_procedures()

    def forget_procedure(self, procedure_id: str) -> None:
        self.procedures = [p for p in self.procedures if p.id != procedure_id]
        self._persist_procedures()

    # ------------------------------------------------------------- mutations
    def add_doctor(self, doctor: Doctor) -> None:
        self.doctors = [doctor, *self.doctors]
        self._persist_doctors()
        self._push(self.api.save_doctor, doctor)

    def update_doctor(self, doctor: Doctor) -> None:
        self.doctors = [doctor if d.id == doctor.id else d for d in self.doctors]
        self._persist_doctors()
        self._push(self.api.save_doctor, doctor)

    def delete_doctor(self, doctor_id: str) -> None:
        self.forget_doctor(doctor_id)
        self._push(self.api.delete_doctor, doctor_id)

    def delete_visit(self, doctor_id: str, visit_id: str) -> None:
        self.doctors = [
            d.model_copy(update={"visits": [v for v in d.visits if v.id != visit_id]})
            if d.id == doctor_id else d
            for d in self.doctors
        ]
        self._persist_doctors()
        self._push(self.api.delete_visit, doctor_id, visit_id)

    def add_procedure(self, procedure: Procedure) -> None:
        self.procedures = [*self.procedures, procedure]
        self._persist_procedures()
        self._push(self.api.save_procedure, procedure)

    def update_procedure(self, procedure: Procedure) -> None:
        self.procedures = [procedure if p.id == procedure.id else p for p in self.procedures]
        self._persist_procedures()
        self._push(self.api.save_procedure, procedure)

    def delete_procedure(self, procedure_id: str) -> None:
        self.forget_procedure(procedure_id)
        self._push(self.api.delete_procedure, procedure_id)

    def add_time_off(self, event: TimeOffEvent) -> None:
        self.time_off = [*self.time_off, event]
        self._persist_time_off()

    def delete_time_off(self, event_id: str) -> None:
        self.time_off = [t for t in self.time_off if t.id != event_id]
        self._persist_time_off()

    def import_backup(self, bundle: BackupBundle) -> None:
        """
        Replace whole collections from a backup and push every record back,
        one request each, with no guarantee across the set.
        """
        if bundle.doctors is not None:
            self.doctors = list(bundle.doctors)
            self._persist_doctors()
            for doctor in self.doctors:
                self._push(self.api.save_doctor, doctor)
        if bundle.procedures is not None:
            self.procedures = list(bundle.procedures)
            self._persist_procedures()
            for procedure in self.procedures:
                self._push(self.api.save_procedure, procedure)
        if bundle.time_off is not None:
            self.time_off = list(bundle.time_off)
            self._persist_time_off()
        logger.info("Backup restored")

    # ------------------------------------------------------------- plumbing
    def _persist_doctors(self) -> None:
        self.cache.save_models(StorageKey.DOCTORS, self.doctors)
        self._notify()

    def _persist_procedures(self) -> None:
        self.cache.save_models(StorageKey.PROCEDURES, self.procedures)
        self._notify()

    def _persist_time_off(self) -> None:
        self.cache.save_models(StorageKey.TIMEOFF, self.time_off)
        self._notify()

    def _push(self, call: Callable[..., Awaitable[httpx.Response]], *args: Any) -> None:
        # offline writes are dropped, not queued
        if not self.is_online:
            logger.debug(f"Offline, skipping {call.__name__}{args}")
            return
        self._dispatch(call(*args))

    def _dispatch(self, request: Awaitable[httpx.Response]) -> None:
        task = asyncio.create_task(self._fire_and_forget(request))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _fire_and_forget(self, request: Awaitable[httpx.Response]) -> None:
        try:
            await request
        except httpx.HTTPError as e:
            logger.debug(f"Background write failed: {type(e).__name__} - {e}")

    async def wait_pending(self) -> None:
        """Wait for every background write started so far."""
        while self._pending:
            await asyncio.gather(*list(self._pending))


def _websocket_channel(controller: ReconciliationController) -> LiveChannel:
    cfg = controller.settings
    return LiveChannel(
        cfg.socket_url,
        on_event=controller.handle_event,
        on_connect=controller.on_socket_connect,
        on_disconnect=controller.on_socket_disconnect,
        on_error=controller.on_socket_error,
        reconnection_attempts=cfg.reconnection_attempts,
        reconnection_delay=cfg.reconnection_delay,
        timeout=cfg.timeout,
    )
