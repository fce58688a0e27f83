# tests/test_broadcast.py
import pytest

from medicall.config.constants import EventName
from medicall.core.websocket_manager import ConnectionManager
from tests._factories import doctor_payload, visit_payload


class FakeSocket:
    def __init__(self, fail=False):
        self.fail = fail
        self.accepted = False
        self.sent = []

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


@pytest.mark.asyncio
async def test_broadcast_reaches_every_connection():
    manager = ConnectionManager()
    first, second = FakeSocket(), FakeSocket()
    await manager.connect(first)
    await manager.connect(second)

    await manager.broadcast(EventName.DOCTOR_DELETED, "d1")

    expected = {"event": "server:doctor_deleted", "data": "d1"}
    assert first.accepted and second.accepted
    assert first.sent == [expected]
    assert second.sent == [expected]


@pytest.mark.asyncio
async def test_failed_send_drops_only_that_connection():
    manager = ConnectionManager()
    healthy, dead = FakeSocket(), FakeSocket(fail=True)
    await manager.connect(healthy)
    await manager.connect(dead)

    await manager.broadcast(EventName.PROCEDURE_DELETED, "p1")

    assert manager.get_connection_count() == 1
    assert healthy.sent == [{"event": "server:procedure_deleted", "data": "p1"}]


@pytest.mark.asyncio
async def test_broadcast_with_no_listeners_is_a_no_op():
    manager = ConnectionManager()
    await manager.broadcast(EventName.DOCTOR_UPDATED, {"id": "d1"})
    assert manager.get_connection_count() == 0


def test_writer_receives_its_own_update(ws_client):
    with ws_client.websocket_connect("/ws") as ws:
        res = ws_client.post("/api/doctors", json=doctor_payload(visits=[visit_payload("v1")]))
        assert res.status_code == 200

        message = ws.receive_json()
        assert message["event"] == "server:doctor_updated"
        assert message["data"]["id"] == "d1"
        assert [v["id"] for v in message["data"]["visits"]] == ["v1"]


def test_all_clients_receive_each_event(ws_client):
    with ws_client.websocket_connect("/ws") as a, ws_client.websocket_connect("/ws") as b:
        ws_client.post("/api/procedures", json={"id": "p1", "procedureType": "Artroscopia"})
        for ws in (a, b):
            message = ws.receive_json()
            assert message == {
                "event": "server:procedure_updated",
                "data": {
                    "id": "p1", "date": None, "time": None, "hospital": None,
                    "doctorId": None, "doctorName": None, "procedureType": "Artroscopia",
                    "paymentType": None, "cost": None, "commission": None,
                    "technician": None, "notes": None, "status": None,
                },
            }


def test_delete_events_carry_the_bare_id(ws_client):
    ws_client.post("/api/doctors", json=doctor_payload())
    ws_client.post("/api/procedures", json={"id": "p1"})

    with ws_client.websocket_connect("/ws") as ws:
        ws_client.delete("/api/doctors/d1")
        assert ws.receive_json() == {"event": "server:doctor_deleted", "data": "d1"}

        ws_client.delete("/api/procedures/p1")
        assert ws.receive_json() == {"event": "server:procedure_deleted", "data": "p1"}


def test_visit_delete_publishes_whole_doctor(ws_client):
    ws_client.post("/api/doctors", json=doctor_payload(visits=[visit_payload("v1"), visit_payload("v2")]))

    with ws_client.websocket_connect("/ws") as ws:
        res = ws_client.delete("/api/doctors/d1/visits/v1")
        assert res.status_code == 200

        message = ws.receive_json()
        assert message["event"] == "server:doctor_updated"
        assert [v["id"] for v in message["data"]["visits"]] == ["v2"]


def test_unknown_doctor_delete_publishes_nothing(ws_client):
    with ws_client.websocket_connect("/ws") as ws:
        res = ws_client.delete("/api/doctors/ghost")
        assert res.status_code == 404

        # next event on the wire must be the one for this write, not a stale delete
        ws_client.post("/api/doctors", json=doctor_payload("d2"))
        assert ws.receive_json()["event"] == "server:doctor_updated"
