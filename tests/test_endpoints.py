import base64
import logging

import pytest
from fastapi.testclient import TestClient

from byte_scanner.api.v1.endpoints import get_registry
from byte_scanner.main import app
from byte_scanner.services.scan_engine.registry import SessionRegistry

client = TestClient(app)


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@pytest.fixture(autouse=True)
def fresh_registry():
    registry = SessionRegistry(
        logging.getLogger("test-endpoints"), max_sessions=2, max_write_size=64
    )
    app.dependency_overrides[get_registry] = lambda: registry
    yield registry
    app.dependency_overrides.clear()


def _open() -> str:
    res = client.post("/api/v1/sessions")
    assert res.status_code == 201
    return res.json()["session_id"]


def _read_all(session_id: str, capacity: int | None = None):
    body = {} if capacity is None else {"capacity": capacity}
    tokens, current = [], b""
    while True:
        res = client.post(f"/api/v1/sessions/{session_id}/read", json=body)
        assert res.status_code == 200
        payload = res.json()
        if payload["outcome"] == "chunk":
            current += base64.b64decode(payload["data"])
        elif payload["outcome"] == "token_boundary":
            tokens.append(current)
            current = b""
        else:
            return tokens


def test_root():
    res = client.get("/")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_default_separators():
    session_id = _open()
    res = client.post(
        f"/api/v1/sessions/{session_id}/write",
        json={"data": _b64(b"hello:world\tthis is \na test")},
    )
    assert res.status_code == 200
    assert res.json() == {"written": 27}
    assert _read_all(session_id) == [b"hello", b"world", b"this", b"is", b"a", b"test"]


def test_control_then_write_sets_separators():
    session_id = _open()
    res = client.post(f"/api/v1/sessions/{session_id}/control", json={"request": 0})
    assert res.status_code == 200
    state = res.json()
    assert state["awaiting_separator_write"] is True
    assert state["separators"] == ""

    client.post(f"/api/v1/sessions/{session_id}/write", json={"data": _b64(b"-,")})
    client.post(
        f"/api/v1/sessions/{session_id}/write",
        json={"data": _b64(b"hello-world,miguel-carrasco")},
    )
    state = client.get(f"/api/v1/sessions/{session_id}").json()
    assert state["awaiting_separator_write"] is False
    assert base64.b64decode(state["separators"]) == b"-,"
    assert state["buffer_length"] == 27
    assert _read_all(session_id) == [b"hello", b"world", b"miguel", b"carrasco"]


def test_chunked_read_reports_each_outcome():
    session_id = _open()
    client.post(f"/api/v1/sessions/{session_id}/write", json={"data": _b64(b"verylongtoken:short")})
    outcomes = []
    for _ in range(9):
        payload = client.post(
            f"/api/v1/sessions/{session_id}/read", json={"capacity": 4}
        ).json()
        outcomes.append((payload["outcome"], base64.b64decode(payload["data"])))
    assert outcomes == [
        ("chunk", b"very"),
        ("chunk", b"long"),
        ("chunk", b"toke"),
        ("chunk", b"n"),
        ("token_boundary", b""),
        ("chunk", b"shor"),
        ("chunk", b"t"),
        ("token_boundary", b""),
        ("no_more_data", b""),
    ]


def test_read_without_body_uses_default_capacity():
    session_id = _open()
    client.post(f"/api/v1/sessions/{session_id}/write", json={"data": _b64(b"abc")})
    res = client.post(f"/api/v1/sessions/{session_id}/read")
    assert res.status_code == 200
    assert res.json() == {"outcome": "chunk", "data": _b64(b"abc"), "length": 3, "progress": True}


def test_zero_capacity_read_is_flagged_without_progress():
    session_id = _open()
    client.post(f"/api/v1/sessions/{session_id}/write", json={"data": _b64(b"abc")})
    res = client.post(f"/api/v1/sessions/{session_id}/read", json={"capacity": 0})
    assert res.json() == {"outcome": "chunk", "data": "", "length": 0, "progress": False}


def test_read_before_any_write_has_no_data():
    session_id = _open()
    res = client.post(f"/api/v1/sessions/{session_id}/read", json={"capacity": 8})
    assert res.json()["outcome"] == "no_more_data"
    assert client.get(f"/api/v1/sessions/{session_id}").json()["buffer_length"] is None


def test_nul_bytes_round_trip_through_api():
    session_id = _open()
    client.post(f"/api/v1/sessions/{session_id}/control", json={})
    client.post(f"/api/v1/sessions/{session_id}/write", json={"data": _b64(b"\0:")})
    client.post(
        f"/api/v1/sessions/{session_id}/write",
        json={"data": _b64(b"he\0llo\0world:this:is:a:test")},
    )
    assert _read_all(session_id, 3) == [b"he", b"llo", b"world", b"this", b"is", b"a", b"test"]


def test_invalid_control_request_is_400():
    session_id = _open()
    res = client.post(f"/api/v1/sessions/{session_id}/control", json={"request": 5})
    assert res.status_code == 400
    state = client.get(f"/api/v1/sessions/{session_id}").json()
    assert state["awaiting_separator_write"] is False


def test_invalid_base64_is_422():
    session_id = _open()
    res = client.post(f"/api/v1/sessions/{session_id}/write", json={"data": "not base64!"})
    assert res.status_code == 422


def test_negative_capacity_is_422():
    session_id = _open()
    res = client.post(f"/api/v1/sessions/{session_id}/read", json={"capacity": -1})
    assert res.status_code == 422


def test_oversized_write_is_507():
    session_id = _open()
    res = client.post(f"/api/v1/sessions/{session_id}/write", json={"data": _b64(b"x" * 65)})
    assert res.status_code == 507


def test_session_limit_is_507():
    _open()
    _open()
    res = client.post("/api/v1/sessions")
    assert res.status_code == 507


def test_close_session_then_404():
    session_id = _open()
    res = client.delete(f"/api/v1/sessions/{session_id}")
    assert res.status_code == 204
    assert client.post(f"/api/v1/sessions/{session_id}/read", json={}).status_code == 404
    assert client.delete(f"/api/v1/sessions/{session_id}").status_code == 404


def test_sessions_are_isolated():
    one, two = _open(), _open()
    client.post(f"/api/v1/sessions/{one}/control", json={"request": 0})
    client.post(f"/api/v1/sessions/{one}/write", json={"data": _b64(b"-,")})
    client.post(f"/api/v1/sessions/{one}/write", json={"data": _b64(b"hello-world,miguel-carrasco")})
    client.post(f"/api/v1/sessions/{two}/write", json={"data": _b64(b"hola:mundo hehe")})
    assert _read_all(two) == [b"hola", b"mundo", b"hehe"]
    assert _read_all(one) == [b"hello", b"world", b"miguel", b"carrasco"]
