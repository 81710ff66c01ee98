from fastapi.testclient import TestClient
from backend.app import app


client = TestClient(app)


def _new(**body):
    r = client.post("/new-game", json=body)
    assert r.status_code == 200
    return r.json()


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("ok") is True


def test_new_linear_game_and_anchor_click():
    data = _new(kind="linear", seed=3)
    sid = data["sessionId"]
    state = data["state"]
    assert state["schemaVersion"] == 1
    assert len(state["board"]["cells"]) == 52
    assert state["status"] in ("in_progress", "lost")

    r = client.post("/activate", json={"sessionId": sid, "position": 0})
    assert r.status_code == 200
    assert r.json()["result"] == "ignored"


def test_grid_select_and_state_endpoint():
    data = _new(kind="grid", gridSize=6, suitorRule=True, seed=8)
    sid = data["sessionId"]
    assert data["state"]["config"]["gridSize"] == 6

    r = client.post("/activate", json={"sessionId": sid, "position": [0, 1]})
    assert r.status_code == 200
    body = r.json()
    assert body["result"] == "selected"
    assert body["positions"] == [[0, 1]]

    r2 = client.get(f"/state/{sid}")
    assert r2.status_code == 200
    assert r2.json()["state"]["selection"]["position"] == [0, 1]


def test_pyramid_draw_and_hint():
    sid = _new(kind="pyramid", seed=4)["sessionId"]
    r = client.post("/draw", json={"sessionId": sid})
    assert r.status_code == 200
    assert r.json()["result"] == "drew"
    assert r.json()["state"]["stockCount"] == 23

    h = client.get(f"/hint/{sid}")
    assert h.status_code == 200
    assert h.json()["kind"] in ("pair", "single", "draw")


def test_auto_play_endpoint():
    sid = _new(kind="grid", seed=12)["sessionId"]
    r = client.post("/auto-play", json={"sessionId": sid, "maxSteps": 10})
    assert r.status_code == 200
    body = r.json()
    assert 0 <= body["steps"] <= 10
    assert body["state"]["moves"] == body["steps"]


def test_unknown_session_is_404():
    r = client.post("/activate", json={"sessionId": "nope", "position": 1})
    assert r.status_code == 404
    assert client.get("/state/nope").status_code == 404


def test_bad_position_is_400():
    sid = _new(kind="linear", seed=3)["sessionId"]
    r = client.post("/activate", json={"sessionId": sid, "position": "somewhere"})
    assert r.status_code == 400
    r = client.post("/activate", json={"sessionId": sid, "position": [1, 2, 3]})
    assert r.status_code == 400


def test_bad_grid_size_is_422():
    r = client.post("/new-game", json={"kind": "grid", "gridSize": 7})
    assert r.status_code == 422
