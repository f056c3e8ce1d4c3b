import pytest
from keysearch.engine import Engine
import keysearch_web.web as webmod
from keysearch_web.web import app as flask_app


@pytest.fixture
def client(monkeypatch):
    eng = Engine()
    eng.build(pairs=[("ciao", 1), ("hola", 2), ("hello", 3)])
    monkeypatch.setattr(webmod, "_engine", eng)
    yield flask_app.test_client()
    eng.shutdown()


@pytest.mark.e2e
def test_search_api_json(client):
    rv = client.get("/api/search?q=c&k=2")
    assert rv.status_code == 200
    data = rv.get_json()
    assert isinstance(data, list) and data
    first = data[0]
    for key in ("key", "value", "score"):
        assert key in first
    assert first["key"] == "ciao"
    assert len(data) <= 2


@pytest.mark.e2e
def test_search_empty_query(client):
    rv = client.get("/api/search?q=")
    assert rv.status_code == 200
    assert rv.get_json() == []


@pytest.mark.e2e
def test_search_bad_k_is_400(client):
    rv = client.get("/api/search?q=c&k=0")
    assert rv.status_code == 400
    assert "error" in rv.get_json()


@pytest.mark.e2e
def test_score_api(client):
    data = client.get("/api/score?a=bella%20ciao&b=ciao%20bella").get_json()
    assert data["a"] == "bella ciao"
    assert data["score"] == pytest.approx(0.7)


@pytest.mark.e2e
def test_insert_and_delete_keys(client):
    rv = client.post("/api/keys", json={"key": "salut", "value": 4})
    assert rv.status_code == 201
    assert rv.get_json()["keys"] == 4
    assert client.get("/api/search?q=salut&k=1").get_json()[0]["key"] == "salut"

    rv = client.delete("/api/keys/salut")
    assert rv.status_code == 200
    assert rv.get_json()["keys"] == 3


@pytest.mark.e2e
def test_insert_requires_key(client):
    rv = client.post("/api/keys", json={"value": 1})
    assert rv.status_code == 400


@pytest.mark.e2e
def test_health_and_home(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True, "keys": 3}
    home = client.get("/")
    assert home.status_code == 200
    assert "fuzzy key search" in home.data.decode("utf-8").lower()


@pytest.mark.e2e
def test_uninitialized_engine_is_503(monkeypatch):
    monkeypatch.setattr(webmod, "_engine", None)
    client = flask_app.test_client()
    assert client.get("/health").status_code == 503
    assert client.get("/api/search?q=c").status_code == 503
