import importlib

import simplylearn.main


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_importing_main_touches_nothing_on_disk(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    importlib.reload(simplylearn.main)
    assert list(tmp_path.iterdir()) == []
    assert not hasattr(simplylearn.main, "app")
