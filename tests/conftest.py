import os

import django
import pytest

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "topology_explorer.settings")
django.setup()


SCENARIO_REPORT = {
    "nodes": [
        {"address": {"host": "10.0.0.1", "port": 9000}, "peers": [{"host": "10.0.0.2", "port": 9000}]},
        {"address": {"host": "10.0.0.2", "port": 9000}, "peers": [{"host": "10.0.0.1", "port": 9000}]},
    ]
}


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self._text = text

    def json(self):
        if self._text is not None:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


@pytest.fixture
def scenario_report():
    return {"nodes": [dict(entry) for entry in SCENARIO_REPORT["nodes"]]}


@pytest.fixture
def fake_control_node(monkeypatch):
    """Route requests.get to a canned answer; returns the list of requested URLs."""
    calls = []
    state = {"response": FakeResponse(payload=SCENARIO_REPORT)}

    def fake_get(url, timeout=None, headers=None):
        calls.append(url)
        response = state["response"]
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr("requests.get", fake_get)

    def answer(response):
        state["response"] = response

    fake_get.calls = calls
    fake_get.answer = answer
    return fake_get
