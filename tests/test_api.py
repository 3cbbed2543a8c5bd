"""Tests for the Flask web widget endpoints."""

import pytest

import api
from calculator import Calculator


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(api, "calculator", Calculator())
    api.app.config["TESTING"] = True
    with api.app.test_client() as client:
        yield client


def send(client, type_, value=None):
    response = client.post("/api/command", json={"type": type_, "value": value})
    assert response.status_code == 200
    return response.get_json()["data"]


def test_index_serves_widget(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "current-display" in response.get_data(as_text=True)
    response.close()


def test_initial_state(client):
    payload = client.get("/api/state").get_json()
    assert payload["success"] is True
    assert payload["data"] == {
        "current_display": "0",
        "previous_operation": "",
        "history_open": False,
        "history": [],
    }


def test_commands_compute_and_record_history(client):
    send(client, "number", "2")
    data = send(client, "operator", "+")
    assert data["previous_operation"] == "2 +"
    send(client, "number", "3")
    data = send(client, "equals")
    assert data["current_display"] == "5"
    assert data["previous_operation"] == ""

    payload = client.get("/api/history").get_json()
    assert payload["data"] == ["2 + 3 = 5"]
    assert payload["count"] == 1
    assert payload["total"] == 1


def test_display_is_formatted(client):
    for d in "1234567":
        data = send(client, "digit", d)
    assert data["current_display"] == "1,234,567"


def test_keys_drive_the_calculator(client):
    for key in ["9", "*", "9", "Enter"]:
        payload = client.post("/api/key", json={"key": key}).get_json()
        assert payload["handled"] is True
    assert payload["data"]["current_display"] == "81"


def test_repeated_and_unknown_keys_are_not_handled(client):
    payload = client.post("/api/key", json={"key": "7", "repeat": True}).get_json()
    assert payload["handled"] is False
    assert payload["data"]["current_display"] == "0"

    payload = client.post("/api/key", json={"key": "Shift"}).get_json()
    assert payload["handled"] is False


def test_escape_closes_history_view(client):
    data = send(client, "history")
    assert data["history_open"] is True
    assert data["history"] == ["No history"]

    # Digits are ignored while the history view is open
    payload = client.post("/api/key", json={"key": "5"}).get_json()
    assert payload["handled"] is False

    payload = client.post("/api/key", json={"key": "Escape"}).get_json()
    assert payload["data"]["history_open"] is False
    assert payload["data"]["current_display"] == "0"


def test_division_by_zero_shows_error(client):
    for type_, value in [("number", "1"), ("operator", "÷"), ("number", "0")]:
        send(client, type_, value)
    data = send(client, "equals")
    assert data["current_display"] == "Error"

    data = send(client, "number", "4")
    assert data["current_display"] == "Error"

    data = client.post("/api/reset").get_json()["data"]
    assert data["current_display"] == "0"


def test_clear_history_endpoint(client):
    for type_, value in [("number", "1"), ("operator", "+"), ("number", "1"), ("equals", None)]:
        send(client, type_, value)
    data = client.post("/api/history/clear").get_json()["data"]
    assert data["current_display"] == "2"
    assert client.get("/api/history").get_json()["data"] == []


def test_bad_requests(client):
    assert client.post("/api/command", json={}).status_code == 400
    assert client.post("/api/command", json={"type": "bogus"}).status_code == 400
    assert client.post("/api/command", json={"type": "digit", "value": "x"}).status_code == 400
    assert client.post("/api/key", json={}).status_code == 400
    assert client.get("/api/history?limit=abc").status_code == 400


@pytest.mark.parametrize("url,body", [
    ("/api/command", [1, 2]),
    ("/api/command", "digit"),
    ("/api/key", ["Enter"]),
    ("/api/key", 7),
])
def test_non_object_bodies_are_rejected(client, url, body):
    response = client.post(url, json=body)
    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]
