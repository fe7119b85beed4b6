from __future__ import annotations

from typing import Any, Dict, List

import pytest
import requests

from hotel_booking_api.client import MyHotelsClient
from hotel_booking_api.console import ADD_HINT, DELETE_PROMPT, OwnerConsole, main, parse_changes

HOTEL = {
    "id": "abc123",
    "owner_id": "owner-a",
    "name": "Lotus Inn",
    "description": "Lakeside rooms",
    "city": "Pokhara",
    "country": "Nepal",
    "type": "Boutique",
    "price_per_night": 100.0,
    "adult_count": 2,
    "child_count": 1,
    "star_rating": 4,
    "facilities": ["wifi", "spa"],
    "image_urls": ["https://cdn.example/front.png"],
    "last_updated": "2026-10-19T10:00:00Z",
}


class StubClient:
    def __init__(self, hotels=None, error=None):
        self.hotels = hotels if hotels is not None else [HOTEL]
        self.error = error
        self.calls: List[tuple] = []

    def list_hotels(self):
        self.calls.append(("list",))
        return (None, self.error) if self.error else (self.hotels, None)

    def get_hotel(self, hotel_id):
        self.calls.append(("get", hotel_id))
        return (None, self.error) if self.error else (self.hotels[0], None)

    def create_hotel(self, fields, image_paths=()):
        self.calls.append(("create", fields, list(image_paths)))
        return (None, self.error) if self.error else ({**HOTEL, **fields, "id": "new456"}, None)

    def update_hotel(self, hotel_id, fields, image_paths=()):
        self.calls.append(("update", hotel_id, fields, list(image_paths)))
        return (None, self.error) if self.error else ({**self.hotels[0], **fields}, None)

    def delete_hotel(self, hotel_id):
        self.calls.append(("delete", hotel_id))
        return (None, self.error) if self.error else ({"message": "Hotel deleted successfully"}, None)


def make_console(client, answers=()):
    answers = list(answers)
    prompts: List[str] = []
    output: List[str] = []

    def fake_input(prompt: str) -> str:
        prompts.append(prompt)
        return answers.pop(0)

    console = OwnerConsole(client, input_func=fake_input, output=output.append)
    return console, prompts, output


def test_list_renders_every_hotel() -> None:
    console, _, output = make_console(StubClient())

    assert console.show_list()

    text = output[0]
    assert text.startswith("My Hotels")
    assert "Lotus Inn" in text
    assert "Pokhara, Nepal" in text
    assert "100.0 per night" in text
    assert "2 adults, 1 children" in text
    assert "4 stars" in text
    assert text.endswith(ADD_HINT)


def test_empty_list_says_so() -> None:
    console, _, output = make_console(StubClient(hotels=[]))
    console.show_list()
    assert output[0].startswith("No hotels found")
    assert "add --set name=" in output[0]


def test_delete_asks_first_and_respects_no() -> None:
    client = StubClient()
    console, prompts, output = make_console(client, answers=["n"])

    assert console.delete_hotel("abc123") is False
    assert prompts == [f"{DELETE_PROMPT} [y/N] "]
    assert ("delete", "abc123") not in client.calls
    assert output == ["Cancelled."]


def test_delete_after_confirmation() -> None:
    client = StubClient()
    console, _, output = make_console(client, answers=["y"])

    assert console.delete_hotel("abc123") is True
    assert client.calls == [("delete", "abc123")]
    assert output == ["[+] Hotel deleted successfully!"]


def test_delete_failure_is_reported() -> None:
    client = StubClient(error={"status_code": 404, "message": "Hotel not found or not owned by user"})
    console, _, output = make_console(client, answers=["yes"])

    assert console.delete_hotel("abc123") is False
    assert output == ["[!] Hotel not found or not owned by user"]


def test_edit_keeps_existing_images() -> None:
    client = StubClient()
    console, _, output = make_console(client)

    assert console.edit_hotel("abc123", {"name": "Lotus Inn & Spa"}, ["lobby.jpg"])

    _, hotel_id, fields, paths = client.calls[-1]
    assert hotel_id == "abc123"
    assert fields == {"name": "Lotus Inn & Spa", "image_urls": ["https://cdn.example/front.png"]}
    assert paths == ["lobby.jpg"]
    assert output == ["[+] Hotel saved!"]


def test_add_creates_hotel_and_reports_its_id() -> None:
    client = StubClient()
    console, _, output = make_console(client)
    fields = {"name": "Summit House", "facilities": ["wifi"]}

    assert console.create_hotel(fields, ["front.jpg"])

    assert client.calls == [("create", fields, ["front.jpg"])]
    assert output == ["[+] Hotel added! (id: new456)"]


def test_add_failure_is_reported() -> None:
    client = StubClient(error={"status_code": 400, "message": "facilities: Facilities are required"})
    console, _, output = make_console(client)

    assert console.create_hotel({"name": "Summit House"}) is False
    assert output == ["[!] facilities: Facilities are required"]


def test_add_command_sends_parsed_fields(monkeypatch) -> None:
    sent = {}

    def fake_create(self, fields, image_paths=()):
        sent["fields"] = fields
        sent["paths"] = list(image_paths)
        return {**HOTEL, "id": "new456"}, None

    monkeypatch.setattr(MyHotelsClient, "create_hotel", fake_create)

    code = main([
        "--token", "tkn", "add",
        "--set", "name=Summit House",
        "--set", "facilities=wifi,spa",
        "--image", "front.jpg",
    ])

    assert code == 0
    assert sent == {"fields": {"name": "Summit House", "facilities": ["wifi", "spa"]}, "paths": ["front.jpg"]}


def test_parse_changes_splits_facilities() -> None:
    assert parse_changes(["name=Lotus Inn", "facilities=wifi, spa,"]) == {
        "name": "Lotus Inn",
        "facilities": ["wifi", "spa"],
    }
    with pytest.raises(ValueError):
        parse_changes(["name"])


def test_main_requires_token(monkeypatch, capsys) -> None:
    monkeypatch.delenv("HOTEL_API_TOKEN", raising=False)
    assert main(["--token", "", "list"]) == 1
    assert "token is required" in capsys.readouterr().err


class FakeSession:
    def __init__(self, status_code: int, body: bytes):
        self.status_code = status_code
        self.body = body
        self.requests: List[Dict[str, Any]] = []

    def request(self, **kwargs):
        self.requests.append(kwargs)
        response = requests.Response()
        response.status_code = self.status_code
        response._content = self.body
        response.url = kwargs["url"]
        return response


def test_client_sends_token_and_parses_json() -> None:
    session = FakeSession(200, b'[{"id": "abc123"}]')
    client = MyHotelsClient(base_url="http://api.test/", token="tkn", session=session)

    data, error = client.list_hotels()

    assert error is None
    assert data == [{"id": "abc123"}]
    sent = session.requests[0]
    assert sent["method"] == "GET"
    assert sent["url"] == "http://api.test/api/v1/my-hotels"
    assert sent["headers"] == {"Authorization": "Bearer tkn"}


def test_client_turns_http_errors_into_error_dicts() -> None:
    session = FakeSession(400, b'{"detail": [{"field": "facilities", "message": "Facilities are required"}]}')
    client = MyHotelsClient(base_url="http://api.test", token="tkn", session=session)

    data, error = client.create_hotel({"name": "Lotus Inn", "facilities": []})

    assert data is None
    assert error == {"status_code": 400, "message": "facilities: Facilities are required"}


def test_client_flattens_list_fields() -> None:
    pairs = MyHotelsClient._form({"name": "Lotus Inn", "facilities": ["wifi", "spa"], "star_rating": None})
    assert pairs == [("name", "Lotus Inn"), ("facilities", "wifi"), ("facilities", "spa")]
