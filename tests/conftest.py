"""Shared fixtures: sample records, a fake requests session and a fake data service."""

import json
import threading
from datetime import datetime, timezone

import pytest
import requests

from party_planner.errors import ErrorKind, ServiceError
from party_planner.schemas import Guest, Party, Rsvp


BASE_URL = "https://service.test/api/cohort"


def make_response(status_code=200, body=None, *, raw=None):
    """Build a real ``requests.Response`` with a JSON (or raw) body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = "OK" if status_code < 400 else "Error"
    if raw is not None:
        response._content = raw
    elif body is None:
        response._content = b""
    else:
        response._content = json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


class FakeSession:
    """Stands in for ``requests.Session``.

    ``routes`` maps ``(method, path)`` to a response, an exception to
    raise, or a callable returning either.  Every call is recorded.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self._lock = threading.Lock()

    def request(self, method, url, json=None, timeout=None):
        path = url[len(BASE_URL):]
        with self._lock:
            self.calls.append((method, path, json))
        outcome = self.routes[(method, path)]
        if callable(outcome) and not isinstance(outcome, requests.Response):
            outcome = outcome()
        if isinstance(outcome, Exception):
            raise outcome
        outcome.url = url
        return outcome


class FakeService:
    """Records calls in order and returns canned results."""

    def __init__(self, parties=None, guests=None, rsvps=None):
        self.parties = list(parties or [])
        self.guests = list(guests or [])
        self.rsvps = list(rsvps or [])
        self.calls = []
        self.errors = {}
        self.created = []

    def _fail(self, name):
        return self.errors.get(name)

    def list_guests_and_rsvps(self):
        self.calls.append("list_guests_and_rsvps")
        error = self._fail("list_guests_and_rsvps")
        if error:
            return ([], []), error
        return (list(self.guests), list(self.rsvps)), None

    def list_parties(self):
        self.calls.append("list_parties")
        error = self._fail("list_parties")
        if error:
            return [], error
        return list(self.parties), None

    def get_party(self, party_id):
        self.calls.append(("get_party", party_id))
        error = self._fail("get_party")
        if error:
            return None, error
        for party in self.parties:
            if party.id == party_id:
                return party, None
        return None, ServiceError(ErrorKind.TRANSPORT, "not found", 404)

    def create_party(self, fields):
        self.calls.append(("create_party", fields))
        error = self._fail("create_party")
        if error:
            return None, error
        party = Party(id=100 + len(self.created), **fields.model_dump())
        self.created.append(party)
        self.parties.append(party)
        return party, None

    def delete_party(self, party_id):
        self.calls.append(("delete_party", party_id))
        error = self._fail("delete_party")
        if error:
            return False, error
        self.parties = [p for p in self.parties if p.id != party_id]
        return True, None


@pytest.fixture
def parties():
    return [
        Party(id=1, name="Gala", date=datetime(2025, 12, 1, tzinfo=timezone.utc),
              description="Annual dinner", location="Hall A"),
        Party(id=2, name="Picnic", date=datetime(2026, 6, 14, 15, 30, tzinfo=timezone.utc),
              description="Bring a blanket", location="Riverside Park"),
    ]


@pytest.fixture
def guests():
    return [Guest(id=10, name="Ada"), Guest(id=11, name="Grace"), Guest(id=12, name="Linus")]


@pytest.fixture
def rsvps():
    return [
        Rsvp(id=1, eventId=1, guestId=10),
        Rsvp(id=2, eventId=2, guestId=11),
        Rsvp(id=3, eventId=1, guestId=12),
    ]


@pytest.fixture
def service(parties, guests, rsvps):
    return FakeService(parties, guests, rsvps)
