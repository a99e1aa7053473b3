import threading

import pytest
import requests

from party_planner.errors import ErrorKind
from party_planner.schemas import PartyCreate
from party_planner.service_api import PartyServiceAPI

from conftest import BASE_URL, FakeSession, make_response


PARTY_JSON = {
    "id": 1,
    "name": "Gala",
    "date": "2025-12-01T00:00:00.000Z",
    "description": "Annual dinner",
    "location": "Hall A",
    "cohortId": 7,
}


def make_api(routes):
    session = FakeSession(routes)
    return PartyServiceAPI(base_url=BASE_URL + "/", session=session), session


class TestReads:
    def test_list_parties_unwraps_data(self):
        api, session = make_api({("GET", "/events"): make_response(200, {"data": [PARTY_JSON]})})

        parties, error = api.list_parties()

        assert error is None
        assert [p.name for p in parties] == ["Gala"]
        assert parties[0].date.year == 2025
        assert session.calls == [("GET", "/events", None)]

    def test_get_party(self):
        api, _ = make_api({("GET", "/events/1"): make_response(200, {"data": PARTY_JSON})})

        party, error = api.get_party(1)

        assert error is None
        assert party.location == "Hall A"

    def test_rsvps_accept_camel_case(self):
        body = {"data": [{"id": 5, "eventId": 1, "guestId": 10}]}
        api, _ = make_api({("GET", "/rsvps"): make_response(200, body)})

        rsvps, error = api.list_rsvps()

        assert error is None
        assert (rsvps[0].event_id, rsvps[0].guest_id) == (1, 10)

    def test_non_2xx_is_transport_error(self):
        api, _ = make_api({("GET", "/events/9"): make_response(404, {"success": False, "error": "Event not found"})})

        party, error = api.get_party(9)

        assert party is None
        assert error.kind is ErrorKind.TRANSPORT
        assert error.status_code == 404
        assert error.message == "Event not found"

    def test_network_failure_is_transport_error(self):
        api, _ = make_api({("GET", "/events"): requests.ConnectionError("unreachable")})

        parties, error = api.list_parties()

        assert parties == []
        assert error.kind is ErrorKind.TRANSPORT
        assert error.status_code is None

    def test_invalid_json_is_parse_error(self):
        api, _ = make_api({("GET", "/events"): make_response(200, raw=b"<html>oops")})

        parties, error = api.list_parties()

        assert parties == []
        assert error.kind is ErrorKind.PARSE

    def test_missing_envelope_is_parse_error(self):
        api, _ = make_api({("GET", "/events"): make_response(200, [PARTY_JSON])})

        _, error = api.list_parties()

        assert error.kind is ErrorKind.PARSE

    def test_malformed_record_is_parse_error(self):
        api, _ = make_api({("GET", "/guests"): make_response(200, {"data": [{"name": "no id"}]})})

        guests, error = api.list_guests()

        assert guests == []
        assert error.kind is ErrorKind.PARSE


class TestGuestsAndRsvps:
    def test_both_requests_are_in_flight_together(self):
        # Each request waits for the other; run one after the other they would time out.
        barrier = threading.Barrier(2, timeout=5)

        def guests():
            barrier.wait()
            return make_response(200, {"data": [{"id": 10, "name": "Ada"}]})

        def rsvps():
            barrier.wait()
            return make_response(200, {"data": [{"id": 1, "eventId": 1, "guestId": 10}]})

        api, session = make_api({("GET", "/guests"): guests, ("GET", "/rsvps"): rsvps})

        (guest_list, rsvp_list), error = api.list_guests_and_rsvps()

        assert error is None
        assert [g.name for g in guest_list] == ["Ada"]
        assert [r.guest_id for r in rsvp_list] == [10]
        assert sorted(path for _, path, _ in session.calls) == ["/guests", "/rsvps"]

    def test_one_failure_fails_both(self):
        api, _ = make_api({
            ("GET", "/guests"): make_response(200, {"data": [{"id": 10, "name": "Ada"}]}),
            ("GET", "/rsvps"): make_response(500, {"error": "boom"}),
        })

        (guest_list, rsvp_list), error = api.list_guests_and_rsvps()

        assert (guest_list, rsvp_list) == ([], [])
        assert error.kind is ErrorKind.TRANSPORT
        assert error.status_code == 500


class TestMutations:
    def test_create_posts_normalised_date(self):
        api, session = make_api({("POST", "/events"): make_response(201, {"data": PARTY_JSON})})
        fields = PartyCreate(name="Gala", description="Annual", date="2025-12-01", location="Hall A")

        party, error = api.create_party(fields)

        assert error is None
        assert party.id == 1
        assert session.calls == [(
            "POST",
            "/events",
            {"name": "Gala", "description": "Annual", "date": "2025-12-01T00:00:00.000Z", "location": "Hall A"},
        )]

    def test_create_rejected_by_service(self):
        api, _ = make_api({("POST", "/events"): make_response(400, {"error": "Bad date"})})
        fields = PartyCreate(name="Gala", description="Annual", date="2025-12-01", location="Hall A")

        party, error = api.create_party(fields)

        assert party is None
        assert error.status_code == 400

    def test_delete_with_empty_body_succeeds(self):
        api, session = make_api({("DELETE", "/events/1"): make_response(204)})

        ok, error = api.delete_party(1)

        assert ok is True
        assert error is None
        assert session.calls == [("DELETE", "/events/1", None)]

    @pytest.mark.parametrize("reply", [
        make_response(200, {"success": True}),
        make_response(200, raw=b"Deleted"),
    ])
    def test_delete_ignores_body_of_2xx_reply(self, reply):
        api, _ = make_api({("DELETE", "/events/1"): reply})

        ok, error = api.delete_party(1)

        assert (ok, error) == (True, None)

    @pytest.mark.parametrize("status", [403, 404, 500])
    def test_delete_failure(self, status):
        api, _ = make_api({("DELETE", "/events/1"): make_response(status, {"error": "nope"})})

        ok, error = api.delete_party(1)

        assert ok is False
        assert error.kind is ErrorKind.TRANSPORT
        assert error.status_code == status
