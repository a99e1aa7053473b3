"""Party data service client.

This module wraps the REST data service that stores parties, guests and
RSVPs.  Every resource lives under ``{base}/{cohort}/{resource}`` and
every response wraps its payload in a ``{"data": ...}`` envelope.  The
client uses the ``requests`` library internally and converts the
payloads into the pydantic models from :mod:`party_planner.schemas`.

The client exposes one method per operation the admin page needs:

* :meth:`list_parties` – return all parties.
* :meth:`get_party` – fetch a single party by its identifier.
* :meth:`list_guests_and_rsvps` – fetch guests and RSVPs together.
* :meth:`create_party` – create a new party.
* :meth:`delete_party` – delete a party.

Methods never raise for service failures.  They return a tuple
``(value, error)`` where ``error`` is ``None`` on success and a
:class:`~party_planner.errors.ServiceError` otherwise.  The client keeps
no copy of the data it fetches; callers decide what to do with it.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Tuple, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from .errors import ErrorKind, ServiceError
from .schemas import Guest, Party, PartyCreate, Rsvp


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_MISSING = object()


class PartyServiceAPI:
    """Client for the party data service."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: URL of the cohort root, e.g.
                ``https://example.com/api/2509-pt-mac``.
            timeout: Seconds to wait for each request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, json_body: Any | None = None, expect_data: bool = True
    ) -> Tuple[Any, Optional[ServiceError]]:
        """Perform an HTTP request against the data service.

        Args:
            method: HTTP method (``GET``, ``POST``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/events``).
            json_body: JSON body to send with the request.
            expect_data: When false only the status matters; the body is
                not read, so any 2xx reply is a success.
        Returns:
            A tuple ``(data, error)``.  ``data`` is the value of the
            response's ``data`` key, or ``None`` when the body is empty.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = (
                        err_json.get("error")
                        or err_json.get("message")
                        or err_json.get("detail")
                        or str(err_json)
                    )
                except (ValueError, AttributeError):
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("%s %s failed (%s): %s", method, path, status, message)
            return None, ServiceError(ErrorKind.TRANSPORT, message, status)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            return None, ServiceError(ErrorKind.TRANSPORT, str(exc))

        if not expect_data or not response.content:
            return None, None
        try:
            body = response.json()
        except ValueError as exc:
            logger.error("%s %s returned invalid JSON: %s", method, path, exc)
            return None, ServiceError(ErrorKind.PARSE, f"invalid JSON: {exc}", response.status_code)
        data = body.get("data", _MISSING) if isinstance(body, dict) else _MISSING
        if data is _MISSING:
            logger.error("%s %s returned no data envelope", method, path)
            return None, ServiceError(ErrorKind.PARSE, "response has no 'data' key", response.status_code)
        return data, None

    def _parse_one(self, model: Type[ModelT], data: Any, what: str) -> Tuple[Optional[ModelT], Optional[ServiceError]]:
        try:
            return model.model_validate(data), None
        except ValidationError as exc:
            logger.error("Malformed %s in response: %s", what, exc)
            return None, ServiceError(ErrorKind.PARSE, f"malformed {what}: {exc}")

    def _parse_many(self, model: Type[ModelT], data: Any, what: str) -> Tuple[List[ModelT], Optional[ServiceError]]:
        if not isinstance(data, list):
            logger.error("Expected a list of %s, got %s", what, type(data).__name__)
            return [], ServiceError(ErrorKind.PARSE, f"expected a list of {what}")
        items: List[ModelT] = []
        for raw in data:
            item, error = self._parse_one(model, raw, what)
            if error:
                return [], error
            items.append(item)
        return items, None

    def _fetch_list(self, path: str, model: Type[ModelT], what: str) -> Tuple[List[ModelT], Optional[ServiceError]]:
        data, error = self._request("GET", path)
        if error:
            return [], error
        return self._parse_many(model, data, what)

    # ------------------------------------------------------------------
    # Party operations
    # ------------------------------------------------------------------
    def list_parties(self) -> Tuple[List[Party], Optional[ServiceError]]:
        """Retrieve all parties.

        Returns:
            A tuple ``(parties, error)``.  ``parties`` is empty on failure.
        """
        return self._fetch_list("/events", Party, "parties")

    def get_party(self, party_id: int) -> Tuple[Optional[Party], Optional[ServiceError]]:
        """Retrieve a single party by ID."""
        data, error = self._request("GET", f"/events/{party_id}")
        if error:
            return None, error
        return self._parse_one(Party, data, "party")

    def create_party(self, fields: PartyCreate) -> Tuple[Optional[Party], Optional[ServiceError]]:
        """Create a party.

        Args:
            fields: Validated party fields.  The date has already been
                normalised to a UTC timestamp by :class:`PartyCreate`.
        Returns:
            A tuple ``(party, error)`` with the party as stored by the
            service.
        """
        data, error = self._request("POST", "/events", json_body=fields.to_payload())
        if error:
            return None, error
        if data is None:
            return None, ServiceError(ErrorKind.PARSE, "create returned no party")
        return self._parse_one(Party, data, "party")

    def delete_party(self, party_id: int) -> Tuple[bool, Optional[ServiceError]]:
        """Delete a party by ID.

        Returns:
            A tuple ``(success, error)``.
        """
        _, error = self._request("DELETE", f"/events/{party_id}", expect_data=False)
        if error:
            return False, error
        return True, None

    # ------------------------------------------------------------------
    # Guest and RSVP operations
    # ------------------------------------------------------------------
    def list_guests(self) -> Tuple[List[Guest], Optional[ServiceError]]:
        return self._fetch_list("/guests", Guest, "guests")

    def list_rsvps(self) -> Tuple[List[Rsvp], Optional[ServiceError]]:
        return self._fetch_list("/rsvps", Rsvp, "rsvps")

    def list_guests_and_rsvps(
        self,
    ) -> Tuple[Tuple[List[Guest], List[Rsvp]], Optional[ServiceError]]:
        """Retrieve guests and RSVPs in parallel.

        Both requests are in flight before either is waited on.  If
        either fails the whole operation fails and no partial result is
        returned.

        Returns:
            A tuple ``((guests, rsvps), error)``.
        """
        with ThreadPoolExecutor(max_workers=2) as pool:
            guests_future = pool.submit(self.list_guests)
            rsvps_future = pool.submit(self.list_rsvps)
            guests, guests_error = guests_future.result()
            rsvps, rsvps_error = rsvps_future.result()
        error = guests_error or rsvps_error
        if error:
            return ([], []), error
        return (guests, rsvps), None
