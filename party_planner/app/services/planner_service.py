"""
Controller for the admin page.

``PlannerController`` binds user actions to the data service and the
page.  Each action calls the service, writes the result into the
:class:`PlannerState` on success and asks the :class:`PageMount` for a
full re-render.  Service calls are blocking ``requests`` calls and run
in the thread pool; every state write happens back on the event loop,
so writes are serialised without locks.

Failures are logged and leave the state as it was.  The only failure
the user sees is an invalid add-party form, which is rejected with an
alert before any request is made.  That alert page is built once for the
response and never mounted.
"""

import logging
from typing import Mapping, Optional

from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from party_planner.errors import ErrorKind, ServiceError
from party_planner.schemas import PARTY_FORM_FIELDS, PartyCreate
from party_planner.service_api import PartyServiceAPI

from ..views.render import PageMount, render_app, to_document
from .state_store import PlannerState


logger = logging.getLogger(__name__)


def missing_fields(form: Mapping[str, Optional[str]]) -> list[str]:
    return [name for name in PARTY_FORM_FIELDS if not (form.get(name) or "").strip()]


def validate_party_form(form: Mapping[str, Optional[str]]) -> tuple[Optional[PartyCreate], Optional[ServiceError]]:
    """Check the add-party form and build the create payload.

    Returns ``(fields, None)`` when every field is present and the date
    parses, otherwise ``(None, error)`` with a ``VALIDATION`` error whose
    message is meant for the user.
    """
    missing = missing_fields(form)
    if missing:
        names = ", ".join(name.capitalize() for name in missing)
        return None, ServiceError(ErrorKind.VALIDATION, f"Please fill out all fields. Missing: {names}.")
    try:
        fields = PartyCreate(**{name: form[name] for name in PARTY_FORM_FIELDS})
    except ValidationError as exc:
        bad = sorted({str(err["loc"][0]).capitalize() for err in exc.errors() if err.get("loc")})
        return None, ServiceError(ErrorKind.VALIDATION, f"Please check these fields: {', '.join(bad)}.")
    return fields, None


class PlannerController:
    """Keeps the state store, the data service and the page in step."""

    def __init__(self, api: PartyServiceAPI, state: PlannerState, mount: PageMount) -> None:
        self.api = api
        self.state = state
        self.mount = mount

    def render(self) -> None:
        self.mount.render()

    def form_alert_page(self, message: str, form: Mapping[str, Optional[str]]) -> str:
        """One-off page showing ``message`` above the form with its values kept."""
        draft = {name: form.get(name) or "" for name in PARTY_FORM_FIELDS}
        return to_document(render_app(self.state, alert=message, draft=draft), self.mount.title)

    # ------------------------------------------------------------------
    # Fetch helpers.  Each returns True when the state was updated.
    # ------------------------------------------------------------------
    async def fetch_guests_and_rsvps(self) -> bool:
        (guests, rsvps), error = await run_in_threadpool(self.api.list_guests_and_rsvps)
        if error:
            logger.error("Error fetching guests or RSVPs: %s", error)
            return False
        self.state.replace_guests_and_rsvps(guests, rsvps)
        logger.info("Loaded %d guests and %d RSVPs", len(guests), len(rsvps))
        return True

    async def fetch_parties(self) -> bool:
        parties, error = await run_in_threadpool(self.api.list_parties)
        if error:
            logger.error("Error fetching parties: %s", error)
            return False
        self.state.replace_parties(parties)
        logger.info("Loaded %d parties", len(parties))
        return True

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    async def load(self) -> None:
        """Initial load: guests and RSVPs, then parties, then one render."""
        await self.fetch_guests_and_rsvps()
        await self.fetch_parties()
        self.render()

    async def refresh(self) -> None:
        await self.load()

    async def select_party(self, party_id: int) -> bool:
        """Fetch ``party_id`` and show it in the details section.

        Only the response to the most recent selection is applied; an
        older request that finishes later is discarded.
        """
        seq = self.state.next_selection_seq()
        party, error = await run_in_threadpool(self.api.get_party, party_id)
        if seq != self.state.selection_seq:
            logger.debug("Discarding stale selection of party %s (request %d, latest %d)",
                         party_id, seq, self.state.selection_seq)
            return False
        if error:
            logger.error("Error fetching party %s: %s", party_id, error)
            return False
        self.state.select(party)
        self.render()
        return True

    async def delete_selected(self, confirmed: bool) -> bool:
        """Delete the selected party if the user confirmed it.

        Cancelling sends nothing and keeps the selection.  A successful
        delete reloads the party list and clears the selection, unless the
        user picked another party while the delete was in flight.
        """
        party = self.state.selected_party
        if party is None:
            logger.warning("Delete requested with no party selected")
            return False
        if not confirmed:
            self.render()
            return False
        _, error = await run_in_threadpool(self.api.delete_party, party.id)
        if error:
            logger.error("Error deleting party %s: %s", party.id, error)
            self.render()
            return False
        logger.info("Deleted party %s (%s)", party.id, party.name)
        current = self.state.selected_party
        if current is not None and current.id == party.id:
            self.state.select(None)
            # Invalidate any selection request still in flight.
            self.state.next_selection_seq()
        await self.fetch_parties()
        self.render()
        return True

    async def create_party(self, form: Mapping[str, Optional[str]]) -> Optional[ServiceError]:
        """Validate and submit the add-party form.

        Returns the validation or service error, if any.  An invalid form
        sends nothing and leaves the mounted page alone; the caller shows
        it with :meth:`form_alert_page`.  Otherwise the form is cleared
        once the request completes.
        """
        fields, error = validate_party_form(form)
        if error:
            logger.info("Rejected add-party form: %s", error.message)
            return error

        party, error = await run_in_threadpool(self.api.create_party, fields)
        if error:
            logger.error("Error creating party: %s", error)
            self.render()
            return error
        logger.info("Created party %s (%s)", party.id, party.name)
        await self.fetch_parties()
        self.render()
        return None
