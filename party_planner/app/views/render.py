"""
Page rendering.

The page is rebuilt from scratch on every pass: ``render_app`` reads a
:class:`PlannerState` and returns a fresh ``xml.etree.ElementTree``
element for the ``#app`` container.  Nothing is diffed or patched; the
previous tree is simply replaced in the :class:`PageMount`.

The page has three sections:

* the party list, one link per party with the selected one marked,
* the party details, including who RSVP'd and a delete action,
* the add-party form.
"""

import logging
from datetime import datetime
from typing import List, Mapping, Optional, Tuple
from xml.etree import ElementTree as ET

from party_planner.schemas import PARTY_FORM_FIELDS, Guest, Party, Rsvp

from ..services.state_store import PlannerState


logger = logging.getLogger(__name__)

SELECT_PROMPT = "Please select a party to learn details."
NO_GUESTS = "No guests have RSVP'd yet."

_FIELD_INPUTS = {
    "name": ("Name", "text"),
    "description": ("Description", "text"),
    "date": ("Date", "date"),
    "location": ("Location", "text"),
}


def _el(parent: Optional[ET.Element], tag: str, text: Optional[str] = None, **attrs: str) -> ET.Element:
    """Create ``tag`` (under ``parent`` when given).  ``class_`` maps to ``class``."""
    attrs = {key.rstrip("_"): value for key, value in attrs.items()}
    element = ET.Element(tag, attrs) if parent is None else ET.SubElement(parent, tag, attrs)
    if text is not None:
        element.text = text
    return element


def _labelled(parent: ET.Element, label: str, value: str) -> ET.Element:
    p = _el(parent, "p")
    strong = _el(p, "strong", f"{label}:")
    strong.tail = f" {value}"
    return p


_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_long_date(value: datetime) -> str:
    """en-US long date such as ``Monday, December 1, 2025``.

    The page is English throughout, so names do not follow the process
    locale.  The date is shown in the timestamp's own timezone.
    """
    return f"{_WEEKDAYS[value.weekday()]}, {_MONTHS[value.month - 1]} {value.day}, {value.year}"


def party_guests(state: PlannerState, party: Party) -> List[Tuple[Rsvp, Optional[Guest]]]:
    """Pair every RSVP for ``party`` with its guest.

    The guest is ``None`` when the RSVP references a guest id that is
    not in the guest collection; each such RSVP is logged as a data
    integrity problem.
    """
    guests = state.guest_by_id()
    pairs = []
    for rsvp in state.rsvps_for(party.id):
        guest = guests.get(rsvp.guest_id)
        if guest is None:
            logger.warning(
                "RSVP %s for party %s references unknown guest %s",
                rsvp.id,
                party.id,
                rsvp.guest_id,
            )
        pairs.append((rsvp, guest))
    return pairs


def party_list_item(party: Party, selected: Optional[Party]) -> ET.Element:
    li = _el(None, "li")
    a = _el(li, "a", party.name, href=f"/parties/{party.id}#selected")
    if selected is not None and selected.id == party.id:
        a.set("class", "selected")
    return li


def party_list(state: PlannerState) -> ET.Element:
    ul = _el(None, "ul", class_="lineup")
    for party in state.parties:
        ul.append(party_list_item(party, state.selected_party))
    return ul


def guest_list(state: PlannerState, party: Party) -> ET.Element:
    div = _el(None, "div", class_="guests")
    p = _el(div, "p")
    _el(p, "strong", "Guests RSVP'd:")
    pairs = party_guests(state, party)
    if not pairs:
        _el(div, "p", NO_GUESTS)
        return div
    ul = _el(div, "ul")
    for rsvp, guest in pairs:
        if guest is None:
            _el(ul, "li", f"Unknown guest #{rsvp.guest_id}", class_="missing-guest")
        else:
            _el(ul, "li", guest.name)
    return div


def delete_confirmation(party: Party) -> ET.Element:
    form = _el(None, "form", method="post", action=f"/parties/{party.id}/delete", class_="confirm-delete")
    _el(form, "p", f"Are you sure you want to delete {party.name}?")
    _el(form, "button", "Delete", type="submit", name="confirm", value="yes")
    _el(form, "button", "Cancel", type="submit", name="confirm", value="no")
    return form


def party_details(state: PlannerState, *, confirm_delete: bool = False) -> ET.Element:
    party = state.selected_party
    if party is None:
        return _el(None, "p", SELECT_PROMPT)

    div = _el(None, "div", class_="party-details")
    _el(div, "h3", f"{party.name} (ID: {party.id})")
    _labelled(div, "Date", format_long_date(party.date))
    _labelled(div, "Location", party.location)
    _el(div, "p", party.description)
    div.append(guest_list(state, party))
    if confirm_delete:
        div.append(delete_confirmation(party))
    else:
        _el(div, "a", "Delete party", href=f"/parties/{party.id}/delete#selected", class_="delete")
    return div


def party_form(draft: Optional[Mapping[str, str]] = None) -> ET.Element:
    draft = draft or {}
    form = _el(None, "form", method="post", action="/parties", class_="add-party")
    for field in PARTY_FORM_FIELDS:
        label_text, input_type = _FIELD_INPUTS[field]
        label = _el(form, "label", label_text)
        _el(
            label,
            "input",
            type=input_type,
            name=field,
            value=draft.get(field, ""),
            required="required",
        )
    _el(form, "button", "Add party", type="submit")
    return form


def render_app(
    state: PlannerState,
    *,
    alert: Optional[str] = None,
    draft: Optional[Mapping[str, str]] = None,
    confirm_delete: bool = False,
) -> ET.Element:
    """Build the whole ``#app`` tree from ``state``."""
    app = _el(None, "div", id="app")
    _el(app, "h1", "Party Planner")
    if alert:
        _el(app, "div", alert, class_="alert", role="alert")
    main = _el(app, "main")

    lineup = _el(main, "section")
    _el(lineup, "h2", "Upcoming Parties")
    lineup.append(party_list(state))

    selected = _el(main, "section", id="selected")
    _el(selected, "h2", "Party Details")
    selected.append(party_details(state, confirm_delete=confirm_delete))

    add = _el(main, "section", id="add-party")
    _el(add, "h2", "Add a new party")
    add.append(party_form(draft))
    return app


def to_document(app: ET.Element, title: str = "Party Planner") -> str:
    """Serialise an ``#app`` tree as a complete HTML document."""
    html = _el(None, "html", lang="en")
    head = _el(html, "head")
    _el(head, "meta", charset="utf-8")
    _el(head, "title", title)
    body = _el(html, "body")
    body.append(app)
    return "<!DOCTYPE html>\n" + ET.tostring(html, encoding="unicode", method="html")


class PageMount:
    """Holds the most recently rendered ``#app`` tree.

    Only state-derived pages are mounted.  One-off views, such as a
    rejected form with its alert, are rendered with ``render_app`` and
    returned directly so they do not outlive the response.
    """

    def __init__(self, state: PlannerState, title: str = "Party Planner") -> None:
        self.state = state
        self.title = title
        self.root: ET.Element = render_app(state)
        self.render_count = 0

    def render(self) -> ET.Element:
        self.root = render_app(self.state)
        self.render_count += 1
        return self.root

    def html(self) -> str:
        return to_document(self.root, self.title)
