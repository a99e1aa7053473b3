"""
Application state for the admin page.

``PlannerState`` is the single owner of everything the page shows: the
last fetched parties, guests and RSVPs, and the currently selected
party.  The renderer only reads it; ``PlannerController`` is the only
writer and replaces each collection wholesale after a successful fetch.
One instance lives for as long as the application does.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from party_planner.schemas import Guest, Party, Rsvp


@dataclass
class PlannerState:
    parties: List[Party] = field(default_factory=list)
    guests: List[Guest] = field(default_factory=list)
    rsvps: List[Rsvp] = field(default_factory=list)
    selected_party: Optional[Party] = None
    # Sequence number of the most recent selection request.
    selection_seq: int = 0

    def replace_parties(self, parties: List[Party]) -> None:
        self.parties = list(parties)

    def replace_guests_and_rsvps(self, guests: List[Guest], rsvps: List[Rsvp]) -> None:
        self.guests = list(guests)
        self.rsvps = list(rsvps)

    def select(self, party: Optional[Party]) -> None:
        self.selected_party = party

    def next_selection_seq(self) -> int:
        self.selection_seq += 1
        return self.selection_seq

    def find_party(self, party_id: int) -> Optional[Party]:
        for party in self.parties:
            if party.id == party_id:
                return party
        return None

    def guest_by_id(self) -> Dict[int, Guest]:
        return {guest.id: guest for guest in self.guests}

    def rsvps_for(self, party_id: int) -> List[Rsvp]:
        """RSVPs for ``party_id`` in store order, duplicates included."""
        return [rsvp for rsvp in self.rsvps if rsvp.event_id == party_id]
