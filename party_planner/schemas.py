"""
Pydantic models for party data.

These schemas describe the records exchanged with the remote party
data service.  ``Party``, ``Guest`` and ``Rsvp`` are read models built
from the ``data`` envelope of service responses; ``PartyCreate`` is the
request body for creating a party and normalises its date to the
canonical timestamp form the service stores.
"""

from datetime import date as date_type, datetime, time, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Fields the add-party form must supply, in display order.
PARTY_FORM_FIELDS = ("name", "description", "date", "location")


def to_timestamp(value: Any) -> str:
    """Return ``value`` as a UTC timestamp like ``2025-12-01T00:00:00.000Z``.

    Accepts ``date`` and ``datetime`` objects as well as ISO strings.  A
    bare date is taken as midnight UTC; naive datetimes are assumed to
    be UTC already.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        if "T" in text or " " in text:
            value = datetime.fromisoformat(text)
        else:
            value = date_type.fromisoformat(text)
    if not isinstance(value, datetime):
        if not isinstance(value, date_type):
            raise ValueError(f"cannot convert {value!r} to a timestamp")
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class Party(BaseModel):
    id: int
    name: str
    date: datetime
    description: str = ""
    location: str = ""

    model_config = ConfigDict(extra="ignore")


class Guest(BaseModel):
    """A person who may RSVP to parties.  Extra service fields are ignored."""

    id: int
    name: str

    model_config = ConfigDict(extra="ignore")


class Rsvp(BaseModel):
    """Join record between a party and a guest.

    The service uses camelCase keys (``eventId``, ``guestId``); the
    attributes are snake_case and either spelling is accepted.
    """

    id: int
    event_id: int = Field(alias="eventId")
    guest_id: int = Field(alias="guestId")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PartyCreate(BaseModel):
    """Schema for creating a party.

    Every field is required and must contain something other than
    whitespace.  ``date`` is converted to a full UTC timestamp before it
    is sent to the service.
    """

    name: str
    description: str
    date: str
    location: str

    @field_validator("name", "description", "location")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def normalise_date(cls, value: Any) -> str:
        if isinstance(value, str) and not value.strip():
            raise ValueError("must not be empty")
        return to_timestamp(value)

    def to_payload(self) -> Dict[str, str]:
        return self.model_dump()
