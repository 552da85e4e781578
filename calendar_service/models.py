"""Request bodies sent to the cal.com v2 bookings API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CalComBody(BaseModel):
    """Base for outbound payloads; unset optional fields are never sent."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def placeholder_email(phone: str, domain: str) -> str:
    """Derive a stable attendee email from an E.164 phone number.

    cal.com requires an attendee email, which voice callers rarely dictate.
    """

    return f"{phone.removeprefix('+')}@{domain}"


class Attendee(CalComBody):
    name: str
    email: str
    time_zone: str
    phone_number: Optional[str] = None

    @classmethod
    def for_caller(
        cls,
        *,
        name: str,
        phone: str,
        time_zone: str,
        email: Optional[str],
        email_domain: str,
    ) -> "Attendee":
        return cls(
            name=name,
            email=email or placeholder_email(phone, email_domain),
            time_zone=time_zone,
            phone_number=phone,
        )


class CreateBookingBody(CalComBody):
    start: str
    event_type_id: int
    attendee: Attendee
    metadata: Optional[Dict[str, Any]] = None
    guests: Optional[List[str]] = None
    length_in_minutes: Optional[int] = None


class CancelBookingBody(CalComBody):
    cancellation_reason: str
    cancel_subsequent_bookings: Optional[bool] = None


class RescheduleBookingBody(CalComBody):
    start: str
    rescheduling_reason: Optional[str] = None
