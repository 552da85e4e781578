"""Action handlers translating voice-agent actions into cal.com calls."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from backend.models.actions import (
    CancelBookingParams,
    CreateBookingParams,
    GetAllBookingsParams,
    RescheduleBookingParams,
)
from backend.models.booking import BookingSummary
from backend.utils.config import Settings
from calendar_service.cal_adapter import CalComAdapter
from calendar_service.models import (
    Attendee,
    CancelBookingBody,
    CreateBookingBody,
    RescheduleBookingBody,
)

LOGGER = logging.getLogger(__name__)

Handler = Callable[[Any, CalComAdapter, Settings], Awaitable[Dict[str, Any]]]


async def handle_get_all_bookings(
    params: GetAllBookingsParams,
    client: CalComAdapter,
    settings: Settings,
) -> Dict[str, Any]:
    """List upcoming bookings for the caller, matched by email or phone.

    cal.com's ``attendeeEmail`` filter narrows the page server-side, but the
    result is filtered again here since only the local match is guaranteed.
    """

    bookings = await client.list_upcoming_bookings(
        take=settings.cal_bookings_page_size,
        attendee_email=params.email,
    )
    matches = [
        booking
        for booking in bookings
        if booking_matches(booking, email=params.email, phone=params.phone_number)
    ]
    LOGGER.info("Matched %s of %s upcoming bookings", len(matches), len(bookings))

    summaries = [
        BookingSummary.from_booking(booking).to_payload() for booking in matches
    ]
    return {"count": len(summaries), "bookings": summaries}


async def handle_create_booking(
    params: CreateBookingParams,
    client: CalComAdapter,
    settings: Settings,
) -> Dict[str, Any]:
    """Create a booking for the caller and confirm the start time."""

    attendee = Attendee.for_caller(
        name=params.attendee_name,
        phone=params.attendee_phone,
        time_zone=params.timezone or settings.cal_default_timezone,
        email=params.attendee_email,
        email_domain=settings.placeholder_email_domain,
    )
    body = CreateBookingBody(
        start=params.start_time,
        event_type_id=params.event_type_id,
        attendee=attendee,
        metadata=params.metadata,
        guests=params.guests,
        length_in_minutes=params.length_in_minutes,
    )

    result = await client.create_booking(body)
    booking = _unwrap_booking(result)
    return {
        "success": True,
        "bookingUid": booking.get("uid"),
        "title": booking.get("title"),
        "startTime": booking.get("start"),
        "endTime": booking.get("end"),
        "status": booking.get("status"),
        "confirmationMessage": f"Booking confirmed for {booking.get('start')}",
    }


async def handle_cancel_booking(
    params: CancelBookingParams,
    client: CalComAdapter,
    settings: Settings,
) -> Dict[str, Any]:
    cascade = params.cancel_subsequent_bookings
    if cascade is None and settings.cal_cancel_subsequent_bookings:
        cascade = True

    body = CancelBookingBody(
        cancellation_reason=params.cancellation_reason
        or settings.default_cancellation_reason,
        cancel_subsequent_bookings=cascade,
    )
    result = await client.cancel_booking(params.booking_uid, body)

    response: Dict[str, Any] = {
        "success": True,
        "message": "Booking cancelled successfully",
    }
    if isinstance(result, dict):
        response.update(result)
    return response


async def handle_reschedule_booking(
    params: RescheduleBookingParams,
    client: CalComAdapter,
    settings: Settings,
) -> Dict[str, Any]:
    body = RescheduleBookingBody(
        start=params.new_start_time,
        rescheduling_reason=params.rescheduling_reason,
    )
    result = await client.reschedule_booking(params.booking_uid, body)

    booking = _unwrap_booking(result)
    new_start = booking.get("start") or params.new_start_time
    return {
        "success": True,
        "bookingUid": booking.get("uid") or params.booking_uid,
        "newStartTime": new_start,
        "message": f"Booking rescheduled to {new_start}",
    }


def booking_matches(
    booking: Any,
    *,
    email: Optional[str],
    phone: Optional[str],
) -> bool:
    """True when any attendee shares the email (any case) or exact phone."""

    if not isinstance(booking, dict):
        return False

    attendees: List[Any] = booking.get("attendees") or []
    for attendee in attendees:
        if not isinstance(attendee, dict):
            continue
        attendee_email = attendee.get("email")
        if (
            email
            and isinstance(attendee_email, str)
            and attendee_email.lower() == email.lower()
        ):
            return True
        if phone and attendee.get("phoneNumber") == phone:
            return True
    return False


def _unwrap_booking(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        return {}

    data = payload.get("data")
    # Recurring bookings come back as a list of occurrences.
    if isinstance(data, list):
        data = data[0] if data else None
    if isinstance(data, dict):
        return data
    return payload


HANDLERS: Dict[str, Handler] = {
    "get_all_bookings": handle_get_all_bookings,
    "create_booking": handle_create_booking,
    "cancel_booking": handle_cancel_booking,
    "reschedule_booking": handle_reschedule_booking,
}
