"""Unit tests for action resolution and parameter validation."""

import pytest

from backend.models.actions import (
    CancelBookingParams,
    CreateBookingParams,
    GetAllBookingsParams,
    RescheduleBookingParams,
)
from backend.services.dispatcher import UNKNOWN_ACTION_MESSAGE, resolve_action
from backend.services.errors import DispatchError, ErrorKind

CREATE_ARGS = {
    "action": "create_booking",
    "eventTypeId": 12,
    "startTime": "2025-11-23T14:00:00Z",
    "attendeeName": "Jo",
    "attendeePhone": "+15551234567",
}


def _validation_message(payload) -> str:
    with pytest.raises(DispatchError) as info:
        resolve_action(payload)
    assert info.value.kind is ErrorKind.VALIDATION
    assert info.value.status_code == 400
    return info.value.message


def test_nested_args_take_precedence_over_flat_fields() -> None:
    request = resolve_action(
        {
            "action": "get_all_bookings",
            "email": "flat@example.com",
            "args": {"action": "cancel_booking", "bookingUid": "abc123"},
        }
    )

    assert isinstance(request, CancelBookingParams)
    assert request.booking_uid == "abc123"


def test_flat_shape_is_used_without_args() -> None:
    request = resolve_action({"action": "reschedule_booking", "bookingUid": "u1", "newStartTime": "2025-12-01T09:00:00Z"})

    assert isinstance(request, RescheduleBookingParams)
    assert request.new_start_time == "2025-12-01T09:00:00Z"
    assert request.rescheduling_reason is None


def test_top_level_action_applies_to_nested_parameters() -> None:
    request = resolve_action(
        {"action": "cancel_booking", "args": {"bookingUid": "abc123"}}
    )

    assert isinstance(request, CancelBookingParams)
    assert request.booking_uid == "abc123"


def test_legacy_find_bookings_alias() -> None:
    request = resolve_action({"action": "find_bookings", "email": "jo@example.com"})

    assert isinstance(request, GetAllBookingsParams)
    assert request.action == "get_all_bookings"


@pytest.mark.parametrize(
    "payload",
    [
        {"action": "foo"},
        {"args": {"action": "delete_everything"}},
        {},
        {"args": "create_booking"},
        ["create_booking"],
        "create_booking",
        None,
        {"action": {"name": "create_booking"}},
    ],
)
def test_unrecognized_payloads_fail_cleanly(payload) -> None:
    assert _validation_message(payload) == UNKNOWN_ACTION_MESSAGE


def test_unknown_action_message_lists_actions() -> None:
    assert UNKNOWN_ACTION_MESSAGE == (
        "Unknown action. Supported actions: get_all_bookings, create_booking, "
        "cancel_booking, reschedule_booking"
    )


def test_numeric_strings_become_integers() -> None:
    request = resolve_action({**CREATE_ARGS, "eventTypeId": "12", "lengthInMinutes": "45"})

    assert isinstance(request, CreateBookingParams)
    assert request.event_type_id == 12
    assert request.length_in_minutes == 45


@pytest.mark.parametrize(
    "field", ["eventTypeId", "startTime", "attendeeName", "attendeePhone"]
)
def test_create_booking_requires_fields(field: str) -> None:
    payload = {key: value for key, value in CREATE_ARGS.items() if key != field}

    assert _validation_message(payload) == f"Missing '{field}' parameter."


def test_missing_fields_are_reported_in_order() -> None:
    message = _validation_message({"action": "create_booking", "attendeePhone": "bad"})

    assert message == "Missing 'eventTypeId' parameter."


def test_blank_values_count_as_missing() -> None:
    message = _validation_message({**CREATE_ARGS, "attendeeName": ""})

    assert message == "Missing 'attendeeName' parameter."


def test_optional_blank_values_are_dropped() -> None:
    request = resolve_action({**CREATE_ARGS, "attendeeEmail": "", "timezone": None})

    assert request.attendee_email is None
    assert request.timezone is None


def test_malformed_event_type_id() -> None:
    message = _validation_message({**CREATE_ARGS, "eventTypeId": "twelve"})

    assert message.startswith("Invalid 'eventTypeId' parameter:")


def test_non_positive_length_is_rejected() -> None:
    message = _validation_message({**CREATE_ARGS, "lengthInMinutes": -15})

    assert message.startswith("Invalid 'lengthInMinutes' parameter:")


def test_get_all_bookings_requires_email_or_phone() -> None:
    message = _validation_message({"action": "get_all_bookings"})

    assert message == "Must provide 'email' or 'phoneNumber' parameter."


def test_get_all_bookings_accepts_phone_only() -> None:
    request = resolve_action({"action": "get_all_bookings", "phoneNumber": "+15551234567"})

    assert request.email is None
    assert request.phone_number == "+15551234567"


def test_cancel_requires_booking_uid() -> None:
    message = _validation_message({"action": "cancel_booking", "cancellationReason": "sick"})

    assert message == "Missing 'bookingUid' parameter."


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("metadata", "vip"),
        ("metadata", ["vip"]),
        ("guests", "guest@example.com"),
        ("guests", {"email": "guest@example.com"}),
        ("lengthInMinutes", 0),
    ],
)
def test_unusable_optional_fields_are_left_out(field: str, value) -> None:
    request = resolve_action({**CREATE_ARGS, field: value})

    assert isinstance(request, CreateBookingParams)
    assert request.metadata is None
    assert request.guests is None
    assert request.length_in_minutes is None


def test_zero_event_type_id_counts_as_missing() -> None:
    message = _validation_message({**CREATE_ARGS, "eventTypeId": 0})

    assert message == "Missing 'eventTypeId' parameter."


def test_negative_event_type_id_is_rejected() -> None:
    message = _validation_message({**CREATE_ARGS, "eventTypeId": -3})

    assert message.startswith("Invalid 'eventTypeId' parameter:")
