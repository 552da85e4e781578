"""Typed parameter models for each voice-agent action."""

from __future__ import annotations

import re
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

E164_PATTERN = re.compile(r"\+[1-9]\d{1,14}", re.ASCII)
E164_HINT = "Phone must be in E164 format (e.g., +15551234567)"

SUPPORTED_ACTIONS = (
    "get_all_bookings",
    "create_booking",
    "cancel_booking",
    "reschedule_booking",
)

# Names used by earlier agent configurations.
LEGACY_ACTION_ALIASES: Dict[str, str] = {
    "find_bookings": "get_all_bookings",
}


class ActionParams(BaseModel):
    """Common behaviour for action parameter bags.

    Agents send camelCase keys and frequently fill unused slots with ``null``
    or ``""``; both count as "not provided".
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: value
                for key, value in data.items()
                if value is not None and value != ""
            }
        return data


class GetAllBookingsParams(ActionParams):
    action: Literal["get_all_bookings"]
    email: Optional[str] = None
    phone_number: Optional[str] = None

    @model_validator(mode="after")
    def _require_lookup_key(self) -> "GetAllBookingsParams":
        if not self.email and not self.phone_number:
            raise ValueError("Must provide 'email' or 'phoneNumber' parameter.")
        return self


class CreateBookingParams(ActionParams):
    action: Literal["create_booking"]
    event_type_id: int = Field(gt=0)
    start_time: str
    attendee_name: str
    attendee_phone: str
    attendee_email: Optional[str] = None
    timezone: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    guests: Optional[List[str]] = None
    length_in_minutes: Optional[int] = Field(default=None, gt=0)

    @field_validator("event_type_id", mode="before")
    @classmethod
    def _zero_event_type_is_missing(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and value == 0:
            raise PydanticCustomError("missing", "Field required")
        return value

    @field_validator("metadata", mode="before")
    @classmethod
    def _ignore_non_mapping_metadata(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None

    @field_validator("guests", mode="before")
    @classmethod
    def _ignore_non_list_guests(cls, value: Any) -> Any:
        return value if isinstance(value, list) else None

    @field_validator("length_in_minutes", mode="before")
    @classmethod
    def _ignore_zero_length(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and value == 0:
            return None
        return value

    @field_validator("attendee_phone")
    @classmethod
    def _check_e164(cls, value: str) -> str:
        if not E164_PATTERN.fullmatch(value):
            raise ValueError(E164_HINT)
        return value


class CancelBookingParams(ActionParams):
    action: Literal["cancel_booking"]
    booking_uid: str
    cancellation_reason: Optional[str] = None
    cancel_subsequent_bookings: Optional[bool] = None


class RescheduleBookingParams(ActionParams):
    action: Literal["reschedule_booking"]
    booking_uid: str
    new_start_time: str
    rescheduling_reason: Optional[str] = None


ActionRequest = Annotated[
    Union[
        GetAllBookingsParams,
        CreateBookingParams,
        CancelBookingParams,
        RescheduleBookingParams,
    ],
    Field(discriminator="action"),
]

ACTION_REQUEST_ADAPTER = TypeAdapter(ActionRequest)
