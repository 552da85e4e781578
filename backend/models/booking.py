"""Narration-friendly booking projection."""

from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BookingSummary(BaseModel):
    """The subset of a cal.com booking a voice agent reads back."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    uid: Any = None
    title: Any = None
    start_time: Any = None
    end_time: Any = None
    status: Any = None

    @classmethod
    def from_booking(cls, booking: Dict[str, Any]) -> "BookingSummary":
        return cls(
            uid=booking.get("uid"),
            title=booking.get("title"),
            start_time=booking.get("start"),
            end_time=booking.get("end"),
            status=booking.get("status"),
        )

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
