"""cal.com v2 bookings API adapter."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Dict, List, Optional, Type
from urllib.parse import quote

import httpx

from calendar_service.models import (
    CancelBookingBody,
    CreateBookingBody,
    RescheduleBookingBody,
)

LOGGER = logging.getLogger(__name__)

SERVICE_NAME = "Cal.com"


class CalComAPIError(Exception):
    """Raised when cal.com answers with a non-2xx status."""

    def __init__(self, status_code: int, details: Any) -> None:
        super().__init__(f"{SERVICE_NAME} API error: {status_code}")
        self.status_code = status_code
        self.details = details


class CalComAdapter:
    """Async client for the cal.com bookings endpoints.

    One instance serves a single inbound request: it is built with the
    caller's forwarded API key and closed once the response is produced.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.cal.com/v2",
        api_version: str = "2024-08-13",
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "cal-api-version": api_version,
            },
            timeout=timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "CalComAdapter":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ---------------------------------------------------------------------
    # Public API
    # ---------------------------------------------------------------------
    async def list_upcoming_bookings(
        self,
        *,
        take: int,
        attendee_email: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Return upcoming bookings, optionally narrowed by attendee email."""

        params: Dict[str, Any] = {"status": "upcoming", "take": take}
        if attendee_email:
            params["attendeeEmail"] = attendee_email

        payload = await self._request("GET", "/bookings", params=params)
        return self._coerce_bookings(payload)

    async def create_booking(self, body: CreateBookingBody) -> Dict[str, Any]:
        return await self._request("POST", "/bookings", json=body.to_payload())

    async def cancel_booking(
        self, booking_uid: str, body: CancelBookingBody
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/bookings/{quote(booking_uid, safe='')}/cancel",
            json=body.to_payload(),
        )

    async def reschedule_booking(
        self, booking_uid: str, body: RescheduleBookingBody
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/bookings/{quote(booking_uid, safe='')}/reschedule",
            json=body.to_payload(),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._client.request(method, path, **kwargs)
        LOGGER.info(
            "cal.com %s %s -> %s",
            method,
            path,
            response.status_code,
        )

        if not response.is_success:
            details = self._error_details(response)
            LOGGER.warning(
                "cal.com request failed: status=%s body=%s",
                response.status_code,
                response.text,
            )
            raise CalComAPIError(response.status_code, details)

        return response.json()

    @staticmethod
    def _error_details(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _coerce_bookings(payload: Any) -> List[Dict[str, Any]]:
        if not isinstance(payload, dict):
            return []

        data = payload.get("data")
        if isinstance(data, list):
            return data

        # Older API responses nest the list one level deeper.
        if isinstance(data, dict) and isinstance(data.get("bookings"), list):
            return data["bookings"]

        return []
