"""Catch-all endpoint receiving voice-agent tool calls."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from backend.services.dispatcher import dispatch
from backend.services.errors import DispatchError
from backend.utils.config import Settings, get_settings
from calendar_service.cal_adapter import CalComAdapter

LOGGER = logging.getLogger(__name__)

CREDENTIAL_HEADER = "X-Cal-Api-Key"

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST",
    "Access-Control-Allow-Headers": f"Content-Type, {CREDENTIAL_HEADER}",
}

ALL_METHODS = [
    "GET",
    "HEAD",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "OPTIONS",
    "TRACE",
    "CONNECT",
]

router = APIRouter()


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for cal.com requests; ``None`` means the network default."""

    return None


@router.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
async def handle_agent_request(
    request: Request,
    settings: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
) -> Response:
    """Validate the envelope, run the action and shape the reply."""

    if request.method == "OPTIONS":
        return Response(headers=CORS_HEADERS)
    if request.method != "POST":
        return PlainTextResponse("Method Not Allowed", status_code=405)

    api_key = request.headers.get(CREDENTIAL_HEADER)
    if not api_key:
        return _error_response(
            DispatchError.unauthenticated(f"Missing {CREDENTIAL_HEADER} header")
        )

    try:
        payload: Any = json.loads(await request.body())
    except ValueError as exc:
        LOGGER.info("Rejected malformed JSON body: %s", exc)
        return _error_response(DispatchError.internal(str(exc)))

    try:
        async with CalComAdapter(
            api_key=api_key,
            base_url=settings.cal_api_base_url,
            api_version=settings.cal_api_version,
            timeout_seconds=settings.cal_timeout_seconds,
            transport=transport,
        ) as client:
            body = await dispatch(payload, client, settings)
    except DispatchError as exc:
        return _error_response(exc)
    except Exception as exc:
        LOGGER.exception("Unhandled failure while processing agent request")
        return _error_response(DispatchError.internal(str(exc)))

    return JSONResponse(body)


def _error_response(error: DispatchError) -> JSONResponse:
    return JSONResponse(error.to_body(), status_code=error.status_code)
