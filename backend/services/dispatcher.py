"""Action resolution and dispatch for voice-agent requests."""

from __future__ import annotations

import logging
from typing import Any, Dict

import httpx
from pydantic import ValidationError

from backend.models.actions import (
    ACTION_REQUEST_ADAPTER,
    LEGACY_ACTION_ALIASES,
    SUPPORTED_ACTIONS,
    ActionRequest,
)
from backend.services.errors import DispatchError
from backend.services.handlers import HANDLERS
from backend.utils.config import Settings
from calendar_service.cal_adapter import CalComAdapter, CalComAPIError

LOGGER = logging.getLogger(__name__)

UNKNOWN_ACTION_MESSAGE = (
    f"Unknown action. Supported actions: {', '.join(SUPPORTED_ACTIONS)}"
)


def resolve_action(payload: Any) -> ActionRequest:
    """Decode an inbound body into the typed parameters of one action.

    Retell-style agents wrap everything in ``{"args": {...}}``; other callers
    post a flat object. The nested container wins when present.
    """

    params = _parameter_bag(payload)
    action = params.get("action")
    if isinstance(action, str):
        action = LEGACY_ACTION_ALIASES.get(action, action)

    if action not in SUPPORTED_ACTIONS:
        LOGGER.warning("Rejected unknown action: %r", action)
        raise DispatchError.validation(UNKNOWN_ACTION_MESSAGE)

    try:
        return ACTION_REQUEST_ADAPTER.validate_python({**params, "action": action})
    except ValidationError as exc:
        message = describe_validation_error(exc)
        LOGGER.info("Validation failed for action=%s: %s", action, message)
        raise DispatchError.validation(message) from exc


def describe_validation_error(exc: ValidationError) -> str:
    """Collapse a pydantic error into one sentence an agent can relay."""

    error = exc.errors()[0]
    loc = error.get("loc") or ()
    # The first element is the union tag, i.e. the action name.
    field = ".".join(str(part) for part in loc[1:]) or "request"

    if error["type"] == "missing":
        return f"Missing '{field}' parameter."
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    return f"Invalid '{field}' parameter: {error['msg']}"


async def dispatch(
    payload: Any,
    client: CalComAdapter,
    settings: Settings,
) -> Dict[str, Any]:
    """Run the requested action against cal.com and return the reply body."""

    request = resolve_action(payload)
    LOGGER.info("Dispatching action=%s", request.action)

    handler = HANDLERS[request.action]
    try:
        return await handler(request, client, settings)
    except CalComAPIError as exc:
        raise DispatchError.upstream(exc.status_code, str(exc), exc.details) from exc
    except httpx.HTTPError as exc:
        LOGGER.error("cal.com unreachable: action=%s error=%r", request.action, exc)
        raise DispatchError.internal(str(exc) or type(exc).__name__) from exc


def _parameter_bag(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        return {}

    nested = payload.get("args")
    if isinstance(nested, dict):
        return {**nested, "action": nested.get("action") or payload.get("action")}
    return payload
