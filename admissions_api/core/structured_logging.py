"""Structured logging helpers."""

import logging
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at process start."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def build_log_context(
    *,
    user_id: str | None = None,
    action: str | None = None,
    resource: str | None = None,
    resource_id: str | None = None,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
) -> dict[str, Any]:
    """Return a log context dict (ids only, never raw PII)."""
    context: dict[str, Any] = {}
    if user_id:
        context["user_id"] = user_id
    if action:
        context["action"] = action
    if resource:
        context["resource"] = resource
    if resource_id:
        context["resource_id"] = resource_id
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    return context
