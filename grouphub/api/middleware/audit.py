"""Audit logging middleware for FastAPI.

Logs every API request with:
- Request ID (also returned in the X-Request-ID header)
- Action performed (HTTP method + path)
- Resource type and ID
- Response status and duration
- Client IP address
- Authenticated user ID
- Request body, with sensitive fields redacted
"""

import json
import logging
import time
import uuid
from typing import Any, Callable, Optional, Tuple

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from grouphub.core.logger import get_logger

logger = get_logger("grouphub.audit")


# Map HTTP methods to action names
METHOD_TO_ACTION = {
    "GET": "read",
    "POST": "create",
    "PUT": "update",
    "PATCH": "update",
    "DELETE": "delete",
}

# Paths that should not be logged (health checks, docs)
EXCLUDED_PATHS = {
    "/health",
    "/health/ready",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
}

# Sensitive fields to redact from logs
SENSITIVE_FIELDS = {
    "password",
    "password_hash",
    "token",
    "access_token",
    "secret",
}


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        # First entry is the original client
        return forwarded.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"


def extract_resource_info(path: str) -> Tuple[str, Optional[int]]:
    """
    Extract resource type and ID from request path.

    ``/api/group/7/members/3`` yields ``("members", 3)``; ``/api/users/restore/5``
    yields ``("users", 5)``.

    Returns:
        Tuple of (resource_type, resource_id)
    """
    parts = [p for p in path.strip("/").split("/") if p]

    if parts and parts[0] == "api":
        parts = parts[1:]

    if not parts:
        return "api", None

    resource_type = parts[0]
    resource_id = None

    for part in parts[1:]:
        if part.isdigit():
            resource_id = int(part)
        else:
            # Nested collection takes over as the resource
            if part != "restore":
                resource_type = part
                resource_id = None

    return resource_type, resource_id


def redact_sensitive(data: Any) -> Any:
    """Redact sensitive fields from data."""
    if isinstance(data, dict):
        return {
            k: "[REDACTED]" if str(k).lower() in SENSITIVE_FIELDS else redact_sensitive(v)
            for k, v in data.items()
        }
    elif isinstance(data, list):
        return [redact_sensitive(item) for item in data]
    return data


def determine_level(status_code: int) -> int:
    """Determine log level based on response status."""
    if status_code >= 500:
        return logging.ERROR
    if status_code in (401, 403):
        return logging.WARNING
    return logging.INFO


class AuditMiddleware(BaseHTTPMiddleware):
    """
    Middleware that writes one audit log record per API request.

    The user ID is taken from ``request.state.user``, which the
    authentication dependency sets once the bearer token is resolved.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in EXCLUDED_PATHS:
            return await call_next(request)

        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()

        client_ip = get_client_ip(request)
        resource_type, resource_id = extract_resource_info(request.url.path)
        action = METHOD_TO_ACTION.get(request.method, request.method.lower())

        request_body = None
        if request.method in ("POST", "PUT", "PATCH"):
            body_bytes = await request.body()
            if body_bytes:
                try:
                    request_body = redact_sensitive(json.loads(body_bytes))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    request_body = {"raw_size": len(body_bytes)}

        response = await call_next(request)

        duration_ms = int((time.time() - start_time) * 1000)
        user = getattr(request.state, "user", None)

        logger.log(
            determine_level(response.status_code),
            "request_id=%s action=%s method=%s path=%s resource=%s resource_id=%s "
            "status=%s duration_ms=%s ip=%s user_id=%s body=%s",
            request_id,
            action,
            request.method,
            request.url.path,
            resource_type,
            resource_id,
            response.status_code,
            duration_ms,
            client_ip,
            user.id if user else None,
            json.dumps(request_body, default=str) if request_body is not None else None,
        )

        response.headers["X-Request-ID"] = request_id
        return response
