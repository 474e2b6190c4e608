"""API middleware for GroupHub."""

from grouphub.api.middleware.audit import AuditMiddleware

__all__ = ["AuditMiddleware"]
