"""Exception taxonomy for GroupHub.

Each error carries the HTTP status it maps to and renders its own response
body, so the API layer only needs a single handler per family.
"""

from typing import Any, Dict, List

UNAUTHORIZED_MESSAGE = "This action is unauthorized."
UNAUTHENTICATED_MESSAGE = "Unauthenticated."
PERSISTENCE_MESSAGE = "Erro interno ao processar a requisição."


class GroupHubError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = 500

    def payload(self) -> Dict[str, Any]:
        return {"errors": str(self)}


class ValidationError(GroupHubError):
    """Field-scoped validation failure (422)."""

    status_code = 422

    def __init__(self, errors: Dict[str, List[str]]):
        self.errors = errors
        super().__init__(", ".join(sorted(errors)))

    def payload(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class AuthorizationError(GroupHubError):
    """Policy denial (403). The message never names the failed check."""

    status_code = 403

    def __init__(self, message: str = UNAUTHORIZED_MESSAGE):
        super().__init__(message)


class AuthenticationError(GroupHubError):
    """Missing or invalid credentials (401)."""

    status_code = 401

    def __init__(self, message: str = UNAUTHENTICATED_MESSAGE):
        super().__init__(message)


class NotFoundError(GroupHubError):
    """Target resource does not exist (404)."""

    status_code = 404

    def __init__(self, entity: str = "Registro"):
        self.entity = entity
        super().__init__(f"{entity} não encontrado")


class PersistenceError(GroupHubError):
    """Storage failure (500). The underlying cause is logged, not returned."""

    status_code = 500

    def __init__(self, message: str = PERSISTENCE_MESSAGE):
        super().__init__(message)


class NotificationError(GroupHubError):
    """E-mail delivery failed (502)."""

    status_code = 502

    def __init__(self, message: str = "Falha ao enviar o e-mail de cadastro."):
        super().__init__(message)
