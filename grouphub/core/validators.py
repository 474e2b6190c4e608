"""Request validation for GroupHub.

Payloads are parsed with pydantic models, one per operation mode. Pydantic
errors are translated into field-scoped, localized messages so that a failed
validation renders as ``{"errors": {field: [messages...]}}``.

Each validator returns a ``ValidationResult``: either the normalized data
(restricted to the declared fields) or the error mapping, never both.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Annotated, Any, Callable, Dict, List, Literal, Optional, Type

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    ValidationError as PydanticValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from grouphub.core.exceptions import ValidationError
from grouphub.core.rbac.roles import role_keys


class Mode(str, Enum):
    """Operation mode a payload is validated for."""

    CREATE = "create"
    UPDATE = "update"


@dataclass
class ValidationResult:
    """Validated data or field errors. Exactly one of the two is populated."""

    data: Optional[Dict[str, Any]] = None
    errors: Optional[Dict[str, List[str]]] = None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> Dict[str, Any]:
        """Return the validated data or raise ValidationError."""
        if self.errors:
            raise ValidationError(self.errors)
        return self.data


# Pydantic error type -> rule name used in message keys
ERROR_RULES = {
    "missing": "required",
    "string_type": "string",
    "string_too_short": "min",
    "string_too_long": "max",
    "value_error": "email",  # raised by EmailStr
    "literal_error": "in",
    "int_type": "integer",
    "int_parsing": "integer",
    "int_from_float": "integer",
    "date_type": "date",
    "date_parsing": "date",
    "date_from_datetime_parsing": "date",
    "date_from_datetime_inexact": "date",
    "list_type": "array",
    "too_short": "min_items",
    "model_type": "object",
    "dict_type": "object",
}

DEFAULT_MESSAGES = {
    "required": "O campo {field} é obrigatório.",
    "string": "O campo {field} deve ser uma string.",
    "min": "O campo {field} deve ter no mínimo {min_length} caracteres.",
    "max": "O campo {field} deve ter no máximo {max_length} caracteres.",
    "email": "O campo {field} deve ser um e-mail válido.",
    "in": "O valor passado em {field} nao existe",
    "integer": "O campo {field} deve ser um número inteiro.",
    "date": "O campo {field} deve ser uma data válida.",
    "after_or_equal": "O campo {field} deve ser uma data igual ou posterior a entry_date.",
    "array": "O campo {field} deve ser uma lista.",
    "min_items": "O campo {field} deve conter ao menos {min_length} item(s).",
    "object": "O campo {field} deve ser um objeto.",
    "prohibited": "Esse campo não pode ser atualizado",
    "unique": "Esse {field} ja esta cadastrado",
}


def _known_role_key(value: int) -> int:
    if value not in role_keys():
        raise PydanticCustomError("in", "unknown role key")
    return value


RoleKey = Annotated[int, AfterValidator(_known_role_key)]
UserName = Annotated[str, Field(min_length=4, max_length=255)]
Text = Annotated[str, Field(min_length=1, max_length=255)]
# Passwords are taken verbatim
Password = Annotated[str, StringConstraints(strip_whitespace=False, min_length=8, max_length=128)]
GroupStatus = Literal["EM ANDAMENTO", "FINALIZADO"]
TypeGroupKind = Literal["INTERNO", "EXTERNO"]


class _Payload(BaseModel):
    # Unknown fields are dropped; surrounding blanks are not content
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


# Users

class UserCreatePayload(_Payload):
    name: UserName
    email: EmailStr
    type_user_id: RoleKey
    password: Optional[Password] = None


class UserUpdatePayload(_Payload):
    name: UserName = None
    email: EmailStr = None
    type_user_id: Any = None
    password: Password = None

    @field_validator("type_user_id", mode="before")
    @classmethod
    def _prohibited(cls, value):
        raise PydanticCustomError("prohibited", "field cannot be updated")


# Groups

class GroupCreatePayload(_Payload):
    entity: Text
    organ: Text
    council: Text
    acronym: Text
    team: Text
    unit: Text
    email: EmailStr
    office_requested: Optional[str] = None
    office_indicated: Optional[str] = None
    internal_concierge: Optional[str] = None
    observations: Optional[str] = None
    status: GroupStatus
    representative: EmailStr
    name: Text
    type_group: TypeGroupKind


class GroupUpdatePayload(_Payload):
    entity: Text = None
    organ: Text = None
    council: Text = None
    acronym: Text = None
    team: Text = None
    unit: Text = None
    email: EmailStr = None
    office_requested: Optional[str] = None
    office_indicated: Optional[str] = None
    internal_concierge: Optional[str] = None
    observations: Optional[str] = None
    status: GroupStatus = None
    representative: EmailStr = None
    name: Text = None
    type_group: TypeGroupKind = None


# Members

def _departure_after_entry(value: Optional[date], info: ValidationInfo) -> Optional[date]:
    entry_date = info.data.get("entry_date")
    if value is not None and entry_date is not None and value < entry_date:
        raise PydanticCustomError("after_or_equal", "departure before entry")
    return value


DepartureDate = Annotated[Optional[date], AfterValidator(_departure_after_entry)]


class MemberEntryPayload(_Payload):
    email: EmailStr
    role: Text
    phone: Optional[str] = None
    entry_date: Optional[date] = None
    departure_date: DepartureDate = None


class MemberBatchPayload(_Payload):
    members: List[MemberEntryPayload] = Field(min_length=1)


class MemberEditPayload(_Payload):
    role: Text = None
    phone: Optional[str] = None
    entry_date: Optional[date] = None
    departure_date: DepartureDate = None


class RequestValidator:
    """Validates a raw payload for a given mode.

    Subclasses declare one pydantic model per mode and may override
    ``messages`` (keyed ``"<field>.<rule>"``) and ``extra_checks``.
    """

    models: Dict[Mode, Type[BaseModel]] = {}
    messages: Dict[str, str] = {}

    def validate(self, payload: Any, mode: Mode = Mode.CREATE) -> ValidationResult:
        if not isinstance(payload, dict):
            return ValidationResult(errors={"payload": ["O corpo da requisição deve ser um objeto JSON."]})

        model = self.models[mode]
        data: Optional[Dict[str, Any]] = None
        errors: Dict[str, List[str]] = {}
        try:
            data = model.model_validate(payload).model_dump(exclude_unset=True)
        except PydanticValidationError as exc:
            errors = self._collect(exc)

        for field, message in self.extra_checks(payload, data, errors, mode):
            errors.setdefault(field, []).append(message)

        if errors:
            return ValidationResult(errors=errors)
        return ValidationResult(data=data)

    def extra_checks(
        self,
        payload: Dict[str, Any],
        data: Optional[Dict[str, Any]],
        errors: Dict[str, List[str]],
        mode: Mode,
    ) -> List[tuple]:
        """Checks that need collaborators (e.g. storage). Returns (field, message) pairs."""
        return []

    def message_for(self, field: str, rule: str, ctx: Optional[Dict[str, Any]] = None) -> str:
        custom = self.messages.get(f"{field}.{rule}")
        if custom:
            return custom
        template = DEFAULT_MESSAGES.get(rule, "O campo {field} é inválido.")
        try:
            return template.format(field=field, **(ctx or {}))
        except KeyError:
            return f"O campo {field} é inválido."

    def _collect(self, exc: PydanticValidationError) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        for error in exc.errors():
            loc = [str(part) for part in error["loc"]] or ["payload"]
            field = loc[-1]
            rule = ERROR_RULES.get(error["type"], error["type"])
            blank = isinstance(error.get("input"), str) and not error["input"].strip()
            if rule == "min" and blank:
                rule = "required"
            message = self.message_for(field, rule, error.get("ctx"))
            key = ".".join(loc)
            if message not in errors.get(key, []):
                errors.setdefault(key, []).append(message)
        return errors


EmailExists = Callable[[str, Optional[int]], bool]


class UserRequestValidator(RequestValidator):
    """Validates user payloads.

    ``email_exists(email, exclude_id)`` is the uniqueness collaborator. On
    update, ``exclude_id`` is the id of the user being edited so that
    re-submitting one's own e-mail is not rejected.
    """

    models = {
        Mode.CREATE: UserCreatePayload,
        Mode.UPDATE: UserUpdatePayload,
    }
    messages = {
        "name.required": "O campo nome é obrigatório.",
        "name.string": "O campo nome deve ser uma string.",
        "name.min": "O campo nome deve ter no mínimo 4 caracteres.",
        "email.email": "Email invalido.",
        "email.required": "O campo e-mail e obrigatório.",
        "email.string": "O campo email deve ser uma string.",
        "email.unique": "Esse e-mail ja esta cadastrado",
        "type_user_id.required": "O campo type_user_id é obrigatório.",
        "type_user_id.in": "O valor passado em type_user_id nao existe",
        "type_user_id.integer": "O valor passado em type_user_id nao existe",
        "type_user_id.prohibited": "Esse campo não pode ser atualizado",
    }

    def __init__(self, email_exists: EmailExists, exclude_id: Optional[int] = None):
        self.email_exists = email_exists
        self.exclude_id = exclude_id

    def extra_checks(self, payload, data, errors, mode):
        if "email" in errors:
            return []
        source = data if data is not None else payload
        email = source.get("email")
        if not isinstance(email, str):
            return []
        if self.email_exists(email, self.exclude_id):
            return [("email", self.message_for("email", "unique"))]
        return []


class GroupRequestValidator(RequestValidator):
    """Validates group payloads."""

    models = {
        Mode.CREATE: GroupCreatePayload,
        Mode.UPDATE: GroupUpdatePayload,
    }
    messages = {
        "email.email": "Email invalido.",
        "representative.email": "O e-mail do representante é inválido.",
        "status.in": "O status deve ser EM ANDAMENTO ou FINALIZADO.",
        "type_group.in": "O tipo do grupo deve ser INTERNO ou EXTERNO.",
    }


class MemberRequestValidator(RequestValidator):
    """Validates member payloads: CREATE is the bulk payload, UPDATE an edit."""

    models = {
        Mode.CREATE: MemberBatchPayload,
        Mode.UPDATE: MemberEditPayload,
    }
    messages = {
        "email.email": "Email invalido.",
        "email.required": "O campo e-mail e obrigatório.",
        "role.required": "O campo role é obrigatório.",
    }
