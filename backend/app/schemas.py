# backend/app/schemas.py
import math
import re
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError, create_model, field_validator

from backend.app.errors import InvalidPayload

DEFAULT_CATEGORY = "Umum"
DEFAULT_TAG_COLOR = "#007bff"
TRANSACTION_TYPES = ("income", "expense")

MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def to_iso(value: datetime) -> str:
    """Render a datetime as UTC ISO-8601 with millisecond precision, e.g. 2025-01-31T08:00:00.000Z."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))


def current_month() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m")


def _number(value, field: str) -> float:
    # JSON numbers only: "10" and true are rejected rather than coerced
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field} must be a number")
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"{field} must be a finite number")
    return value


def _positive(value, field: str) -> float:
    value = _number(value, field)
    if value <= 0:
        raise ValueError(f"{field} must be greater than 0")
    return value


# Pydantic schemas for incoming records (used for validation)
class TransactionIn(BaseModel):
    amount: float
    type: Literal["income", "expense"]
    category: Optional[str] = DEFAULT_CATEGORY
    date: Optional[str] = Field(default_factory=now_iso)
    note: Optional[str] = ""

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v):
        return _positive(v, "amount")

    @field_validator("category")
    @classmethod
    def _category(cls, v):
        return v or DEFAULT_CATEGORY

    @field_validator("date")
    @classmethod
    def _date(cls, v):
        return v or now_iso()

    @field_validator("note")
    @classmethod
    def _note(cls, v):
        return v or ""


class BudgetIn(BaseModel):
    category: Optional[str] = DEFAULT_CATEGORY
    amount: float
    month: Optional[str] = Field(default_factory=current_month)

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v):
        return _positive(v, "amount")

    @field_validator("category")
    @classmethod
    def _category(cls, v):
        return v or DEFAULT_CATEGORY

    @field_validator("month")
    @classmethod
    def _month(cls, v):
        if not v:
            return current_month()
        if not MONTH_RE.match(v):
            raise ValueError("month must look like YYYY-MM")
        return v


class RecurringIn(BaseModel):
    amount: float
    type: Literal["income", "expense"]
    category: Optional[str] = DEFAULT_CATEGORY
    frequency: Literal["daily", "weekly", "monthly", "yearly"]
    note: Optional[str] = ""

    @field_validator("amount", mode="before")
    @classmethod
    def _amount(cls, v):
        return _positive(v, "amount")

    @field_validator("category")
    @classmethod
    def _category(cls, v):
        return v or DEFAULT_CATEGORY

    @field_validator("note")
    @classmethod
    def _note(cls, v):
        return v or ""


class GoalIn(BaseModel):
    name: Optional[str] = None
    targetAmount: float
    currentAmount: Optional[float] = 0
    targetDate: Optional[str] = None

    @field_validator("targetAmount", mode="before")
    @classmethod
    def _target(cls, v):
        return _positive(v, "targetAmount")

    @field_validator("currentAmount", mode="before")
    @classmethod
    def _current(cls, v):
        if v is None:
            return 0
        v = _number(v, "currentAmount")
        if v < 0:
            raise ValueError("currentAmount must not be negative")
        return v

    @field_validator("targetDate")
    @classmethod
    def _target_date(cls, v):
        return v or None


class TagIn(BaseModel):
    name: str
    color: Optional[str] = DEFAULT_TAG_COLOR

    @field_validator("name")
    @classmethod
    def _name(cls, v):
        if not v or not v.strip():
            raise ValueError("name is required")
        return v

    @field_validator("color")
    @classmethod
    def _color(cls, v):
        return v or DEFAULT_TAG_COLOR


SCHEMAS = {
    "entries": TransactionIn,
    "budgets": BudgetIn,
    "recurring": RecurringIn,
    "goals": GoalIn,
    "tags": TagIn,
}


def _patch_schema(schema):
    # Same validators, every field optional, so a partial update checks only what it carries
    fields = {name: (Optional[field.annotation], None) for name, field in schema.model_fields.items()}
    return create_model(f"{schema.__name__}Patch", __base__=schema, **fields)


PATCH_SCHEMAS = {kind: _patch_schema(schema) for kind, schema in SCHEMAS.items()}


def _schema_for(kind: str, registry=SCHEMAS):
    try:
        return registry[kind]
    except KeyError:
        raise ValueError(f"unknown record kind: {kind}") from None


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "payload"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def validate(kind: str, candidate) -> dict:
    """
    Check an incoming record of the given kind and return it normalised,
    with defaults filled in. Raises InvalidPayload on any constraint violation.
    Never assigns id or createdAt; the store does that on insert.
    """
    schema = _schema_for(kind)
    if not isinstance(candidate, dict):
        raise InvalidPayload("payload must be a JSON object")
    try:
        return schema.model_validate(candidate).model_dump()
    except ValidationError as exc:
        raise InvalidPayload(_describe(exc)) from exc


def validate_patch(kind: str, fields) -> dict:
    """Validate only the supplied fields of a partial update; id, createdAt and unknown keys are dropped."""
    schema = _schema_for(kind)
    patch_schema = _schema_for(kind, PATCH_SCHEMAS)
    if not isinstance(fields, dict):
        raise InvalidPayload("payload must be a JSON object")
    supplied = {k: v for k, v in fields.items() if k in schema.model_fields}
    if not supplied:
        return {}
    for name, value in supplied.items():
        field = schema.model_fields[name]
        # null would otherwise fall back to "now" / the current month and move the record
        if value is None and (field.is_required() or field.default_factory is not None):
            raise InvalidPayload(f"{name}: field may not be null")
    try:
        return patch_schema.model_validate(supplied).model_dump(include=set(supplied))
    except ValidationError as exc:
        raise InvalidPayload(_describe(exc)) from exc
