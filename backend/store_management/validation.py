from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from sqlalchemy import Boolean, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeMeta

from .errors import ValidationError


# DECIMAL(18,2) holds at most 16 integer digits.
MAX_PRICE = Decimal("9999999999999999.99")

# Optional free-text columns where a blank string means "no value".
BLANK_AS_NULL_FIELDS = {"address", "description"}


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: what clients are allowed to set (security boundary)
    - required_on_create: fields required for create and full update payloads
    - reference_fields: payload keys that address a parent by one of ITS columns
      (e.g. company_code -> Company.code); validated against that column
    """
    writable_fields: set[str]
    required_on_create: set[str] = field(default_factory=set)
    reference_fields: dict[str, Any] = field(default_factory=dict)


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _as_int(key: str, value: Any) -> int:
    # bool is an int subclass; true/false is never a code
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        raise ValidationError(f"{key} must be an integer, not a decimal")
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be an integer")

    text = value.strip()
    if "e" in text.lower():
        raise ValidationError(f"{key} must be a plain integer (scientific notation not allowed)")
    if "." in text:
        raise ValidationError(f"{key} must be an integer (no decimals)")
    try:
        return int(text)
    except ValueError:
        raise ValidationError(f"{key} must be an integer")


def _as_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{key} must be true or false")
    return value


def _as_decimal(key: str, value: Any, scale: int) -> Decimal:
    """Quantize to the column scale, as DECIMAL(p, scale) would store it."""
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be a number")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{key} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{key} must be a finite number")
    return amount.quantize(Decimal(1).scaleb(-scale), rounding=ROUND_HALF_UP)


def _coerce_value(key: str, col, value: Any):
    if value is None:
        return None

    coltype = col.type
    if isinstance(coltype, Integer):
        return _as_int(key, value)
    if isinstance(coltype, Boolean):
        return _as_bool(key, value)
    if isinstance(coltype, Numeric):
        return _as_decimal(key, value, coltype.scale or 0)
    if isinstance(coltype, (String, Text)):
        return str(value).strip()
    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - SQLAlchemy column metadata (nullable, type, String length)
    - a policy allowlist (writable_fields)
    - required_on_create (if partial=False)
    Returns a cleaned patch dict with only writable fields.

    partial=False: create / full update semantics (enforce required_on_create)
    partial=True: patch semantics (validate only provided keys, at least one)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    if partial:
        if not payload:
            raise ValidationError("At least one field must be provided")
    else:
        missing = sorted(f for f in policy.required_on_create if f not in payload)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    cols = {**_columns_by_key(model), **policy.reference_fields}

    # Reject unknown / non-writable fields
    for k in payload.keys():
        if k not in policy.writable_fields:
            raise ValidationError(f"Field not allowed: {k}")
        if k not in cols:
            raise ValidationError(f"Unknown field: {k}")

    patch: dict = {}

    for k, raw in payload.items():
        col = cols[k]

        val = _coerce_value(k, col, raw)

        if k in BLANK_AS_NULL_FIELDS and val == "":
            val = None

        # NULL handling
        if val is None:
            if not col.nullable:
                raise ValidationError(f"{k} cannot be null")
            patch[k] = None
            continue

        # Blank string check for non-nullable text fields
        if isinstance(col.type, (String, Text)) and val == "":
            raise ValidationError(f"{k} cannot be blank")

        # Max length check for String(n)
        if isinstance(col.type, String) and col.type.length and isinstance(val, str):
            if len(val) > col.type.length:
                raise ValidationError(f"{k} exceeds max length {col.type.length}")

        patch[k] = val

    return patch


def enforce_rules_product(patch: dict) -> None:
    """
    Business rules that are not captured by SQLAlchemy metadata alone.
    Keep these small and centralized.
    """
    if "price" in patch and patch["price"] is not None:
        price = patch["price"]
        if price < 0:
            raise ValidationError("price must be >= 0")
        if price > MAX_PRICE:
            raise ValidationError(f"price cannot exceed {MAX_PRICE}")
