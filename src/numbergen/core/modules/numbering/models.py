"""Number format configuration and system defaults."""

from datetime import datetime
from enum import StrEnum
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from numbergen.core.modules.numbering.template import MAX_WIDTH
from numbergen.utils import ensure_aware


class NumberType(StrEnum):
    """Business objects that receive a human-facing sequential number."""

    WORK_ORDER = "workOrder"
    INVOICE = "invoice"
    CLIENT = "client"
    SCHEDULING = "scheduling"
    CONTRACT = "contract"


class ResetPeriod(StrEnum):
    """How often a counter returns to 1, compared by calendar component."""

    NEVER = "never"
    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class NumberFormatConfig(BaseModel):
    """Format and counter state for one number type of one tenant."""

    format: str = Field(..., min_length=1, description="Template, e.g. 'WO-{YEAR}-{COUNTER:5}'")
    counter: int = Field(1, ge=1, description="Next value to be consumed")
    padding: int = Field(5, ge=0, le=MAX_WIDTH, description="Zero-padding width for {COUNTER} without explicit width")
    reset_period: ResetPeriod = ResetPeriod.NEVER
    last_reset: datetime = Field(..., description="When the counter was last reset to 1")
    prefix: str = Field("", description="Informational label only; {PREFIX} always renders empty")

    model_config = ConfigDict(use_enum_values=True, extra="forbid")

    @field_validator("last_reset")
    @classmethod
    def _aware_last_reset(cls, value: datetime) -> datetime:
        return ensure_aware(value)


# camelCase names used by older clients and records
FIELD_ALIASES = {"resetPeriod": "reset_period", "lastReset": "last_reset"}


def normalize_fields(raw: dict[str, Any]) -> dict[str, Any]:
    """Rename camelCase config keys to their field names."""
    return {FIELD_ALIASES.get(key, key): value for key, value in raw.items()}


DEFAULT_FORMATS: dict[str, dict[str, Any]] = {
    NumberType.WORK_ORDER: {"format": "WO-{YEAR}-{COUNTER:5}", "prefix": "WO", "padding": 5, "reset_period": "never"},
    NumberType.INVOICE: {"format": "INV-{YEAR}{MONTH}-{COUNTER:4}", "prefix": "INV", "padding": 4, "reset_period": "monthly"},
    NumberType.CLIENT: {"format": "CLIENT-{COUNTER:6}", "prefix": "CLIENT", "padding": 6, "reset_period": "never"},
    NumberType.SCHEDULING: {"format": "SCH-{COUNTER:5}", "prefix": "SCH", "padding": 5, "reset_period": "never"},
    NumberType.CONTRACT: {"format": "CONT-{YEAR}-{COUNTER:4}", "prefix": "CONT", "padding": 4, "reset_period": "yearly"},
}


def default_formats(last_reset: datetime) -> dict[str, NumberFormatConfig]:
    """System defaults, materialized with a fresh counter and the given `last_reset`."""
    return {
        str(number_type): NumberFormatConfig(**defaults, counter=1, last_reset=last_reset)
        for number_type, defaults in DEFAULT_FORMATS.items()
    }


def merge_with_defaults(stored: dict[str, dict[str, Any]], default_last_reset: datetime) -> dict[str, NumberFormatConfig]:
    """Merge stored per-type configs over the system defaults.

    Every built-in type is present in the result. For built-in types, stored fields win
    field by field, so partially stored configs (older tenants) are completed from the
    defaults; a stored field that does not validate (e.g. counter 0) falls back to the
    default value. Custom types are kept when they are valid on their own, and dropped
    otherwise.
    """
    merged = default_formats(default_last_reset)
    for number_type, raw in stored.items():
        fields = normalize_fields(raw)
        base = merged.get(number_type)
        if base is not None:
            merged[number_type] = _merge_fields(base, fields)
            continue
        try:
            merged[number_type] = NumberFormatConfig.model_validate(fields)
        except pydantic.ValidationError:
            continue
    return merged


def _merge_fields(base: NumberFormatConfig, fields: dict[str, Any]) -> NumberFormatConfig:
    values = base.model_dump()
    for key, value in fields.items():
        candidate = values | {key: value}
        try:
            NumberFormatConfig.model_validate(candidate)
        except pydantic.ValidationError:
            continue
        values = candidate
    return NumberFormatConfig.model_validate(values)
