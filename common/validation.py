"""Validation primitives for plugin APIs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, TypeVar

import pydantic
from pydantic import BaseModel


class ValidationError(ValueError):
    """Raised when validation fails."""

    def __init__(self, message: str, *, details: Any | None = None):
        super().__init__(message)
        self.details = details


class SchemaModel(BaseModel):
    """Strict base model for request/response validation."""

    model_config = pydantic.ConfigDict(extra="forbid", str_strip_whitespace=True)


TModel = TypeVar("TModel", bound=SchemaModel)


def parse_model(model: type[TModel], payload: Mapping[str, Any] | None) -> TModel:
    payload = payload or {}
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(
            "Invalid request payload",
            details=exc.errors(include_url=False, include_context=False),
        ) from exc


def _setting_int(settings: Mapping[str, Any] | None, key: str, default: int) -> int:
    if not settings:
        return default
    try:
        value = int(float(settings.get(key)))
    except (TypeError, ValueError):
        return default
    return max(value, 1)


@dataclass(slots=True)
class RangeLimit:
    """Upper limits applied to page range requests."""

    max_spec_length: int
    max_page_count: int
    max_plan_items: int
    max_plan_pages: int

    @classmethod
    def from_settings(
        cls,
        settings: Mapping[str, Any] | None,
        *,
        default_max_spec_length: int,
        default_max_page_count: int,
        default_max_plan_items: int,
        default_max_plan_pages: int,
    ) -> "RangeLimit":
        """Build a :class:`RangeLimit` from user configuration.

        ``settings`` is usually pulled from ``config.yml``. Missing or
        malformed values fall back to the supplied defaults so
        misconfiguration never raises at request time.
        """

        return cls(
            max_spec_length=_setting_int(
                settings, "max_spec_length", default_max_spec_length
            ),
            max_page_count=_setting_int(
                settings, "max_page_count", default_max_page_count
            ),
            max_plan_items=_setting_int(
                settings, "max_plan_items", default_max_plan_items
            ),
            max_plan_pages=_setting_int(
                settings, "max_plan_pages", default_max_plan_pages
            ),
        )


def enforce_spec_length(spec: str | None, limit: RangeLimit) -> None:
    if spec is not None and len(spec) > limit.max_spec_length:
        raise ValidationError(
            "Page range text is too long",
            details={"max_spec_length": limit.max_spec_length, "length": len(spec)},
        )


def enforce_page_count(page_count: int, limit: RangeLimit) -> None:
    if page_count > limit.max_page_count:
        raise ValidationError(
            "Page count exceeds the allowed maximum",
            details={"max_page_count": limit.max_page_count, "page_count": page_count},
        )


__all__ = [
    "ValidationError",
    "SchemaModel",
    "parse_model",
    "RangeLimit",
    "enforce_spec_length",
    "enforce_page_count",
]
