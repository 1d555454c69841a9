"""Page range API blueprint with standardized responses."""

from __future__ import annotations

from typing import Literal

from flask import Blueprint, Response, current_app, request
from pydantic import Field

from common.errors import UnprocessableAppError, ValidationAppError
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import (
    RangeLimit,
    SchemaModel,
    ValidationError,
    enforce_page_count,
    enforce_spec_length,
    parse_model,
)

from ..core import PageSelection, select_pages

logger = get_logger("page_tools.page_ranges")


class ParsePayload(SchemaModel):
    spec: str = ""
    page_count: int = Field(ge=0)
    default: Literal["none", "all", "last"] = "none"
    require: bool = False


class PlanItem(SchemaModel):
    name: str = Field(min_length=1)
    pages: str = ""


class PlanPayload(SchemaModel):
    page_count: int = Field(ge=0)
    plan: list[PlanItem] = Field(min_length=1)
    default: Literal["none", "all", "last"] = "none"


def _range_limit() -> RangeLimit:
    settings = current_app.config.get("PLUGIN_SETTINGS", {}).get("page_ranges", {})
    return RangeLimit.from_settings(
        settings,
        default_max_spec_length=2000,
        default_max_page_count=10000,
        default_max_plan_items=50,
        default_max_plan_pages=100000,
    )


def _invalid(exc: ValidationError, code: str) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc), code=code, details=getattr(exc, "details", None)
        )
    )


def _selection_payload(selection: PageSelection) -> dict:
    return {
        "pages": list(selection.pages),
        "indices": selection.indices,
        "count": selection.count,
    }


api_bp = Blueprint("page_ranges_api", __name__, url_prefix="/api/page_ranges")


@api_bp.post("/parse")
def parse() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(ParsePayload, raw_payload)
    except ValidationError as exc:
        return _invalid(exc, "page_ranges.invalid_request")

    limit = _range_limit()
    try:
        enforce_spec_length(payload.spec, limit)
    except ValidationError as exc:
        return _invalid(exc, "page_ranges.spec_too_long")
    try:
        enforce_page_count(payload.page_count, limit)
    except ValidationError as exc:
        return _invalid(exc, "page_ranges.page_count_exceeded")

    selection = select_pages(payload.spec, payload.page_count, default=payload.default)
    ignored = list(selection.ignored)
    logger.info(
        "resolved %d of %d pages (%d segments ignored)",
        selection.count,
        payload.page_count,
        len(ignored),
    )
    if payload.require and not selection:
        return fail(
            UnprocessableAppError(
                message="No valid pages selected.",
                code="page_ranges.no_valid_pages",
                details={"ignored": ignored},
            )
        )

    data = _selection_payload(selection)
    data.update({"page_count": payload.page_count, "ignored": ignored})
    return ok(data)


@api_bp.post("/plan")
def plan() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(PlanPayload, raw_payload)
    except ValidationError as exc:
        return _invalid(exc, "page_ranges.invalid_request")

    limit = _range_limit()
    if len(payload.plan) > limit.max_plan_items:
        return fail(
            ValidationAppError(
                message="Too many plan items",
                code="page_ranges.plan_too_large",
                details={"max_plan_items": limit.max_plan_items},
            )
        )
    try:
        enforce_page_count(payload.page_count, limit)
    except ValidationError as exc:
        return _invalid(exc, "page_ranges.page_count_exceeded")

    items: list[dict] = []
    seen: set[str] = set()
    total_pages = 0
    for item in payload.plan:
        key = item.name.lower()
        if key in seen:
            return fail(
                ValidationAppError(
                    message="Duplicate plan item names",
                    code="page_ranges.duplicate_name",
                    details={"name": item.name},
                )
            )
        seen.add(key)
        try:
            enforce_spec_length(item.pages, limit)
        except ValidationError as exc:
            return _invalid(exc, "page_ranges.spec_too_long")

        selection = select_pages(item.pages, payload.page_count, default=payload.default)
        if not selection:
            return fail(
                UnprocessableAppError(
                    message=f"No valid pages selected for {item.name}.",
                    code="page_ranges.no_valid_pages",
                    details={"name": item.name},
                )
            )
        total_pages += selection.count
        if total_pages > limit.max_plan_pages:
            return fail(
                ValidationAppError(
                    message="Plan selects too many pages",
                    code="page_ranges.plan_too_large",
                    details={"max_plan_pages": limit.max_plan_pages},
                )
            )
        items.append({"name": item.name, **_selection_payload(selection)})

    logger.info("resolved plan with %d items", len(items))
    return ok({"page_count": payload.page_count, "items": items})


blueprints = [api_bp]


__all__ = ["blueprints", "parse", "plan"]
