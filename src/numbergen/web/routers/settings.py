"""Number format settings for the current tenant."""

from typing import Annotated, Any

from fastapi import APIRouter, Body
from pydantic import BaseModel, Field

from numbergen.core.modules.numbering.models import NumberFormatConfig
from numbergen.core.modules.numbering.template import MAX_WIDTH
from numbergen.web.deps import AppDep, TenantIdDep
from numbergen.web.openapi import ErrorResponse

router = APIRouter(tags=["settings"])


@router.get(
    "/settings/number-formats",
    summary="Get number formats",
    description="Get the tenant's number formats. Types the tenant never configured are filled in with system defaults.",
    operation_id="getNumberFormats",
    responses={
        200: {"description": "Map of number type to format config"},
        400: {"model": ErrorResponse, "description": "Invalid tenant id"},
    },
)
async def get_number_formats(app: AppDep, tenant_id: TenantIdDep) -> dict[str, NumberFormatConfig]:
    return await app.get_number_formats(tenant_id)


@router.put(
    "/settings/number-formats",
    summary="Update number formats",
    description=(
        "Save format configs for some number types. Types not in the body are left untouched. "
        "An omitted counter starts at 1; omitted padding and reset period keep their current values."
    ),
    operation_id="updateNumberFormats",
    responses={
        200: {"description": "Full merged map after the update"},
        400: {"model": ErrorResponse, "description": "Unknown number type or missing format string"},
    },
)
async def update_number_formats(
    formats: Annotated[
        dict[str, Any],
        Body(examples=[{"invoice": {"format": "INV-{YY}{MONTH}-{COUNTER:4}", "reset_period": "monthly"}}]),
    ],
    app: AppDep,
    tenant_id: TenantIdDep,
) -> dict[str, NumberFormatConfig]:
    return await app.update_number_formats(tenant_id, formats)


class PreviewRequest(BaseModel):
    """Request to preview a format template."""

    format: str = Field(..., min_length=1, description="Format template to render")
    counter: int = Field(1, ge=1, le=10**18, description="Counter value to render")
    padding: int = Field(5, ge=0, le=MAX_WIDTH, description="Padding for {COUNTER} without explicit width")

    model_config = {"json_schema_extra": {"examples": [{"format": "WO-{YEAR}-{COUNTER:5}", "counter": 42, "padding": 5}]}}


class PreviewResponse(BaseModel):
    preview: str


@router.post(
    "/settings/number-formats/preview",
    summary="Preview number format",
    description="Render a format template without consuming a counter. Unknown placeholders are kept as literal text.",
    operation_id="previewNumberFormat",
    responses={200: {"description": "Rendered example number"}},
)
async def preview_number_format(req: PreviewRequest, app: AppDep) -> PreviewResponse:
    return PreviewResponse(preview=app.preview_number_format(req.format, req.counter, req.padding))


@router.get(
    "/settings/number-formats/defaults",
    summary="Get default number formats",
    description="Get the system default format for every built-in number type.",
    operation_id="getDefaultNumberFormats",
    responses={200: {"description": "Map of number type to default format config"}},
)
async def get_default_number_formats(app: AppDep) -> dict[str, NumberFormatConfig]:
    return app.get_default_number_formats()
