from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Numbergen API",
            version="0.1.0",
            summary="Per-tenant sequential numbers for work orders, invoices, clients, schedules and contracts",
            routes=app.routes,
        )

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid format type: 'bogusType'", "type": "validation_error"},
                {"message": "Tenant 'biz-1' not found", "type": "not_found"},
                {"message": "Storage is temporarily unavailable.", "type": "persistence_error"},
            ]
        }
    }
