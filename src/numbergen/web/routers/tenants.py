from fastapi import APIRouter
from pydantic import BaseModel, Field

from numbergen.core.modules.tenant.models import Tenant
from numbergen.web.deps import AppDep
from numbergen.web.openapi import ErrorResponse

router = APIRouter(tags=["tenants"])


class RegisterTenantRequest(BaseModel):
    """Request to register a tenant."""

    id: str = Field(
        ...,
        description="Unique tenant id (lowercase letters, numbers, hyphens; no leading/trailing/double hyphens)",
        pattern="^[a-z0-9]+(?:-[a-z0-9]+)*$",
    )
    name: str = Field(..., description="Business name")

    model_config = {"json_schema_extra": {"examples": [{"id": "biz-1", "name": "Acme Plumbing"}]}}


@router.post(
    "/tenants",
    summary="Register tenant",
    description="Register a tenant. A tenant must be registered before it can issue numbers.",
    operation_id="registerTenant",
    status_code=201,
    responses={
        201: {"description": "Tenant registered"},
        400: {"model": ErrorResponse, "description": "Invalid id or name, or id already taken"},
    },
)
async def register_tenant(req: RegisterTenantRequest, app: AppDep) -> Tenant:
    return await app.register_tenant(req.id, req.name)


@router.get(
    "/tenants/{tenant_id}",
    summary="Get tenant",
    operation_id="getTenant",
    responses={
        200: {"description": "Tenant record"},
        404: {"model": ErrorResponse, "description": "Tenant not found"},
    },
)
async def get_tenant(tenant_id: str, app: AppDep) -> Tenant:
    return await app.get_tenant(tenant_id)
