from typing import Annotated, cast

import structlog
from fastapi import Depends, Header, Request

from numbergen.app import App
from numbergen.errors import ValidationError
from numbergen.utils import is_slug


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_tenant_id(x_tenant_id: Annotated[str, Header(description="Tenant (business) id")]) -> str:
    """Tenant the request acts for. Authentication happens upstream of this service."""
    if not is_slug(x_tenant_id):
        raise ValidationError(f"Invalid tenant id format: '{x_tenant_id}'")
    structlog.contextvars.bind_contextvars(tenant_id=x_tenant_id)
    return x_tenant_id


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
TenantIdDep = Annotated[str, Depends(get_tenant_id)]
