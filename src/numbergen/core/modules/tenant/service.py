import structlog

from numbergen import utils
from numbergen.core.core import Service
from numbergen.core.modules.tenant.models import Tenant
from numbergen.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class TenantService(Service):
    """Registers tenants; a tenant must exist before it can issue numbers."""

    async def register_tenant(self, tenant_id: str, name: str) -> Tenant:
        """Create a tenant record with no stored number formats."""
        if not utils.is_slug(tenant_id):
            raise ValidationError(f"Invalid tenant id format: '{tenant_id}'")
        if not name.strip():
            raise ValidationError("Name cannot be empty")

        tenant = await self.store.create(Tenant(id=tenant_id, name=name))
        logger.info("tenant_registered", tenant_id=tenant_id)
        return tenant

    async def get_tenant(self, tenant_id: str) -> Tenant:
        tenant = await self.store.get(tenant_id)
        if tenant is None:
            raise NotFoundError(f"Tenant '{tenant_id}' not found")
        return tenant
