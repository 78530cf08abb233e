from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version
from typing import Any

from numbergen.config import Config
from numbergen.core.core import Core
from numbergen.core.modules.numbering.models import NumberFormatConfig
from numbergen.core.modules.tenant.models import Tenant
from numbergen.core.modules.tenant.store import TenantConfigStore


class App:
    """Facade for all application operations, delegating to Core services."""

    def __init__(self, config: Config, store: TenantConfigStore | None = None) -> None:
        self._core = Core(config, store)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Tenants ===
    async def register_tenant(self, tenant_id: str, name: str) -> Tenant:
        return await self._core.services.tenant.register_tenant(tenant_id, name)

    async def get_tenant(self, tenant_id: str) -> Tenant:
        return await self._core.services.tenant.get_tenant(tenant_id)

    # === Number formats ===
    async def get_number_formats(self, tenant_id: str) -> dict[str, NumberFormatConfig]:
        """Get the tenant's number formats, filled in with defaults."""
        return await self._core.services.numbering.get_formats(tenant_id)

    async def update_number_formats(self, tenant_id: str, formats: dict[str, Any]) -> dict[str, NumberFormatConfig]:
        """Save per-type format configs and return the full merged map."""
        return await self._core.services.numbering.update_formats(tenant_id, formats)

    def preview_number_format(self, format: str, counter: int, padding: int) -> str:
        return self._core.services.numbering.preview_format(format, counter, padding)

    def get_default_number_formats(self) -> dict[str, NumberFormatConfig]:
        return self._core.services.numbering.get_default_formats()

    async def generate_number(self, tenant_id: str, number_type: str, now: datetime | None = None) -> str:
        """Issue the next number for a new business object (work order, invoice, ...).

        Called in-process by the handlers that create those objects; not exposed as a route.
        """
        return await self._core.services.numbering.generate(tenant_id, number_type, now)

    # === Metadata ===
    def get_version(self) -> dict[str, str]:
        """Get package version and build information."""
        try:
            package_version = version("numbergen")
        except PackageNotFoundError:
            package_version = "unknown"
        config = self._core.config
        return {
            "version": package_version,
            "git_commit_hash": config.git_commit_hash,
            "git_commit_date": config.git_commit_date,
            "build_time": config.build_time,
        }
