from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, cast
from urllib.parse import urlparse

from pymongo import AsyncMongoClient

from numbergen.config import Config
from numbergen.core.modules.tenant.store import MongoTenantConfigStore, TenantConfigStore

if TYPE_CHECKING:
    from numbergen.core.modules.numbering.service import NumberingService
    from numbergen.core.modules.tenant.service import TenantService


class Service:
    """Base class for services working against the tenant store."""

    def __init__(self, store: TenantConfigStore) -> None:
        self.store = store
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    tenant: TenantService
    numbering: NumberingService

    def __init__(self, store: TenantConfigStore) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("tenant", "numbergen.core.modules.tenant.service", "TenantService"),
            ("numbering", "numbergen.core.modules.numbering.service", "NumberingService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(store)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, the tenant store, and all service instances.

    Pass `store` to run without MongoDB (development and tests); otherwise a
    MongoDB-backed store is built from `config.database_url`.
    """

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]] | None
    store: TenantConfigStore
    services: Services

    def __init__(self, config: Config, store: TenantConfigStore | None = None) -> None:
        self.config = config
        self.mongo_client = None
        if store is None:
            self.mongo_client = AsyncMongoClient(config.database_url, tz_aware=True)
            database = self.mongo_client.get_database(urlparse(config.database_url).path[1:])
            store = MongoTenantConfigStore(
                database.get_collection("tenants"),
                max_retries=config.transaction_max_retries,
                retry_delay=config.transaction_retry_delay,
            )
        self.store = store
        self.services = Services(store)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the MongoDB connection, if any."""
        await self.services.stop_all()
        if self.mongo_client is not None:
            await self.mongo_client.aclose()
