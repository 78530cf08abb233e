"""Shared pytest fixtures."""

from datetime import UTC, datetime

import pytest
import pytest_asyncio

from numbergen.config import Config
from numbergen.core.core import Core
from numbergen.core.modules.tenant.store import MemoryTenantConfigStore


@pytest.fixture
def now():
    """A fixed point in time for deterministic rendering."""
    return datetime(2025, 3, 14, 9, 30, tzinfo=UTC)


@pytest.fixture
def config():
    """Config that never reads the environment or a .env file."""
    return Config(_env_file=None, database_url="mongodb://localhost:27017/numbergen_test", timezone="UTC")


@pytest.fixture
def store():
    return MemoryTenantConfigStore()


@pytest.fixture
def core(config, store):
    """Core wired to the in-memory store (no MongoDB connection)."""
    return Core(config, store)


@pytest.fixture
def numbering(core):
    return core.services.numbering


@pytest_asyncio.fixture
async def tenant(core):
    """A registered tenant with no stored number formats."""
    return await core.services.tenant.register_tenant("biz-1", "Acme Plumbing")
