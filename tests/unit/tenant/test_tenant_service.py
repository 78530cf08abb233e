"""Tests for tenant registration."""

import pytest

from numbergen.errors import NotFoundError, ValidationError


class TestRegisterTenant:
    @pytest.mark.asyncio
    async def test_register(self, core):
        tenant = await core.services.tenant.register_tenant("biz-1", "Acme Plumbing")
        assert tenant.id == "biz-1"
        assert tenant.name == "Acme Plumbing"
        assert tenant.number_formats == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tenant_id", ["Biz-1", "biz--1", "-biz", "biz_1", ""])
    async def test_invalid_id(self, core, tenant_id):
        with pytest.raises(ValidationError, match="Invalid tenant id"):
            await core.services.tenant.register_tenant(tenant_id, "Acme")

    @pytest.mark.asyncio
    async def test_empty_name(self, core):
        with pytest.raises(ValidationError, match="Name cannot be empty"):
            await core.services.tenant.register_tenant("biz-1", "   ")

    @pytest.mark.asyncio
    async def test_duplicate(self, core, tenant):
        with pytest.raises(ValidationError, match="already exists"):
            await core.services.tenant.register_tenant("biz-1", "Acme again")


class TestGetTenant:
    @pytest.mark.asyncio
    async def test_get(self, core, tenant):
        assert (await core.services.tenant.get_tenant("biz-1")).name == "Acme Plumbing"

    @pytest.mark.asyncio
    async def test_missing(self, core):
        with pytest.raises(NotFoundError):
            await core.services.tenant.get_tenant("nobody")
