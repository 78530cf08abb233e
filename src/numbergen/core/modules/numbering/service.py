from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

import pydantic
import structlog

from numbergen import utils
from numbergen.core.core import Service
from numbergen.core.modules.numbering.models import (
    NumberFormatConfig,
    NumberType,
    default_formats,
    merge_with_defaults,
    normalize_fields,
)
from numbergen.core.modules.numbering.reset import should_reset
from numbergen.core.modules.numbering.template import render
from numbergen.core.modules.tenant.models import Tenant
from numbergen.core.modules.tenant.store import TenantConfigStore
from numbergen.errors import InvalidTypeError, ValidationError

logger = structlog.get_logger(__name__)

BUILTIN_TYPES = frozenset(NumberType)

# Fields a settings update may omit; they keep the tenant's current value
INHERITED_FIELDS = {"padding", "reset_period", "prefix"}


class NumberingService(Service):
    """Issues per-tenant sequential numbers and manages their formats."""

    def __init__(self, store: TenantConfigStore) -> None:
        super().__init__(store)
        # last_reset reported for types a tenant never stored; constant for the process lifetime
        self.defaults_anchor = utils.now()

    def _local(self, now: datetime | None) -> datetime:
        """Current time (or `now`) in the configured business timezone."""
        return utils.ensure_aware(now or utils.now()).astimezone(ZoneInfo(self.core.config.timezone))

    async def generate(self, tenant_id: str, number_type: str, now: datetime | None = None) -> str:
        """Issue the next number of `number_type` for a registered tenant.

        Reset check, rendering and counter increment run inside one tenant transaction,
        so concurrent calls never issue the same counter value. Nothing is written if
        the tenant is missing or the type is unknown.
        """
        current_time = self._local(now)
        issued: dict[str, Any] = {}

        def issue(tenant: Tenant) -> Tenant:
            config = merge_with_defaults(tenant.number_formats, current_time).get(number_type)
            if config is None:
                raise InvalidTypeError(number_type)

            reset = should_reset(config, current_time)
            if reset:
                config.counter = 1
                config.last_reset = current_time

            counter = config.counter
            issued.update(number=render(config.format, counter, config.padding, current_time), counter=counter, reset=reset)
            config.counter = counter + 1
            tenant.number_formats[number_type] = config.model_dump()
            return tenant

        await self.store.run_transaction(tenant_id, issue)

        if issued["reset"]:
            logger.info("number_counter_reset", tenant_id=tenant_id, number_type=number_type)
        logger.info("number_generated", tenant_id=tenant_id, number_type=number_type, counter=issued["counter"])
        return str(issued["number"])

    async def get_formats(self, tenant_id: str) -> dict[str, NumberFormatConfig]:
        """Get the tenant's formats merged over the defaults; unknown tenants get pure defaults."""
        tenant = await self.store.get(tenant_id)
        return merge_with_defaults(tenant.number_formats if tenant else {}, self.defaults_anchor)

    async def update_formats(
        self, tenant_id: str, formats: dict[str, Any], now: datetime | None = None
    ) -> dict[str, NumberFormatConfig]:
        """Validate and save per-type configs, leaving types not in `formats` untouched.

        Omitted `counter` starts at 1 and omitted `last_reset` at now. Omitted padding,
        reset period and prefix keep the tenant's current values for that type. Keys may
        be given in camelCase (`resetPeriod`); any other unknown key is rejected.
        """
        current_time = self._local(now)

        for number_type, raw in formats.items():
            if number_type not in BUILTIN_TYPES:
                raise ValidationError(f"Invalid format type: '{number_type}'")
            if not isinstance(raw, dict):
                raise ValidationError(f"Invalid config for '{number_type}'")
            if not isinstance(raw.get("format"), str) or not raw["format"]:
                raise ValidationError(f"Invalid format string for '{number_type}'")

        current = await self.get_formats(tenant_id)
        updates: dict[str, dict[str, Any]] = {}
        for number_type, raw in formats.items():
            values = current[number_type].model_dump(include=INHERITED_FIELDS)
            values.update({key: value for key, value in normalize_fields(raw).items() if value is not None})
            if not values.get("counter"):
                values["counter"] = 1
            values.setdefault("last_reset", current_time)
            try:
                config = NumberFormatConfig.model_validate(values)
            except pydantic.ValidationError as e:
                error = e.errors()[0]
                field = ".".join(str(loc) for loc in error["loc"])
                raise ValidationError(f"Invalid config for '{number_type}': {field}: {error['msg']}") from e
            updates[number_type] = config.model_dump()

        await self.store.set_all(tenant_id, updates)
        logger.info("number_formats_updated", tenant_id=tenant_id, number_types=sorted(updates))
        return await self.get_formats(tenant_id)

    def preview_format(self, format: str, counter: int = 1, padding: int = 5, now: datetime | None = None) -> str:
        """Render a template without touching any stored counter."""
        return render(format, counter, padding, self._local(now))

    def get_default_formats(self) -> dict[str, NumberFormatConfig]:
        return default_formats(self.defaults_anchor)
