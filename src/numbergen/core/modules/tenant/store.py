"""Per-tenant record stores with atomic read-modify-write."""

import asyncio
import copy
import random
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Callable
from typing import Any
from weakref import WeakValueDictionary

import structlog
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from numbergen.core.modules.tenant.models import Tenant
from numbergen.errors import NotFoundError, PersistenceError, ValidationError
from numbergen.utils import now

logger = structlog.get_logger(__name__)

TenantUpdate = Callable[[Tenant], Tenant]


class TenantConfigStore(ABC):
    """Storage for tenant records, including their number format configs."""

    @abstractmethod
    async def get(self, tenant_id: str) -> Tenant | None:
        """Return the tenant record, or None if it does not exist."""

    @abstractmethod
    async def create(self, tenant: Tenant) -> Tenant:
        """Insert a new tenant record. Raises ValidationError if the id is taken."""

    @abstractmethod
    async def run_transaction(self, tenant_id: str, fn: TenantUpdate) -> Tenant:
        """Atomically apply `fn` to the tenant record and persist the result.

        `fn` may run more than once if a concurrent write forces a retry, so it must not
        have side effects outside the record it is given. Exceptions raised by `fn` abort
        the transaction without writing. Raises NotFoundError if the tenant does not exist.
        """

    @abstractmethod
    async def set_all(self, tenant_id: str, number_formats: dict[str, dict[str, Any]]) -> None:
        """Overwrite the given per-type configs, last write wins.

        Types not present in `number_formats` are left untouched. Creates the tenant
        record if it does not exist yet.
        """


class MongoTenantConfigStore(TenantConfigStore):
    """MongoDB-backed store using optimistic concurrency on the `version` field.

    Writes are compare-and-swap: a replace only matches if the version read is still
    current, otherwise the transaction is re-run. A per-process lock per tenant keeps
    workers in the same process from racing each other; other processes are handled by
    the version check alone.
    """

    def __init__(
        self, collection: AsyncCollection[dict[str, Any]], max_retries: int = 100, retry_delay: float = 0.005
    ) -> None:
        self._collection = collection
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._locks: WeakValueDictionary[str, asyncio.Lock] = WeakValueDictionary()

    def _lock(self, tenant_id: str) -> asyncio.Lock:
        lock = self._locks.get(tenant_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[tenant_id] = lock
        return lock

    async def get(self, tenant_id: str) -> Tenant | None:
        try:
            doc = await self._collection.find_one({"_id": tenant_id})
        except PyMongoError as e:
            raise PersistenceError(f"Failed to read tenant '{tenant_id}': {e}") from e
        return Tenant.model_validate(doc) if doc else None

    async def create(self, tenant: Tenant) -> Tenant:
        try:
            await self._collection.insert_one(tenant.to_mongo())
        except DuplicateKeyError as e:
            raise ValidationError(f"Tenant '{tenant.id}' already exists") from e
        except PyMongoError as e:
            raise PersistenceError(f"Failed to create tenant '{tenant.id}': {e}") from e
        return tenant

    async def run_transaction(self, tenant_id: str, fn: TenantUpdate) -> Tenant:
        async with self._lock(tenant_id):
            for attempt in range(1, self._max_retries + 1):
                try:
                    doc = await self._collection.find_one({"_id": tenant_id})
                    if doc is None:
                        raise NotFoundError(f"Tenant '{tenant_id}' not found")
                    current = Tenant.model_validate(doc)
                    updated = fn(current.model_copy(deep=True))
                    updated.version = current.version + 1
                    result = await self._collection.replace_one(
                        {"_id": tenant_id, "version": _version_match(current.version)}, updated.to_mongo()
                    )
                except PyMongoError as e:
                    raise PersistenceError(f"Transaction on tenant '{tenant_id}' failed: {e}") from e

                if result.matched_count == 1:
                    return updated

                logger.debug("tenant_transaction_conflict", tenant_id=tenant_id, attempt=attempt)
                await asyncio.sleep(random.uniform(0, self._retry_delay * attempt))  # noqa: S311

        logger.warning("tenant_transaction_exhausted", tenant_id=tenant_id, attempts=self._max_retries)
        raise PersistenceError(f"Transaction on tenant '{tenant_id}' conflicted {self._max_retries} times")

    async def set_all(self, tenant_id: str, number_formats: dict[str, dict[str, Any]]) -> None:
        if not number_formats:
            return
        update = {
            "$set": {f"number_formats.{number_type}": config for number_type, config in number_formats.items()},
            "$inc": {"version": 1},
            "$setOnInsert": {"name": "", "created_at": now()},
        }
        try:
            await self._collection.update_one({"_id": tenant_id}, update, upsert=True)
        except PyMongoError as e:
            raise PersistenceError(f"Failed to save number formats for tenant '{tenant_id}': {e}") from e


def _version_match(version: int) -> int | dict[str, list[int | None]]:
    # Records written before versioning have no `version` field; null matches missing
    if version == 0:
        return {"$in": [0, None]}
    return version


class MemoryTenantConfigStore(TenantConfigStore):
    """In-process store for development and tests.

    One asyncio lock per tenant serializes transactions; different tenants never
    contend. Records are deep-copied in and out, like a round trip to a real database.
    """

    def __init__(self) -> None:
        self._tenants: dict[str, dict[str, Any]] = {}
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def get(self, tenant_id: str) -> Tenant | None:
        doc = self._tenants.get(tenant_id)
        return Tenant.model_validate(copy.deepcopy(doc)) if doc else None

    async def create(self, tenant: Tenant) -> Tenant:
        async with self._locks[tenant.id]:
            if tenant.id in self._tenants:
                raise ValidationError(f"Tenant '{tenant.id}' already exists")
            self._tenants[tenant.id] = tenant.to_mongo()
        return tenant

    async def run_transaction(self, tenant_id: str, fn: TenantUpdate) -> Tenant:
        async with self._locks[tenant_id]:
            doc = self._tenants.get(tenant_id)
            if doc is None:
                raise NotFoundError(f"Tenant '{tenant_id}' not found")
            current = Tenant.model_validate(copy.deepcopy(doc))
            await asyncio.sleep(0)  # Yield between read and write, as a network round trip would
            updated = fn(current)
            updated.version = current.version + 1
            self._tenants[tenant_id] = updated.to_mongo()
            return updated

    async def set_all(self, tenant_id: str, number_formats: dict[str, dict[str, Any]]) -> None:
        async with self._locks[tenant_id]:
            doc = self._tenants.setdefault(tenant_id, Tenant(id=tenant_id).to_mongo())
            doc["number_formats"].update(copy.deepcopy(number_formats))
            doc["version"] += 1
