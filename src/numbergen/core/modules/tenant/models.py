"""Tenant (business account) records."""

from datetime import datetime
from typing import Any

from pydantic import Field

from numbergen.core.db import MongoModel
from numbergen.utils import now


class Tenant(MongoModel):
    """A business account; the unit of isolation for all counters.

    `number_formats` holds raw per-type configs as stored. Older tenants may carry
    partial entries, so they are only validated after merging with defaults.
    """

    name: str = ""
    number_formats: dict[str, dict[str, Any]] = Field(default_factory=dict)
    version: int = 0  # Bumped on every write, used for optimistic concurrency
    created_at: datetime = Field(default_factory=now)
