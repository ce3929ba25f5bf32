"""Pydantic schemas for barbershop tenants."""

from collections.abc import Mapping
from copy import deepcopy
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from barbershop_tenancy.core.constants import (
    DEFAULT_THEME,
    DEFAULT_TIMEZONE,
    DEFAULT_WORKING_HOURS,
)


class PlanType(str, Enum):
    """Subscription plan of a barbershop."""

    FREE = "free"
    PRO = "pro"


class TenantSettings(BaseModel):
    """Per-barbershop configuration.

    Missing keys fall back to the defaults below; unknown keys sent by
    the backend are kept.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    theme: str = DEFAULT_THEME
    timezone: str = DEFAULT_TIMEZONE
    working_hours: dict[str, dict[str, str]] = Field(
        default_factory=lambda: deepcopy(DEFAULT_WORKING_HOURS)
    )
    branding: dict[str, Any] = Field(default_factory=dict)
    contact: dict[str, Any] = Field(default_factory=dict)
    notifications: dict[str, Any] = Field(default_factory=dict)

    def merged(self, partial: Mapping[str, Any]) -> "TenantSettings":
        """Return a copy with ``partial`` shallow-merged on top.

        Keys may be given by field name or by their camelCase alias.
        """
        names = {
            field.alias: name
            for name, field in type(self).model_fields.items()
            if field.alias
        }
        data = self.model_dump()
        for key, value in partial.items():
            data[names.get(key, key)] = value
        return type(self).model_validate(data)


class Tenant(BaseModel):
    """A barbershop as returned by the tenant lookup endpoint."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    slug: str
    name: str
    plan_type: PlanType = PlanType.FREE
    settings: TenantSettings = Field(default_factory=TenantSettings)
    created_at: datetime | None = None
    description: str | None = None
    address: str | None = None
    phone: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Backends may send numeric ids; ids are opaque strings here."""
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("plan_type", mode="before")
    @classmethod
    def default_plan(cls, v: Any) -> Any:
        """A missing plan means the free plan."""
        return v or PlanType.FREE

    @field_validator("settings", mode="before")
    @classmethod
    def default_settings(cls, v: Any) -> Any:
        return v or {}


class SlugAvailability(BaseModel):
    """Answer of the slug availability check."""

    slug: str
    available: bool
    message: str
