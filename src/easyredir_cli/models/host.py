"""Host data models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HostAttributes(BaseModel):
    """Attributes of a host. Fields not modelled here are kept as extras."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    dns_status: str | None = None
    certificate_status: str | None = None


class Host(BaseModel):
    """A hostname registered for redirection."""

    id: str = ""
    type: str = "host"
    attributes: HostAttributes = Field(default_factory=HostAttributes)
