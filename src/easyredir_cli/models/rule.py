"""Redirect rule data models."""

from __future__ import annotations

from pydantic import BaseModel, Field

RESPONSE_TYPES = ("moved_permanently", "found", "temporary_redirect", "permanent_redirect")


class RuleAttributes(BaseModel):
    """Attributes of a redirect rule. Unset fields are omitted on write."""

    forward_params: bool | None = None
    forward_path: bool | None = None
    response_type: str | None = None
    source_urls: list[str] = Field(default_factory=list)
    target_url: str | None = None


class Rule(BaseModel):
    """A redirect rule mapping one or more source URLs to a target."""

    id: str = ""
    type: str = "rule"
    attributes: RuleAttributes = Field(default_factory=RuleAttributes)
