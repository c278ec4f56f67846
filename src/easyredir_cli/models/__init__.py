"""Pydantic data models for the EasyRedir REST API."""

from easyredir_cli.models.common import (
    Collection,
    ErrorDetail,
    ErrorResponse,
    Item,
    Links,
    ListOptions,
    Metadata,
    Page,
)
from easyredir_cli.models.host import Host, HostAttributes
from easyredir_cli.models.rule import Rule, RuleAttributes

__all__ = [
    "Collection",
    "ErrorDetail",
    "ErrorResponse",
    "Host",
    "HostAttributes",
    "Item",
    "Links",
    "ListOptions",
    "Metadata",
    "Page",
    "Rule",
    "RuleAttributes",
]
