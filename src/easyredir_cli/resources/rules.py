"""Redirect rule endpoints."""

from __future__ import annotations

import functools
from typing import Any

from easyredir_cli.client.errors import ValidationError
from easyredir_cli.client.pagination import paginate
from easyredir_cli.client.transport import Request, Sender, decode
from easyredir_cli.models.common import Collection, Item, ListOptions, Page
from easyredir_cli.models.rule import Rule, RuleAttributes
from easyredir_cli.resources.query import item_path, list_path

RULES_PATH = "/rules"


def _rule_body(attributes: RuleAttributes) -> dict[str, Any]:
    return {
        "data": {
            "type": "rule",
            "attributes": attributes.model_dump(exclude_none=True, exclude_defaults=True),
        },
    }


def list_rules(client: Sender, options: ListOptions | None = None) -> Page[Rule]:
    """Fetch a single page of rules."""
    path = list_path(RULES_PATH, options or ListOptions())
    response = client.send(Request(method="GET", path=path))
    return decode(response, Page[Rule])


def list_all_rules(
    client: Sender,
    options: ListOptions | None = None,
    *,
    max_pages: int | None = None,
) -> Collection[Rule]:
    """Fetch every rule matching *options*, following all pages."""
    return paginate(functools.partial(list_rules, client), options, max_pages=max_pages)


def create_rule(
    client: Sender,
    attributes: RuleAttributes,
    *,
    idempotency_key: str | None = None,
) -> Rule:
    """Create a rule.

    Pass *idempotency_key* to retry a create that may already have been
    applied; by default every call gets a new key.
    """
    if not attributes.source_urls:
        raise ValidationError("A rule needs at least one source URL.")
    if not attributes.target_url:
        raise ValidationError("A rule needs a target URL.")
    response = client.send(
        Request(
            method="POST",
            path=RULES_PATH,
            body=_rule_body(attributes),
            idempotency_key=idempotency_key,
        )
    )
    return decode(response, Item[Rule]).data


def update_rule(
    client: Sender,
    rule_id: str,
    attributes: RuleAttributes,
    *,
    idempotency_key: str | None = None,
) -> Rule:
    """Update the given attributes of a rule, leaving the others unchanged."""
    response = client.send(
        Request(
            method="PATCH",
            path=item_path(RULES_PATH, rule_id),
            body=_rule_body(attributes),
            idempotency_key=idempotency_key,
        )
    )
    rule = decode(response, Item[Rule]).data
    if rule.id != rule_id:
        raise ValidationError(f"received incorrect rule: {rule.id}")
    return rule


def remove_rule(client: Sender, rule_id: str) -> None:
    client.send(Request(method="DELETE", path=item_path(RULES_PATH, rule_id)))
