"""Resource accessors: rules and hosts."""

from easyredir_cli.resources.hosts import get_host, list_all_hosts, list_hosts
from easyredir_cli.resources.query import list_path
from easyredir_cli.resources.rules import (
    create_rule,
    list_all_rules,
    list_rules,
    remove_rule,
    update_rule,
)

__all__ = [
    "create_rule",
    "get_host",
    "list_all_hosts",
    "list_all_rules",
    "list_hosts",
    "list_path",
    "list_rules",
    "remove_rule",
    "update_rule",
]
