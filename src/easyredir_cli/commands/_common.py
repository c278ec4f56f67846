"""Shared helpers for CLI commands: client factory, options, row building."""

from __future__ import annotations

from typing import Annotated

import typer

from easyredir_cli.client.transport import EasyredirClient
from easyredir_cli.config.manager import ConfigManager
from easyredir_cli.models.host import Host
from easyredir_cli.models.rule import Rule
from easyredir_cli.output.formatter import FORMATS


def check_format(value: str) -> str:
    """Reject an unknown output format before any request is sent."""
    if value not in FORMATS:
        raise typer.BadParameter(f"Choose from: {', '.join(FORMATS)}.")
    return value


# Shared Typer option type aliases
ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", "-p", help="Credential profile"),
]
ApiKeyOpt = Annotated[
    str | None,
    typer.Option("--api-key", help="API key override"),
]
ApiSecretOpt = Annotated[
    str | None,
    typer.Option("--api-secret", help="API secret override"),
]
FormatOpt = Annotated[
    str,
    typer.Option(
        "--format", "-f", callback=check_format, help="Output format: table, json or yaml",
    ),
]
LimitOpt = Annotated[
    int,
    typer.Option("--limit", min=0, help="Page size (0 uses the API default)"),
]
AllOpt = Annotated[
    bool,
    typer.Option("--all", "-a", help="Follow every page instead of returning one"),
]
StartingAfterOpt = Annotated[
    str,
    typer.Option("--starting-after", help="Return records after this id"),
]
EndingBeforeOpt = Annotated[
    str,
    typer.Option("--ending-before", help="Return records before this id"),
]

RULE_COLUMNS = ["ID", "Source URLs", "Target URL", "Response", "Fwd Params", "Fwd Path"]
HOST_COLUMNS = ["ID", "Name", "DNS", "Certificate"]


def make_client(
    profile: str | None,
    api_key: str | None,
    api_secret: str | None,
) -> EasyredirClient:
    """Create an EasyredirClient from CLI options, env vars, or config profile."""
    mgr = ConfigManager()
    resolved = mgr.resolve_profile(profile_name=profile, api_key=api_key, api_secret=api_secret)
    return EasyredirClient(resolved)


def rule_rows(rules: list[Rule]) -> list[list[object]]:
    return [
        [
            r.id,
            r.attributes.source_urls,
            r.attributes.target_url,
            r.attributes.response_type,
            r.attributes.forward_params,
            r.attributes.forward_path,
        ]
        for r in rules
    ]


def host_rows(hosts: list[Host]) -> list[list[object]]:
    return [
        [
            h.id,
            h.attributes.name,
            h.attributes.dns_status,
            h.attributes.certificate_status,
        ]
        for h in hosts
    ]


def more_caption(has_more: bool, count: int) -> str:
    caption = f"Total: {count}"
    if has_more:
        caption += " (more available: use --all or --starting-after)"
    return caption
