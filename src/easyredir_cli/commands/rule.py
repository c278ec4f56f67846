"""Rule commands: list, create, update, remove."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from easyredir_cli.client.errors import error_handler
from easyredir_cli.commands._common import (
    RULE_COLUMNS,
    AllOpt,
    ApiKeyOpt,
    ApiSecretOpt,
    EndingBeforeOpt,
    FormatOpt,
    LimitOpt,
    ProfileOpt,
    StartingAfterOpt,
    make_client,
    more_caption,
    rule_rows,
)
from easyredir_cli.models.common import ListOptions
from easyredir_cli.models.rule import RESPONSE_TYPES, RuleAttributes
from easyredir_cli.output.formatter import output
from easyredir_cli.resources import rules

app = typer.Typer(name="rule", help="Manage redirect rules.")
console = Console()

SourceOpt = Annotated[
    Optional[list[str]],
    typer.Option("--source", "-s", help="Source URL (repeat for several)"),
]
TargetOpt = Annotated[
    Optional[str],
    typer.Option("--target", "-t", help="Target URL"),
]
ResponseTypeOpt = Annotated[
    Optional[str],
    typer.Option("--response-type", help=f"One of: {', '.join(RESPONSE_TYPES)}"),
]
ForwardParamsOpt = Annotated[
    Optional[bool],
    typer.Option("--forward-params/--no-forward-params", help="Forward query parameters"),
]
ForwardPathOpt = Annotated[
    Optional[bool],
    typer.Option("--forward-path/--no-forward-path", help="Forward the request path"),
]
IdempotencyKeyOpt = Annotated[
    Optional[str],
    typer.Option("--idempotency-key", help="Reuse a key to retry a request safely"),
]


def _attributes(
    source: list[str] | None,
    target: str | None,
    response_type: str | None,
    forward_params: bool | None,
    forward_path: bool | None,
) -> RuleAttributes:
    if response_type is not None and response_type not in RESPONSE_TYPES:
        raise ValueError(
            f"Invalid response type '{response_type}'. Use one of: {', '.join(RESPONSE_TYPES)}."
        )
    return RuleAttributes(
        source_urls=list(source or []),
        target_url=target,
        response_type=response_type,
        forward_params=forward_params,
        forward_path=forward_path,
    )


@app.command("list")
@error_handler
def list_rules(
    source_filter: Annotated[
        str, typer.Option("--source", "-s", help="Only rules whose source matches"),
    ] = "",
    target_filter: Annotated[
        str, typer.Option("--target", "-t", help="Only rules whose target matches"),
    ] = "",
    limit: LimitOpt = 0,
    starting_after: StartingAfterOpt = "",
    ending_before: EndingBeforeOpt = "",
    fetch_all: AllOpt = False,
    profile: ProfileOpt = None,
    api_key: ApiKeyOpt = None,
    api_secret: ApiSecretOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List redirect rules."""
    options = ListOptions(
        starting_after=starting_after,
        ending_before=ending_before,
        source_filter=source_filter,
        target_filter=target_filter,
        limit=limit,
    )
    with make_client(profile, api_key, api_secret) as client:
        if fetch_all:
            result = rules.list_all_rules(client, options)
            has_more = False
        else:
            result = rules.list_rules(client, options)
            has_more = result.has_more
    output(
        result,
        fmt,
        columns=RULE_COLUMNS,
        rows=rule_rows(result.data),
        title="Redirect Rules",
        caption=more_caption(has_more, len(result.data)),
    )


@app.command()
@error_handler
def create(
    source: SourceOpt = None,
    target: TargetOpt = None,
    response_type: ResponseTypeOpt = None,
    forward_params: ForwardParamsOpt = None,
    forward_path: ForwardPathOpt = None,
    idempotency_key: IdempotencyKeyOpt = None,
    profile: ProfileOpt = None,
    api_key: ApiKeyOpt = None,
    api_secret: ApiSecretOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Create a redirect rule from one or more source URLs to a target."""
    attributes = _attributes(source, target, response_type, forward_params, forward_path)
    with make_client(profile, api_key, api_secret) as client:
        rule = rules.create_rule(client, attributes, idempotency_key=idempotency_key)
    if fmt == "table":
        console.print(f"[green]Rule '{rule.id}' created.[/]")
    output(rule, fmt, title=f"Rule: {rule.id}")


@app.command()
@error_handler
def update(
    rule_id: Annotated[str, typer.Argument(help="Rule ID")],
    source: SourceOpt = None,
    target: TargetOpt = None,
    response_type: ResponseTypeOpt = None,
    forward_params: ForwardParamsOpt = None,
    forward_path: ForwardPathOpt = None,
    idempotency_key: IdempotencyKeyOpt = None,
    profile: ProfileOpt = None,
    api_key: ApiKeyOpt = None,
    api_secret: ApiSecretOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Update a redirect rule. Only the options given are changed."""
    attributes = _attributes(source, target, response_type, forward_params, forward_path)
    with make_client(profile, api_key, api_secret) as client:
        rule = rules.update_rule(client, rule_id, attributes, idempotency_key=idempotency_key)
    if fmt == "table":
        console.print(f"[green]Rule '{rule.id}' updated.[/]")
    output(rule, fmt, title=f"Rule: {rule.id}")


@app.command()
@error_handler
def remove(
    rule_id: Annotated[str, typer.Argument(help="Rule ID")],
    force: Annotated[bool, typer.Option("--force", help="Skip confirmation")] = False,
    profile: ProfileOpt = None,
    api_key: ApiKeyOpt = None,
    api_secret: ApiSecretOpt = None,
) -> None:
    """Remove a redirect rule."""
    if not force and not Confirm.ask(f"Remove rule '{rule_id}'?"):
        console.print("Cancelled.")
        return
    with make_client(profile, api_key, api_secret) as client:
        rules.remove_rule(client, rule_id)
    console.print(f"[green]Rule '{rule_id}' removed.[/]")
