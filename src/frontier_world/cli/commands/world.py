"""World API query commands."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer

from frontier_world.cli.state import CLIState
from frontier_world.cli.utils.output import (
    console,
    create_types_table,
    print_error,
    print_success,
)
from frontier_world.client import WorldAPIClient
from frontier_world.config import ClientConfig
from frontier_world.exceptions import HTTPStatusError, WorldAPIError
from frontier_world.models import GameType


def _resolve_config(ctx: typer.Context) -> ClientConfig:
    state = ctx.obj if isinstance(ctx.obj, CLIState) else CLIState()
    try:
        return state.client_config()
    except (TypeError, ValueError) as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)


def health(ctx: typer.Context) -> None:
    """Check whether the World API is healthy.

    Exits with status 1 when the API is unhealthy or unreachable.
    """
    config = _resolve_config(ctx)
    healthy = asyncio.run(_health(config))

    if not healthy:
        print_error(f"World API at {config.base_url} is unhealthy")
        raise typer.Exit(1)

    print_success(f"World API at {config.base_url} is healthy")


async def _health(config: ClientConfig) -> bool:
    async with WorldAPIClient(config) as client:
        return await client.health()


def types(
    ctx: typer.Context,
    fetch_all: Annotated[
        bool,
        typer.Option("--all", "-a", help="Fetch every page of game types"),
    ] = False,
    limit: Annotated[
        int,
        typer.Option("--limit", "-l", min=1, help="Page size"),
    ] = 10,
    offset: Annotated[
        int,
        typer.Option("--offset", "-o", min=0, help="Offset of the page"),
    ] = 0,
) -> None:
    """List game types.

    Examples:
        python -m frontier_world.cli types --limit 20
        python -m frontier_world.cli types --all
    """
    config = _resolve_config(ctx)

    try:
        game_types, total = asyncio.run(_types(config, fetch_all, limit, offset))
    except HTTPStatusError as e:
        print_error(f"could not fetch types: {e} {e.parsed_body or ''}".rstrip())
        raise typer.Exit(1)
    except WorldAPIError as e:
        print_error(f"could not fetch types: {e}")
        raise typer.Exit(1)

    if not game_types:
        console.print("[dim]No game types found.[/dim]")
        return

    console.print(create_types_table(game_types))
    console.print(f"\nShowing {len(game_types)} of {total} game type(s)")


async def _types(
    config: ClientConfig, fetch_all: bool, limit: int, offset: int
) -> tuple[list[GameType], int]:
    async with WorldAPIClient(config) as client:
        if fetch_all:
            game_types = await client.all_types()
            return game_types, len(game_types)

        page = await client.types(limit=limit, offset=offset)
        return [GameType.model_validate(item) for item in page.items], page.total
