"""Main CLI application and entry point.

This module defines the main Typer application, its global options and
aggregates the command groups (world queries, config).
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from frontier_world.cli.commands import config as config_commands
from frontier_world.cli.commands import world as world_commands
from frontier_world.cli.state import CLIState

app = typer.Typer(
    name="frontier-world",
    help="Smoke-test CLI for the EVE:Frontier World API client",
    no_args_is_help=True,
    pretty_exceptions_enable=True,
)

app.command("health")(world_commands.health)
app.command("types")(world_commands.types)
app.add_typer(config_commands.app, name="config", help="Configuration utilities")


@app.callback()
def main_callback(
    ctx: typer.Context,
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", "-u", help="World API base URL"),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option(
            "--config",
            "-c",
            help="Path to a YAML client configuration file",
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """EVE:Frontier World API client CLI.

    Use the subcommands to check the API health, list game types
    and validate configuration files.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.obj = CLIState(base_url=base_url, config_path=config_path)


if __name__ == "__main__":
    app()
