"""Config subcommands for configuration management."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import yaml

from frontier_world.cli.utils.output import console, print_error, print_success, print_warning
from frontier_world.config import ClientConfig

app = typer.Typer(no_args_is_help=True)

SLOW_INTERVAL_MILLISECONDS = 10_000


@app.command("validate")
def validate(
    config_path: Annotated[
        Path,
        typer.Argument(
            help="Path to configuration file to validate",
            exists=True,
            dir_okay=False,
        ),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show detailed configuration"),
    ] = False,
) -> None:
    """Validate a client configuration file.

    Examples:
        python -m frontier_world.cli config validate client.yaml
    """
    try:
        with open(config_path) as f:
            raw_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        print_error(f"Invalid YAML syntax: {e}")
        raise typer.Exit(1)

    if raw_data is None:
        print_error("Configuration file is empty")
        raise typer.Exit(1)

    if not isinstance(raw_data, dict):
        print_error("Configuration must be a YAML mapping (dictionary)")
        raise typer.Exit(1)

    try:
        config = ClientConfig.from_dict(raw_data)
    except TypeError as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)
    except ValueError as e:
        print_error(f"Invalid configuration value: {e}")
        raise typer.Exit(1)

    warnings: list[str] = []
    if not config.base_url.startswith(("http://", "https://")):
        warnings.append(f"base_url ({config.base_url}) is not an http(s) URL")
    if config.interval_milliseconds > SLOW_INTERVAL_MILLISECONDS:
        warnings.append(
            f"interval_milliseconds ({config.interval_milliseconds:,}) is very high - "
            "each batch of requests waits that long"
        )

    print_success(f"Configuration is valid: {config_path}")

    if warnings:
        console.print()
        for warning in warnings:
            print_warning(warning)

    if verbose:
        console.print()
        console.print("[bold]Configuration Summary:[/bold]")
        console.print(f"  Base URL: {config.base_url}")
        console.print(f"  Timeout: {config.timeout}s")
        console.print(f"  Interval: {config.interval_milliseconds}ms")
        console.print(f"  Max Per Interval: {config.max_per_interval:,}")
        console.print(f"  Page Size: {config.page_size}")
