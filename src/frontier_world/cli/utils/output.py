"""Rich console output formatting utilities."""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from frontier_world.models import GameType

console = Console()


def print_error(message: str) -> None:
    """Print an error message in red."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def print_success(message: str) -> None:
    """Print a success message in green."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def _cell(value: object) -> str:
    return "-" if value is None else str(value)


def create_types_table(types: Sequence[GameType], title: str = "Game Types") -> Table:
    """Create a rich table listing game types.

    Args:
        types: GameType models to display

    Returns:
        Rich Table instance
    """
    table = Table(title=title)

    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name", style="magenta")
    table.add_column("Group")
    table.add_column("Category")
    table.add_column("Mass", justify="right")
    table.add_column("Volume", justify="right")

    for game_type in types:
        table.add_row(
            _cell(game_type.id),
            _cell(game_type.name),
            _cell(game_type.group_name),
            _cell(game_type.category_name),
            _cell(game_type.mass),
            _cell(game_type.volume),
        )

    return table
