"""CLI utility modules."""

from frontier_world.cli.utils.output import (
    console,
    create_types_table,
    print_error,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "create_types_table",
    "print_error",
    "print_success",
    "print_warning",
]
