"""Command-line smoke tests for the World API client.

Usage:
    python -m frontier_world.cli --help
    python -m frontier_world.cli health
    python -m frontier_world.cli types --all
"""

from frontier_world.cli.main import app

__all__ = ["app"]
