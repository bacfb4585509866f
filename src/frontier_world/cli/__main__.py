"""Entry point for running the CLI as a module.

Usage:
    python -m frontier_world.cli --help
"""

from frontier_world.cli.main import app

if __name__ == "__main__":
    app()
