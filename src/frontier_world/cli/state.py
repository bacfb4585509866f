"""Shared state passed from the CLI callback to its commands."""

from dataclasses import dataclass
from pathlib import Path

from frontier_world.config import ClientConfig


@dataclass
class CLIState:
    """Global CLI options.

    Attributes:
        base_url: Base URL override from --base-url
        config_path: YAML configuration file from --config
    """

    base_url: str | None = None
    config_path: Path | None = None

    def client_config(self) -> ClientConfig:
        """Resolve the client configuration.

        The YAML file wins over FRONTIER_WORLD_* environment variables, and
        --base-url wins over both.
        """
        if self.config_path is not None:
            config = ClientConfig.from_yaml(self.config_path)
        else:
            config = ClientConfig.from_env()
        if self.base_url:
            config = ClientConfig.from_dict({**config.to_dict(), "base_url": self.base_url})
        return config
