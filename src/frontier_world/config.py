"""Configuration for the World API client.

This module defines the ClientConfig dataclass holding the connection and
dispatch settings of a WorldAPIClient, with YAML and environment loaders.
"""

import os
import sys
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from frontier_world.request_queue import QueueConfig

DEFAULT_BASE_URL = "https://blockchain-gateway-stillness.live.tech.evefrontier.com"

ENV_PREFIX = "FRONTIER_WORLD_"


@dataclass
class ClientConfig:
    """Configuration for a WorldAPIClient.

    Attributes:
        base_url: Base URL endpoint of the World API
        timeout: HTTP timeout in seconds for a single request
        interval_milliseconds: Wait before each dispatched batch of requests
        max_per_interval: Maximum requests dispatched per batch
        page_size: Items requested per page when aggregating listings

    Example:
        config = ClientConfig(
            base_url="https://world-api.example.com",
            interval_milliseconds=100,
            max_per_interval=5,
        )
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    interval_milliseconds: int = 0
    max_per_interval: int = sys.maxsize
    page_size: int = 100

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.base_url:
            raise ValueError("base_url configuration required")
        self.base_url = self.base_url.rstrip("/")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.interval_milliseconds < 0:
            raise ValueError("interval_milliseconds must be non-negative")
        if self.max_per_interval < 1:
            raise ValueError("max_per_interval must be at least 1")
        if self.page_size < 1:
            raise ValueError("page_size must be at least 1")

    def queue_config(self) -> QueueConfig:
        """Dispatch limits for the client's request queue."""
        return QueueConfig(
            interval_milliseconds=self.interval_milliseconds,
            max_per_interval=self.max_per_interval,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file.

        Args:
            path: Path to the output YAML file.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ClientConfig":
        """Create configuration from a dictionary.

        Args:
            data: Dictionary containing configuration values.

        Returns:
            ClientConfig instance.

        Raises:
            TypeError: If the dictionary contains unknown keys.
            ValueError: If a value is out of range.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise TypeError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ClientConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            ClientConfig instance.
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a YAML mapping (dictionary)")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Create configuration from FRONTIER_WORLD_* environment variables.

        Unset variables fall back to the defaults.
        """
        data: dict[str, Any] = {}
        base_url = os.environ.get(f"{ENV_PREFIX}BASE_URL")
        if base_url:
            data["base_url"] = base_url
        timeout = os.environ.get(f"{ENV_PREFIX}TIMEOUT")
        if timeout:
            data["timeout"] = float(timeout)
        interval = os.environ.get(f"{ENV_PREFIX}INTERVAL_MS")
        if interval:
            data["interval_milliseconds"] = int(interval)
        max_per_interval = os.environ.get(f"{ENV_PREFIX}MAX_PER_INTERVAL")
        if max_per_interval:
            data["max_per_interval"] = int(max_per_interval)
        page_size = os.environ.get(f"{ENV_PREFIX}PAGE_SIZE")
        if page_size:
            data["page_size"] = int(page_size)
        return cls(**data)
