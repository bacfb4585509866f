"""Endpoint request building.

A single EndpointRequest type carries the optional capabilities an endpoint
may need: a pagination window, a bearer token and a response format. It
renders the relative path with its query string and the headers to send.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Literal
from urllib.parse import urlencode

Format = Literal["json", "pod"]

FORMATS: tuple[str, ...] = ("json", "pod")


@dataclass(frozen=True)
class PageWindow:
    """A limit/offset slice of a paginated listing."""

    limit: int
    offset: int = 0

    def __post_init__(self) -> None:
        """Validate the window after initialization."""
        if self.limit < 1:
            raise ValueError("limit parameter required")
        if self.offset < 0:
            raise ValueError("offset must be non-negative")

    def next(self) -> PageWindow:
        """Return the window immediately after this one."""
        return PageWindow(limit=self.limit, offset=self.offset + self.limit)

    def to_params(self) -> dict[str, str]:
        return {"limit": str(self.limit), "offset": str(self.offset)}


@dataclass(frozen=True)
class EndpointRequest:
    """Relative request description for one World API endpoint.

    Attributes:
        path: Endpoint path relative to the API base URL (e.g. "v2/types").
        window: Pagination window, for listing endpoints.
        bearer: Bearer token, for authenticated endpoints.
        format: Response format, for endpoints offering a POD variant.
        params: Extra query parameters.

    Example:
        request = EndpointRequest(
            "v2/smartcharacters/me/jumps",
            window=PageWindow(limit=50),
            bearer=token,
        )
        request.path_with_query()  # "v2/smartcharacters/me/jumps?limit=50&offset=0"
    """

    path: str
    window: PageWindow | None = None
    bearer: str | None = None
    format: Format | None = None
    params: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate capability options after initialization."""
        if not self.path:
            raise ValueError("path parameter required")
        if self.bearer is not None and not self.bearer:
            raise ValueError("bearer parameter required")
        if self.format is not None and self.format not in FORMATS:
            raise ValueError(f"format must be one of {', '.join(FORMATS)}")

    def query_params(self) -> dict[str, str]:
        params = dict(self.params)
        if self.window is not None:
            params.update(self.window.to_params())
        if self.format is not None:
            params["format"] = self.format
        return params

    def path_with_query(self) -> str:
        """Render the relative path followed by its URL-encoded query string."""
        params = self.query_params()
        if not params:
            return self.path
        return f"{self.path}?{urlencode(params)}"

    def headers(self) -> dict[str, str]:
        if self.bearer is None:
            return {}
        return {"Authorization": f"Bearer {self.bearer}"}

    def with_window(self, window: PageWindow) -> EndpointRequest:
        """Return a copy of this request for another page."""
        return replace(self, window=window)


def build_url(base_url: str, request: EndpointRequest) -> str:
    """Join the API base URL and a request's relative path."""
    return f"{base_url.rstrip('/')}/{request.path_with_query().lstrip('/')}"
