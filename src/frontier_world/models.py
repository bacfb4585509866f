"""World API response models.

Pydantic models for the response shapes the client interprets. Fields are
optional and unknown fields are kept, since the SDK only checks presence.
"""

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response from GET /health."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    ok: bool = False


class GameType(BaseModel):
    """A game item type from GET /v2/types."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int | None = None
    name: str | None = None
    description: str | None = None
    mass: float | None = None
    radius: float | None = None
    volume: float | None = None
    portion_size: int | None = Field(default=None, alias="portionSize")
    group_name: str | None = Field(default=None, alias="groupName")
    group_id: int | None = Field(default=None, alias="groupId")
    category_name: str | None = Field(default=None, alias="categoryName")
    category_id: int | None = Field(default=None, alias="categoryId")
    icon_url: str | None = Field(default=None, alias="iconUrl")
