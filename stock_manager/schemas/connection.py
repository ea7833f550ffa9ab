"""Remote connection schemas."""

from pydantic import BaseModel, Field


class ConnectionRequest(BaseModel):
    """Remote store credentials entered in the settings screen."""

    url: str = Field(min_length=1, description="Remote project URL")
    key: str = Field(min_length=1, description="Remote access key")

    model_config = {"extra": "forbid"}


class ConnectionStatus(BaseModel):
    """Current remote connectivity."""

    connected: bool = Field(description="Whether a remote client is active")
    url: str | None = Field(default=None, description="Stored remote URL, if any")


class SyncResult(BaseModel):
    """Outcome of a one-shot local-to-cloud sync."""

    products_synced: int = Field(default=0)
    categories_synced: int = Field(default=0)
    errors: list[str] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors
