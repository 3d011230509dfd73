"""Base DTO class."""

from pydantic import BaseModel, ConfigDict


class DTO(BaseModel):
    """Immutable base for events and results crossing the application boundary."""

    model_config = ConfigDict(frozen=True)
