"""Base model configuration for options and configuration structures."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable pydantic model used for parser configuration."""

    model_config = ConfigDict(frozen=True)
