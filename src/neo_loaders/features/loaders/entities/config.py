"""Loader configuration for neo-loaders."""

from typing import Any, Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoaderSettings(BaseSettings):
    """Settings applied to every service loader."""

    model_config = SettingsConfigDict(
        env_prefix="NEO_LOADER_",
        case_sensitive=False,
        extra="ignore",
    )

    max_batch_size: Optional[int] = Field(default=None, ge=1, description="Max keys per backend bulk read")
    batch_cache: bool = Field(default=True, description="Memoize ids inside each batch group")
    stripped_query_operators: List[str] = Field(
        default_factory=lambda: ["$limit", "$skip"],
        description="Pagination operators removed from batched queries",
    )

    def to_loader_options(self) -> Dict[str, Any]:
        """Convert to keyword options for ServiceLoader."""
        options: Dict[str, Any] = {
            "cache": self.batch_cache,
            "stripped_query_operators": tuple(self.stripped_query_operators),
        }
        if self.max_batch_size is not None:
            options["max_batch_size"] = self.max_batch_size
        return options
