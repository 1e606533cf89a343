"""
DigestResult model for asset-hash, the outcome of hashing one file.
"""
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class DigestResult(BaseModel):
    """
    Represents the formatted digest of one file and the cache-busting name derived from it.

    Attributes:
        path (str): Path of the hashed file.
        digest (str): Formatted, possibly truncated digest.
        algorithm (str): Hash algorithm used.
        encoding (str): Encoding applied to the raw digest.
        max_length (Optional[int]): Truncation bound that was applied.
    """

    model_config = ConfigDict(frozen=True, extra='forbid')

    path: str = Field(..., description="Path of the hashed file")
    digest: str = Field(..., description="Formatted digest")
    algorithm: str = Field(..., description="Hash algorithm used")
    encoding: str = Field(..., description="Encoding applied to the raw digest")
    max_length: Optional[int] = Field(None, description="Truncation bound that was applied")

    @property
    def extension(self) -> str:
        """File extension including the leading dot, or an empty string."""
        return Path(self.path).suffix

    @property
    def hashed_name(self) -> str:
        """Cache-busting filename: digest followed by the original extension."""
        return self.digest + self.extension
