"""
Object storage I/O models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class UploadResult(BaseModel):
    """Location of a stored object."""

    bucket: str
    path: str = Field(description="Object path inside the bucket, e.g. '<user_id>/<epoch_ms>.png'")
    url: str = Field(description="Public URL of the object")
