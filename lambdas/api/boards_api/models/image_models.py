"""Board and image record models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class BoardRecord(BaseModel):
    """Board as seen by the transfer operation: identity and owner only."""

    id: str = Field(..., description="Board ID")
    owner_id: str = Field(..., alias="ownerId", description="Owning user ID")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ImageRecord(BaseModel):
    """
    Image record.

    ``id``, ``board_id``, ``storage_path`` and ``position`` are what the
    transfer logic works with. The remaining fields are descriptive metadata
    that is carried over verbatim and never interpreted.
    """

    id: str = Field(..., description="Image ID")
    board_id: str = Field(..., alias="boardId", description="Parent board ID")
    storage_path: str = Field(
        ..., alias="storagePath", description="Object key of the payload"
    )
    position: int = Field(..., ge=1, description="Display position within the board")

    mime_type: Optional[str] = Field(None, alias="mimeType")
    width: Optional[int] = None
    height: Optional[int] = None
    size_bytes: Optional[int] = Field(None, alias="sizeBytes")
    original_filename: Optional[str] = Field(None, alias="originalFilename")
    source_url: Optional[str] = Field(None, alias="sourceUrl")
    caption: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_response(self) -> Dict[str, Any]:
        """Render the record with API (camelCase) field names."""
        return self.model_dump(by_alias=True)
