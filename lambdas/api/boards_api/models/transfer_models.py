"""Transfer request models."""

from typing import Any, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from .common_models import MAX_BATCH_SIZE, TransferOperation, is_valid_identifier

# Field name -> name used in error payloads
WIRE_FIELD_NAMES = {
    "operation": "operation",
    "source_board_id": "sourceCollectionId",
    "dest_board_id": "destCollectionId",
    "image_ids": "itemIds",
}


class TransferImagesRequest(BaseModel):
    """
    Request model for copying or moving images between two boards.

    The collection-style field names are canonical; the board-style names
    sent by older clients are accepted as aliases.
    """

    operation: TransferOperation = Field(..., description="'copy' or 'move'")
    source_board_id: str = Field(
        ...,
        validation_alias=AliasChoices("sourceCollectionId", "sourceBoardId"),
        description="Board the images are taken from",
    )
    dest_board_id: str = Field(
        ...,
        validation_alias=AliasChoices("destCollectionId", "destBoardId"),
        description="Board the images are added to",
    )
    image_ids: Tuple[str, ...] = Field(
        ...,
        validation_alias=AliasChoices("itemIds", "imageIds"),
        description=f"Ids of the images to transfer (1..{MAX_BATCH_SIZE})",
    )

    @field_validator("operation", mode="before")
    @classmethod
    def validate_operation(cls, v: Any) -> Any:
        """Only the two recognized operations are accepted."""
        if not isinstance(v, str) or v not in (op.value for op in TransferOperation):
            raise PydanticCustomError(
                "invalid_operation",
                "operation must be 'copy' or 'move'",
                {"value": v},
            )
        return v

    @field_validator("source_board_id", "dest_board_id", mode="before")
    @classmethod
    def validate_board_id(cls, v: Any, info) -> Any:
        """Board ids must be canonical UUIDs."""
        if not is_valid_identifier(v):
            field = WIRE_FIELD_NAMES[info.field_name]
            raise PydanticCustomError(
                "invalid_identifier_format",
                "Invalid {field} format",
                {"field": field, "value": v},
            )
        return v

    @field_validator("image_ids", mode="before")
    @classmethod
    def validate_image_ids(cls, v: Any) -> Any:
        """Validate batch bounds first, then each entry in order."""
        if not isinstance(v, (list, tuple)):
            raise PydanticCustomError(
                "empty_batch", "itemIds must be a non-empty array", {}
            )
        if len(v) == 0:
            raise PydanticCustomError(
                "empty_batch", "itemIds array cannot be empty", {}
            )
        if len(v) > MAX_BATCH_SIZE:
            raise PydanticCustomError(
                "batch_too_large",
                "Cannot transfer more than {max_batch_size} images at once",
                {"received": len(v), "max_batch_size": MAX_BATCH_SIZE},
            )
        for entry in v:
            if not is_valid_identifier(entry):
                raise PydanticCustomError(
                    "invalid_identifier_format",
                    "Invalid UUID format: {value}",
                    {"field": WIRE_FIELD_NAMES["image_ids"], "value": entry},
                )
        return v

    @property
    def board_ids(self) -> Tuple[str, str]:
        return self.source_board_id, self.dest_board_id

    def unique_image_ids(self) -> Tuple[str, ...]:
        """Requested ids without duplicates, in first-occurrence order."""
        return tuple(dict.fromkeys(self.image_ids))

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "operation": "copy",
                "sourceCollectionId": "11111111-1111-1111-1111-111111111111",
                "destCollectionId": "22222222-2222-2222-2222-222222222222",
                "itemIds": ["33333333-3333-3333-3333-333333333333"],
            }
        },
    )
