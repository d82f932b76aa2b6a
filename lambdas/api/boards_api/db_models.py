"""
PynamoDB models for Boards API - Single Table Design.

Boards and their images share one DynamoDB table:
- Board:  PK=BOARD#{boardId}  SK=METADATA
- Image:  PK=BOARD#{boardId}  SK=IMAGE#{imageId}

Image items carry a ``position`` attribute that is also the range key of the
``position-index`` LSI. Board items have no position, so the index only ever
contains images and a descending query with limit 1 yields the highest
position in a board.
"""

import os

from pynamodb.attributes import NumberAttribute, UnicodeAttribute
from pynamodb.indexes import AllProjection, LocalSecondaryIndex
from pynamodb.models import Model

# Key prefixes for single-table design
BOARD_PK_PREFIX = "BOARD#"
METADATA_SK = "METADATA"
IMAGE_SK_PREFIX = "IMAGE#"


def board_pk(board_id: str) -> str:
    return f"{BOARD_PK_PREFIX}{board_id}"


def image_sk(image_id: str) -> str:
    return f"{IMAGE_SK_PREFIX}{image_id}"


class PositionIndex(LocalSecondaryIndex):
    """Images of a board ordered by display position."""

    class Meta:
        index_name = "position-index"
        projection = AllProjection()

    PK = UnicodeAttribute(hash_key=True)
    position = NumberAttribute(range_key=True)


class BoardModel(Model):
    """
    Board metadata.

    Access Pattern:
    - Board by id: PK=BOARD#{boardId}, SK=METADATA
    """

    class Meta:
        table_name = os.environ.get("BOARDS_TABLE_NAME", "boards_table_dev")
        region = os.environ.get("AWS_REGION", "us-east-1")

    # Primary keys
    PK = UnicodeAttribute(hash_key=True)  # BOARD#{boardId}
    SK = UnicodeAttribute(range_key=True)  # METADATA

    boardId = UnicodeAttribute()
    ownerId = UnicodeAttribute()
    name = UnicodeAttribute(null=True)
    createdAt = UnicodeAttribute(null=True)
    updatedAt = UnicodeAttribute(null=True)


class ImageModel(Model):
    """
    Image record belonging to exactly one board.

    Access Patterns:
    - Image by id within a board: PK=BOARD#{boardId}, SK=IMAGE#{imageId}
    - Highest position in a board: position-index, descending, limit 1
    """

    class Meta:
        table_name = os.environ.get("BOARDS_TABLE_NAME", "boards_table_dev")
        region = os.environ.get("AWS_REGION", "us-east-1")

    # Primary keys
    PK = UnicodeAttribute(hash_key=True)  # BOARD#{boardId}
    SK = UnicodeAttribute(range_key=True)  # IMAGE#{imageId}

    imageId = UnicodeAttribute()
    boardId = UnicodeAttribute()
    storagePath = UnicodeAttribute()
    position = NumberAttribute()

    # Descriptive metadata, copied verbatim on transfer
    mimeType = UnicodeAttribute(null=True)
    width = NumberAttribute(null=True)
    height = NumberAttribute(null=True)
    sizeBytes = NumberAttribute(null=True)
    originalFilename = UnicodeAttribute(null=True)
    sourceUrl = UnicodeAttribute(null=True)
    caption = UnicodeAttribute(null=True)
    createdAt = UnicodeAttribute(null=True)

    position_index = PositionIndex()
