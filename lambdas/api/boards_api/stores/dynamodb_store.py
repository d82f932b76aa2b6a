"""DynamoDB-backed board and image record store (PynamoDB)."""

import os
from typing import List, Optional, Sequence

from aws_lambda_powertools import Logger, Tracer
from db_models import (
    METADATA_SK,
    BoardModel,
    ImageModel,
    board_pk,
    image_sk,
)
from models import BoardRecord, ImageRecord
from pynamodb.connection import Connection
from pynamodb.exceptions import PynamoDBException
from pynamodb.transactions import TransactWrite

from .base import BoardRecordStore, RecordStoreError

logger = Logger(
    service="boards-dynamodb-store", level=os.environ.get("LOG_LEVEL", "INFO")
)
tracer = Tracer(service="boards-dynamodb-store")


def _optional_int(value) -> Optional[int]:
    return int(value) if value is not None else None


def board_from_model(board: BoardModel) -> BoardRecord:
    return BoardRecord(id=board.boardId, owner_id=board.ownerId)


def image_from_model(image: ImageModel) -> ImageRecord:
    return ImageRecord(
        id=image.imageId,
        board_id=image.boardId,
        storage_path=image.storagePath,
        position=int(image.position),
        mime_type=image.mimeType,
        width=_optional_int(image.width),
        height=_optional_int(image.height),
        size_bytes=_optional_int(image.sizeBytes),
        original_filename=image.originalFilename,
        source_url=image.sourceUrl,
        caption=image.caption,
        created_at=image.createdAt,
    )


def image_to_model(image: ImageRecord) -> ImageModel:
    return ImageModel(
        board_pk(image.board_id),
        image_sk(image.id),
        imageId=image.id,
        boardId=image.board_id,
        storagePath=image.storage_path,
        position=image.position,
        mimeType=image.mime_type,
        width=image.width,
        height=image.height,
        sizeBytes=image.size_bytes,
        originalFilename=image.original_filename,
        sourceUrl=image.source_url,
        caption=image.caption,
        createdAt=image.created_at,
    )


class DynamoBoardRecordStore(BoardRecordStore):
    """Boards and images in the single boards table."""

    def __init__(self, connection: Optional[Connection] = None):
        self._connection = connection

    def _get_connection(self) -> Connection:
        if self._connection is None:
            self._connection = Connection(
                region=os.environ.get("AWS_REGION", "us-east-1")
            )
        return self._connection

    @tracer.capture_method
    def get_boards(self, board_ids: Sequence[str]) -> List[BoardRecord]:
        # BatchGet rejects duplicate keys
        keys = [
            (board_pk(board_id), METADATA_SK) for board_id in dict.fromkeys(board_ids)
        ]
        try:
            return [board_from_model(board) for board in BoardModel.batch_get(keys)]
        except PynamoDBException as e:
            raise RecordStoreError(f"Failed to get boards: {e}") from e

    @tracer.capture_method
    def get_images(
        self, board_id: str, image_ids: Sequence[str]
    ) -> List[ImageRecord]:
        # Keys carry the board partition, so foreign images can never match
        keys = [
            (board_pk(board_id), image_sk(image_id))
            for image_id in dict.fromkeys(image_ids)
        ]
        try:
            return [image_from_model(image) for image in ImageModel.batch_get(keys)]
        except PynamoDBException as e:
            raise RecordStoreError(f"Failed to get images: {e}") from e

    @tracer.capture_method
    def get_max_position(self, board_id: str) -> Optional[int]:
        try:
            for image in ImageModel.position_index.query(
                board_pk(board_id), scan_index_forward=False, limit=1
            ):
                return int(image.position)
        except PynamoDBException as e:
            raise RecordStoreError(f"Failed to query max position: {e}") from e
        return None

    @tracer.capture_method(capture_response=False)
    def insert_images(self, images: Sequence[ImageRecord]) -> List[ImageRecord]:
        try:
            with TransactWrite(connection=self._get_connection()) as transaction:
                for image in images:
                    transaction.save(
                        image_to_model(image),
                        condition=ImageModel.SK.does_not_exist(),
                    )
        except PynamoDBException as e:
            raise RecordStoreError(f"Failed to insert images: {e}") from e

        logger.info(f"Inserted {len(images)} image record(s) in one transaction")
        return list(images)

    @tracer.capture_method
    def delete_images(self, board_id: str, image_ids: Sequence[str]) -> None:
        try:
            with ImageModel.batch_write() as batch:
                for image_id in dict.fromkeys(image_ids):
                    batch.delete(ImageModel(board_pk(board_id), image_sk(image_id)))
        except PynamoDBException as e:
            raise RecordStoreError(f"Failed to delete images: {e}") from e
