"""Ownership guard: both boards must exist and belong to the caller."""

import os
from typing import List

from aws_lambda_powertools import Logger, Tracer
from models import BoardRecord, TransferImagesRequest
from stores import BoardRecordStore, RecordStoreError
from user_auth import is_resource_owner

from .errors import (
    CollectionNotFoundError,
    OwnershipViolationError,
    StoreQueryFailedError,
)

logger = Logger(service="boards-transfer", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="boards-transfer")


@tracer.capture_method
def verify_board_ownership(
    record_store: BoardRecordStore, request: TransferImagesRequest, caller_id: str
) -> List[BoardRecord]:
    """
    Confirm the caller owns both the source and the destination board.

    Both boards are fetched in one lookup. Every board the caller does not own
    is reported, not just the first one.

    Returns:
        The two board records

    Raises:
        StoreQueryFailedError: the lookup itself failed
        CollectionNotFoundError: fewer than two boards came back
        OwnershipViolationError: at least one board has another owner
    """
    try:
        boards = record_store.get_boards(request.board_ids)
    except RecordStoreError as e:
        logger.error(f"Boards query error: {e}")
        raise StoreQueryFailedError("boards", str(e)) from e

    if len(boards) < 2:
        logger.warning(
            "One or both boards not found",
            extra={"requested": list(request.board_ids), "found": len(boards)},
        )
        raise CollectionNotFoundError(request.board_ids)

    unauthorized = [
        board.id
        for board in boards
        if not is_resource_owner(caller_id, board.owner_id)
    ]
    if unauthorized:
        logger.warning(
            f"User {caller_id} does not own board(s) {unauthorized}",
            extra={"unauthorized_board_ids": unauthorized},
        )
        raise OwnershipViolationError(unauthorized)

    return boards
