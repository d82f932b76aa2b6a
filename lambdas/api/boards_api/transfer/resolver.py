"""Resolve requested image ids to records in the source board."""

import os
from typing import List

from aws_lambda_powertools import Logger, Tracer
from models import ImageRecord, TransferImagesRequest
from stores import BoardRecordStore, RecordStoreError

from .errors import NoMatchingItemsError, StoreQueryFailedError

logger = Logger(service="boards-transfer", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="boards-transfer")


@tracer.capture_method(capture_response=False)
def resolve_source_images(
    record_store: BoardRecordStore, request: TransferImagesRequest
) -> List[ImageRecord]:
    """
    Load the requested images that belong to the source board.

    Images of other boards are silently excluded. A partial match is not an
    error; only an empty result is. The result follows the order in which the
    ids were requested, duplicates collapsed.
    """
    requested = request.unique_image_ids()

    try:
        images = record_store.get_images(request.source_board_id, requested)
    except RecordStoreError as e:
        logger.error(f"Images query error: {e}")
        raise StoreQueryFailedError("images", str(e)) from e

    # The store may return foreign rows or ignore ordering; enforce both here
    by_id = {
        image.id: image
        for image in images
        if image.board_id == request.source_board_id
    }
    resolved = [by_id[image_id] for image_id in requested if image_id in by_id]

    if not resolved:
        raise NoMatchingItemsError(request.source_board_id)

    if len(resolved) < len(requested):
        logger.info(
            f"Resolved {len(resolved)} of {len(requested)} requested image(s)",
            extra={"source_board_id": request.source_board_id},
        )

    return resolved
