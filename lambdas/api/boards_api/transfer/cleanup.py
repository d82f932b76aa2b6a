"""Origin cleanup for move transfers."""

import os
from dataclasses import dataclass, field
from typing import List, Sequence

from aws_lambda_powertools import Logger, Tracer
from models import ImageRecord
from stores import (
    BoardRecordStore,
    ImageObjectStore,
    ObjectStoreError,
    RecordStoreError,
)

logger = Logger(service="boards-transfer", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="boards-transfer")


@dataclass
class CleanupReport:
    """What post-commit cleanup managed to remove."""

    records_deleted: bool = False
    objects_deleted: bool = False
    errors: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.records_deleted and self.objects_deleted


@tracer.capture_method
def cleanup_origin(
    record_store: BoardRecordStore,
    object_store: ImageObjectStore,
    source_board_id: str,
    originals: Sequence[ImageRecord],
) -> CleanupReport:
    """
    Best-effort removal of the originals after a committed move.

    Failures are logged and reported, never raised: the copies are already
    durable. Objects are only deleted once their records are gone.
    """
    report = CleanupReport()
    image_ids = [image.id for image in originals]

    try:
        record_store.delete_images(source_board_id, image_ids)
        report.records_deleted = True
    except RecordStoreError as e:
        logger.error(
            f"Warning: Failed to delete original images from DB: {e}",
            extra={"source_board_id": source_board_id, "image_ids": image_ids},
        )
        report.errors.append(f"records: {e}")
        return report

    try:
        object_store.delete([image.storage_path for image in originals])
        report.objects_deleted = True
    except ObjectStoreError as e:
        logger.error(
            f"Warning: Failed to delete original storage files: {e}",
            extra={"source_board_id": source_board_id, "orphaned_paths": e.paths},
        )
        report.errors.append(f"objects: {e}")

    return report
