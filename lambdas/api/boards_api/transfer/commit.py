"""Commit stage: persist every staged image record in one write."""

import os
from typing import List, Sequence

from aws_lambda_powertools import Logger, Tracer
from models import ImageRecord
from stores import BoardRecordStore, ImageObjectStore, RecordStoreError

from .errors import RecordCommitFailedError
from .executor import UploadLedger, delete_uploaded_objects

logger = Logger(service="boards-transfer", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="boards-transfer")


@tracer.capture_method(capture_response=False)
def commit_staged_images(
    record_store: BoardRecordStore,
    object_store: ImageObjectStore,
    staged: Sequence[ImageRecord],
    ledger: UploadLedger,
) -> List[ImageRecord]:
    """
    Insert all staged records as a single batch.

    On any failure every object in the ledger is deleted, so neither records
    nor objects of this attempt remain. Store failures are raised as
    RecordCommitFailedError; anything else is re-raised unchanged.
    """
    try:
        committed = record_store.insert_images(staged)
    except RecordStoreError as e:
        logger.error(f"Insert error: {e}", extra={"staged_count": len(staged)})
        delete_uploaded_objects(object_store, ledger.paths())
        raise RecordCommitFailedError(str(e)) from e
    except Exception:
        logger.exception(
            "Unexpected insert error", extra={"staged_count": len(staged)}
        )
        delete_uploaded_objects(object_store, ledger.paths())
        raise

    return committed
