"""
Bounded transfer executor.

Copies image payloads into the destination board's namespace on a fixed-size
thread pool and stages the new image records. Every successful upload is
written to an UploadLedger so a failed attempt can delete exactly what it
created.
"""

import os
import threading
import uuid
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import PurePosixPath
from typing import Callable, List, Optional, Sequence

from aws_lambda_powertools import Logger, Tracer
from models import ImageRecord
from stores import ImageObjectStore, ObjectStoreError

from .errors import DestinationUploadFailedError, SourceObjectUnavailableError
from .positions import position_for

logger = Logger(service="boards-transfer", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="boards-transfer")

CONCURRENT_TRANSFER_LIMIT = int(os.environ.get("TRANSFER_CONCURRENCY", "5"))
BOARD_PATH_PREFIX = "boards"


class UploadLedger:
    """Append-only, thread-safe list of object paths uploaded in one attempt."""

    def __init__(self):
        self._lock = threading.Lock()
        self._paths: List[str] = []

    def record(self, path: str) -> None:
        with self._lock:
            self._paths.append(path)

    def paths(self) -> List[str]:
        with self._lock:
            return list(self._paths)

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)


def build_destination_path(dest_board_id: str, image_id: str, source_path: str) -> str:
    """boards/{dest_board_id}/{image_id}, keeping the source file extension."""
    extension = PurePosixPath(source_path).suffix
    return f"{BOARD_PATH_PREFIX}/{dest_board_id}/{image_id}{extension}"


def delete_uploaded_objects(
    object_store: ImageObjectStore, paths: Sequence[str]
) -> bool:
    """
    Compensating action: remove objects uploaded by a failed attempt.

    Returns False if some objects could not be removed. Never raises, so the
    original failure stays the one that is reported.
    """
    if not paths:
        return True

    logger.info(f"Rolling back {len(paths)} uploaded object(s)")
    try:
        object_store.delete(paths)
    except ObjectStoreError as e:
        logger.error(
            f"Rollback left {len(e.paths)} orphaned object(s): {e}",
            extra={"orphaned_paths": e.paths},
        )
        return False
    except Exception:
        logger.exception(
            f"Rollback failed, {len(paths)} object(s) may be orphaned",
            extra={"orphaned_paths": list(paths)},
        )
        return False
    return True


class BoundedTransferExecutor:
    """Runs per-image copy jobs with at most ``max_concurrency`` in flight."""

    def __init__(
        self,
        object_store: ImageObjectStore,
        max_concurrency: int = CONCURRENT_TRANSFER_LIMIT,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self.object_store = object_store
        self.max_concurrency = max_concurrency
        self.id_factory = id_factory or (lambda: str(uuid.uuid4()))

    @tracer.capture_method(capture_response=False)
    def run(
        self,
        images: Sequence[ImageRecord],
        dest_board_id: str,
        base_position: int,
        ledger: UploadLedger,
    ) -> List[ImageRecord]:
        """
        Copy every image into the destination board.

        Positions follow the order of ``images``, not completion order. On the
        first failure no further copies start, running ones are allowed to
        finish, everything in the ledger is deleted and the failure is raised.

        Returns:
            Staged (not yet committed) records, in input order
        """
        abort = threading.Event()
        staged: List[Optional[ImageRecord]] = [None] * len(images)
        first_error: Optional[BaseException] = None
        created_at = datetime.now(timezone.utc).isoformat()

        with ThreadPoolExecutor(
            max_workers=self.max_concurrency, thread_name_prefix="image-transfer"
        ) as pool:
            future_to_index = {
                pool.submit(
                    self._transfer_one,
                    image,
                    dest_board_id,
                    position_for(base_position, index),
                    created_at,
                    ledger,
                    abort,
                ): index
                for index, image in enumerate(images)
            }

            for future in as_completed(future_to_index):
                if future.cancelled():
                    continue

                error = future.exception()
                if error is None:
                    staged[future_to_index[future]] = future.result()
                    continue

                if first_error is None:
                    first_error = error
                    abort.set()
                    cancelled = sum(1 for f in future_to_index if f.cancel())
                    logger.warning(
                        f"Aborting transfer: {error}",
                        extra={"cancelled_jobs": cancelled},
                    )
                else:
                    logger.warning(f"Additional transfer failure: {error}")

        # Pool exit waits for in-flight jobs, so the ledger is final here
        if first_error is not None:
            delete_uploaded_objects(self.object_store, ledger.paths())
            raise first_error

        return [record for record in staged if record is not None]

    def _transfer_one(
        self,
        image: ImageRecord,
        dest_board_id: str,
        position: int,
        created_at: str,
        ledger: UploadLedger,
        abort: threading.Event,
    ) -> Optional[ImageRecord]:
        if abort.is_set():
            return None

        try:
            return self._copy(image, dest_board_id, position, created_at, ledger)
        except Exception:
            # Stop queued jobs before the collector sees the failure
            abort.set()
            raise

    def _copy(
        self,
        image: ImageRecord,
        dest_board_id: str,
        position: int,
        created_at: str,
        ledger: UploadLedger,
    ) -> ImageRecord:
        try:
            payload = self.object_store.download(image.storage_path)
        except ObjectStoreError as e:
            raise SourceObjectUnavailableError(image.id, str(e)) from e

        new_id = self.id_factory()
        new_path = build_destination_path(dest_board_id, new_id, image.storage_path)

        try:
            self.object_store.upload(new_path, payload, image.mime_type)
        except ObjectStoreError as e:
            raise DestinationUploadFailedError(image.id, new_path, str(e)) from e

        ledger.record(new_path)
        logger.debug(
            f"Copied {image.storage_path} to {new_path}",
            extra={"image_id": image.id, "new_image_id": new_id},
        )

        return image.model_copy(
            update={
                "id": new_id,
                "board_id": dest_board_id,
                "storage_path": new_path,
                "position": position,
                "created_at": created_at,
            }
        )
