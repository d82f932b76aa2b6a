"""
Cross-board image transfer.

Runs the transfer pipeline for one request:

    validate -> authorize -> resolve -> allocate -> transfer -> commit
    -> (move only) clean up originals

Nothing is written before authorization passes. A failure while transferring
or committing is rolled back by deleting the objects uploaded in this attempt;
a failure while cleaning up after a move is reported in the CleanupReport and
never turns the committed transfer into an error.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from aws_lambda_powertools import Logger, Tracer
from models import ImageRecord, TransferOperation
from stores import BoardRecordStore, ImageObjectStore

from .cleanup import CleanupReport, cleanup_origin
from .commit import commit_staged_images
from .executor import CONCURRENT_TRANSFER_LIMIT, BoundedTransferExecutor, UploadLedger
from .ownership import verify_board_ownership
from .positions import allocate_base_position
from .resolver import resolve_source_images
from .validation import parse_transfer_request

logger = Logger(service="boards-transfer", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="boards-transfer")


class TransferPhase(str, Enum):
    """States of a single transfer attempt."""

    VALIDATING = "Validating"
    AUTHORIZING = "Authorizing"
    RESOLVING = "Resolving"
    ALLOCATING = "Allocating"
    TRANSFERRING = "Transferring"
    COMMITTING = "Committing"
    CLEANING = "Cleaning"
    DONE = "Done"
    ROLLED_BACK = "RolledBack"
    FAILED = "Failed"


# Phases in which a failure has already written objects
_COMPENSATED_PHASES = (TransferPhase.TRANSFERRING, TransferPhase.COMMITTING)


@dataclass
class TransferAttempt:
    """Tracks the phase of one transfer attempt."""

    phase: TransferPhase = TransferPhase.VALIDATING

    def advance(self, phase: TransferPhase) -> None:
        logger.info(
            f"Transfer phase {self.phase.value} -> {phase.value}",
            extra={"phase": phase.value},
        )
        self.phase = phase

    def fail(self) -> None:
        terminal = (
            TransferPhase.ROLLED_BACK
            if self.phase in _COMPENSATED_PHASES
            else TransferPhase.FAILED
        )
        self.advance(terminal)

    @property
    def rolled_back(self) -> bool:
        return self.phase is TransferPhase.ROLLED_BACK


@dataclass(frozen=True)
class TransferResult:
    """The committed outcome returned to the caller."""

    operation: TransferOperation
    images: List[ImageRecord]

    @property
    def transferred(self) -> int:
        return len(self.images)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation.value,
            "transferred": self.transferred,
            "images": [image.to_response() for image in self.images],
        }


@dataclass(frozen=True)
class TransferOutcome:
    """Committed result plus, for moves, the separate cleanup report."""

    result: TransferResult
    cleanup: Optional[CleanupReport] = None


class ImageTransferService:
    """Copies or moves batches of images between boards owned by the caller."""

    def __init__(
        self,
        record_store: BoardRecordStore,
        object_store: ImageObjectStore,
        max_concurrency: int = CONCURRENT_TRANSFER_LIMIT,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.record_store = record_store
        self.object_store = object_store
        self.executor = BoundedTransferExecutor(
            object_store, max_concurrency=max_concurrency, id_factory=id_factory
        )

    @tracer.capture_method(capture_response=False)
    def transfer(
        self,
        payload: Any,
        caller_id: str,
        attempt: Optional[TransferAttempt] = None,
    ) -> TransferOutcome:
        """
        Run one transfer attempt for an authenticated caller.

        Args:
            payload: decoded request body
            caller_id: id of the authenticated user
            attempt: optional phase tracker, useful to inspect how it ended

        Raises:
            TransferError: validation, authorization, lookup or store failure
        """
        attempt = attempt or TransferAttempt()

        try:
            request = parse_transfer_request(payload)
            logger.info(
                "Transfer request accepted",
                extra={
                    "operation": request.operation.value,
                    "source_board_id": request.source_board_id,
                    "dest_board_id": request.dest_board_id,
                    "requested_count": len(request.image_ids),
                },
            )

            attempt.advance(TransferPhase.AUTHORIZING)
            verify_board_ownership(self.record_store, request, caller_id)

            attempt.advance(TransferPhase.RESOLVING)
            originals = resolve_source_images(self.record_store, request)

            attempt.advance(TransferPhase.ALLOCATING)
            base_position = allocate_base_position(
                self.record_store, request.dest_board_id
            )

            attempt.advance(TransferPhase.TRANSFERRING)
            ledger = UploadLedger()
            staged = self.executor.run(
                originals, request.dest_board_id, base_position, ledger
            )

            attempt.advance(TransferPhase.COMMITTING)
            committed = commit_staged_images(
                self.record_store, self.object_store, staged, ledger
            )
        except Exception:
            attempt.fail()
            raise

        cleanup = None
        if request.operation is TransferOperation.MOVE:
            attempt.advance(TransferPhase.CLEANING)
            cleanup = cleanup_origin(
                self.record_store,
                self.object_store,
                request.source_board_id,
                originals,
            )

        attempt.advance(TransferPhase.DONE)
        logger.info(
            f"Transferred {len(committed)} image(s)",
            extra={"operation": request.operation.value},
        )

        return TransferOutcome(
            result=TransferResult(operation=request.operation, images=committed),
            cleanup=cleanup,
        )
