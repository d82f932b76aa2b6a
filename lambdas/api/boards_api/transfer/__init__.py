"""
Cross-board image transfer pipeline.

One module per stage; ``service.ImageTransferService`` ties them together.
"""

from .cleanup import CleanupReport, cleanup_origin
from .commit import commit_staged_images
from .errors import (
    BatchTooLargeError,
    CollectionNotFoundError,
    DestinationUploadFailedError,
    EmptyBatchError,
    InvalidIdentifierFormatError,
    InvalidOperationError,
    InvalidRequestBodyError,
    NoMatchingItemsError,
    OwnershipViolationError,
    RecordCommitFailedError,
    SourceObjectUnavailableError,
    StoreQueryFailedError,
    TransferError,
)
from .executor import (
    CONCURRENT_TRANSFER_LIMIT,
    BoundedTransferExecutor,
    UploadLedger,
    build_destination_path,
    delete_uploaded_objects,
)
from .ownership import verify_board_ownership
from .positions import allocate_base_position, position_for
from .resolver import resolve_source_images
from .service import (
    ImageTransferService,
    TransferAttempt,
    TransferOutcome,
    TransferPhase,
    TransferResult,
)
from .validation import parse_transfer_request

__all__ = [
    # Service
    "ImageTransferService",
    "TransferAttempt",
    "TransferOutcome",
    "TransferPhase",
    "TransferResult",
    # Stages
    "parse_transfer_request",
    "verify_board_ownership",
    "resolve_source_images",
    "allocate_base_position",
    "position_for",
    "BoundedTransferExecutor",
    "UploadLedger",
    "build_destination_path",
    "delete_uploaded_objects",
    "commit_staged_images",
    "cleanup_origin",
    "CleanupReport",
    "CONCURRENT_TRANSFER_LIMIT",
    # Errors
    "TransferError",
    "InvalidRequestBodyError",
    "InvalidOperationError",
    "InvalidIdentifierFormatError",
    "EmptyBatchError",
    "BatchTooLargeError",
    "CollectionNotFoundError",
    "OwnershipViolationError",
    "NoMatchingItemsError",
    "StoreQueryFailedError",
    "SourceObjectUnavailableError",
    "DestinationUploadFailedError",
    "RecordCommitFailedError",
]
