"""
Transfer error taxonomy.

Every failure of a transfer attempt is one of these exceptions. Each class
carries the machine-readable ``error_code`` returned to clients and the HTTP
status it maps to; ``to_dict`` renders the error body with its structured
detail fields.
"""

from typing import Any, Dict, List, Optional, Sequence


class TransferError(Exception):
    """Base class for all transfer failures."""

    error_code = "TransferError"
    status_code = 500

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error_code, "message": self.message}
        body.update(self.details)
        return body


# Validation (400)


class InvalidRequestBodyError(TransferError):
    error_code = "InvalidRequestBody"
    status_code = 400


class InvalidOperationError(TransferError):
    error_code = "InvalidOperation"
    status_code = 400

    def __init__(self, value: Any = None):
        super().__init__("operation must be 'copy' or 'move'", value=value)


class InvalidIdentifierFormatError(TransferError):
    error_code = "InvalidIdentifierFormat"
    status_code = 400

    def __init__(self, field: str, value: Any = None, message: Optional[str] = None):
        super().__init__(
            message or f"Invalid {field} format", field=field, value=value
        )
        self.field = field
        self.value = value


class EmptyBatchError(TransferError):
    error_code = "EmptyBatch"
    status_code = 400

    def __init__(self, message: str = "itemIds array cannot be empty"):
        super().__init__(message)


class BatchTooLargeError(TransferError):
    error_code = "BatchTooLarge"
    status_code = 400

    def __init__(self, received: int, max_batch_size: int):
        super().__init__(
            f"Cannot transfer more than {max_batch_size} images at once",
            received=received,
            maxBatchSize=max_batch_size,
        )
        self.received = received
        self.max_batch_size = max_batch_size


# Authorization and lookup (403/404)


class CollectionNotFoundError(TransferError):
    error_code = "CollectionNotFound"
    status_code = 404

    def __init__(self, requested_ids: Sequence[str]):
        super().__init__(
            "One or both boards not found", requestedCollectionIds=list(requested_ids)
        )


class OwnershipViolationError(TransferError):
    error_code = "OwnershipViolation"
    status_code = 403

    def __init__(self, unauthorized_ids: List[str]):
        super().__init__(
            "Forbidden: You do not own both boards",
            unauthorizedCollectionIds=list(unauthorized_ids),
        )
        self.unauthorized_ids = list(unauthorized_ids)


class NoMatchingItemsError(TransferError):
    error_code = "NoMatchingItems"
    status_code = 404

    def __init__(self, source_board_id: str):
        super().__init__(
            "No images found with provided IDs in source board",
            sourceCollectionId=source_board_id,
        )


# Store failures (500)


class StoreQueryFailedError(TransferError):
    error_code = "StoreQueryFailed"
    status_code = 500

    def __init__(self, what: str, cause: str):
        super().__init__(f"Failed to query {what}: {cause}", cause=cause)


class SourceObjectUnavailableError(TransferError):
    error_code = "SourceObjectUnavailable"
    status_code = 500

    def __init__(self, image_id: str, cause: str):
        super().__init__(
            f"Failed to download image {image_id}: {cause}", imageId=image_id
        )
        self.image_id = image_id


class DestinationUploadFailedError(TransferError):
    error_code = "DestinationUploadFailed"
    status_code = 500

    def __init__(self, image_id: str, path: str, cause: str):
        super().__init__(
            f"Failed to upload image {image_id} to {path}: {cause}", imageId=image_id
        )
        self.image_id = image_id
        self.path = path


class RecordCommitFailedError(TransferError):
    error_code = "RecordCommitFailed"
    status_code = 500

    def __init__(self, cause: str):
        super().__init__(f"Failed to create image records: {cause}", cause=cause)
        self.cause = cause
