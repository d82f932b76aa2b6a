"""Transfer request validation: raw payload in, TransferImagesRequest out."""

import os
from typing import Any, Dict

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.parser import ValidationError, parse
from models import WIRE_FIELD_NAMES, TransferImagesRequest

from .errors import (
    BatchTooLargeError,
    EmptyBatchError,
    InvalidIdentifierFormatError,
    InvalidOperationError,
    InvalidRequestBodyError,
    TransferError,
)

logger = Logger(service="boards-transfer", level=os.environ.get("LOG_LEVEL", "INFO"))

# Every accepted input key -> model field name
_INPUT_KEYS = {
    "operation": "operation",
    "sourceCollectionId": "source_board_id",
    "sourceBoardId": "source_board_id",
    "source_board_id": "source_board_id",
    "destCollectionId": "dest_board_id",
    "destBoardId": "dest_board_id",
    "dest_board_id": "dest_board_id",
    "itemIds": "image_ids",
    "imageIds": "image_ids",
    "image_ids": "image_ids",
}


def _field_of(error: Dict[str, Any]) -> str:
    loc = error.get("loc") or ()
    return _INPUT_KEYS.get(str(loc[0]), "") if loc else ""


def _to_transfer_error(error: Dict[str, Any]) -> TransferError:
    """Translate the first pydantic error into the transfer taxonomy."""
    error_type = error.get("type")
    ctx = error.get("ctx") or {}
    field = _field_of(error)

    if error_type == "invalid_operation" or field == "operation":
        return InvalidOperationError(ctx.get("value"))
    if error_type == "invalid_identifier_format":
        return InvalidIdentifierFormatError(
            ctx["field"], ctx.get("value"), message=error.get("msg")
        )
    if error_type == "batch_too_large":
        return BatchTooLargeError(ctx["received"], ctx["max_batch_size"])
    if error_type == "empty_batch":
        return EmptyBatchError(error.get("msg") or "itemIds array cannot be empty")

    if field in ("source_board_id", "dest_board_id"):
        wire_name = WIRE_FIELD_NAMES[field]
        return InvalidIdentifierFormatError(
            wire_name, None, message=f"{wire_name} is required"
        )
    if field == "image_ids":
        return EmptyBatchError("itemIds must be a non-empty array")

    return InvalidRequestBodyError(error.get("msg") or "Invalid request body")


def parse_transfer_request(payload: Any) -> TransferImagesRequest:
    """
    Validate a decoded request body.

    Fields are checked in order (operation, source, destination, image ids)
    and the first failure is reported.

    Raises:
        TransferError: one of the validation errors of the taxonomy
    """
    if not isinstance(payload, dict):
        raise InvalidRequestBodyError("Request body must be a JSON object")

    try:
        return parse(event=payload, model=TransferImagesRequest)
    except ValidationError as e:
        errors = e.errors()
        logger.warning(
            "Transfer request validation failed",
            extra={"error_count": len(errors), "first_error": errors[0].get("type")},
        )
        raise _to_transfer_error(errors[0]) from None
