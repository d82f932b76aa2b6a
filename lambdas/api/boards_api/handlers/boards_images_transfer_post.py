"""POST /boards/images/transfer - Copy or move images between boards."""

import os
from typing import Optional

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from boards_utils import create_error_response, create_success_response
from stores import DynamoBoardRecordStore, S3ImageObjectStore
from transfer import (
    ImageTransferService,
    InvalidRequestBodyError,
    TransferAttempt,
    TransferError,
)
from user_auth import UnauthenticatedError, resolve_caller_id

logger = Logger(
    service="boards-images-transfer-post", level=os.environ.get("LOG_LEVEL", "INFO")
)
tracer = Tracer(service="boards-images-transfer-post")
metrics = Metrics(namespace="medialake", service="boards-api")

BOARD_IMAGES_BUCKET = os.environ.get("BOARD_IMAGES_BUCKET", "board-images")

_transfer_service: Optional[ImageTransferService] = None


def get_transfer_service() -> ImageTransferService:
    """Build the AWS-backed service once per warm container."""
    global _transfer_service
    if _transfer_service is None:
        _transfer_service = ImageTransferService(
            record_store=DynamoBoardRecordStore(),
            object_store=S3ImageObjectStore(BOARD_IMAGES_BUCKET),
        )
    return _transfer_service


def _error_from(error: TransferError, request_id: Optional[str]):
    body = error.to_dict()
    return create_error_response(
        error_code=body.pop("error"),
        error_message=body.pop("message"),
        status_code=error.status_code,
        request_id=request_id,
        details=body,
    )


def register_route(app):
    """Register POST /boards/images/transfer route"""

    @app.post("/boards/images/transfer")
    @tracer.capture_method
    def boards_images_transfer_post():
        """Copy or move a batch of images from one board to another"""
        request_id = app.current_event.request_context.request_id

        try:
            caller_id = resolve_caller_id(app.current_event.raw_event)
        except UnauthenticatedError as e:
            return create_error_response(
                error_code=e.error_code,
                error_message=e.message,
                status_code=e.status_code,
                request_id=request_id,
            )

        attempt = TransferAttempt()
        try:
            try:
                payload = app.current_event.json_body
            except (TypeError, ValueError):
                raise InvalidRequestBodyError("Invalid JSON") from None

            outcome = get_transfer_service().transfer(payload, caller_id, attempt)

        except TransferError as e:
            log = logger.error if e.status_code >= 500 else logger.warning
            log(
                f"Image transfer failed: {e.message}",
                extra={"error_code": e.error_code, "phase": attempt.phase.value},
            )
            metrics.add_metric(
                name="FailedImageTransfers", unit=MetricUnit.Count, value=1
            )
            if attempt.rolled_back:
                metrics.add_metric(
                    name="ImageTransferRollbacks", unit=MetricUnit.Count, value=1
                )
            return _error_from(e, request_id)

        except Exception as e:
            logger.exception("Unexpected error transferring images", exc_info=e)
            metrics.add_metric(
                name="FailedImageTransfers", unit=MetricUnit.Count, value=1
            )
            return create_error_response(
                error_code="InternalServerError",
                error_message="An unexpected error occurred",
                status_code=500,
                request_id=request_id,
            )

        if outcome.cleanup is not None and not outcome.cleanup.succeeded:
            logger.warning(
                "Move committed but originals were not fully removed",
                extra={"cleanup_errors": outcome.cleanup.errors},
            )
            metrics.add_metric(
                name="OriginCleanupFailures", unit=MetricUnit.Count, value=1
            )

        metrics.add_metric(
            name="SuccessfulImageTransfers",
            unit=MetricUnit.Count,
            value=outcome.result.transferred,
        )
        return create_success_response(outcome.result.to_dict(), request_id)
