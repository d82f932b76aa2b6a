"""
Pydantic V2 models for Boards API.

This package contains all data models for request/response validation.
"""

from .common_models import (
    IDENTIFIER_PATTERN,
    MAX_BATCH_SIZE,
    TransferOperation,
    is_valid_identifier,
)
from .image_models import BoardRecord, ImageRecord
from .transfer_models import WIRE_FIELD_NAMES, TransferImagesRequest

__all__ = [
    # Record models
    "BoardRecord",
    "ImageRecord",
    # Transfer models
    "TransferImagesRequest",
    "WIRE_FIELD_NAMES",
    # Common models
    "TransferOperation",
    "IDENTIFIER_PATTERN",
    "MAX_BATCH_SIZE",
    "is_valid_identifier",
]
