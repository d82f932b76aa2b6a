"""
Boards API store implementations.

The transfer pipeline depends only on the interfaces in ``base``.
"""

from .base import (
    BoardRecordStore,
    ImageObjectStore,
    ObjectStoreError,
    RecordStoreError,
)
from .dynamodb_store import DynamoBoardRecordStore
from .s3_store import S3ImageObjectStore

__all__ = [
    # Interfaces
    "BoardRecordStore",
    "ImageObjectStore",
    "ObjectStoreError",
    "RecordStoreError",
    # AWS implementations
    "DynamoBoardRecordStore",
    "S3ImageObjectStore",
]
