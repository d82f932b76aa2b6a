"""
Store Interfaces
================
Collaborator interfaces consumed by the transfer pipeline. Implementations
wrap their client library's exceptions into ObjectStoreError and
RecordStoreError so the pipeline never depends on boto3 or PynamoDB types.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from models import BoardRecord, ImageRecord


class ObjectStoreError(Exception):
    """An object store operation failed."""

    def __init__(self, message: str, paths: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.paths = list(paths or [])


class RecordStoreError(Exception):
    """A record store operation failed."""


class ImageObjectStore(ABC):
    """Binary image payloads keyed by path"""

    @abstractmethod
    def download(self, path: str) -> bytes:
        """Return the payload stored at path"""

    @abstractmethod
    def upload(self, path: str, payload: bytes, content_type: Optional[str]) -> None:
        """Store payload at path; fails if path is already taken"""

    @abstractmethod
    def delete(self, paths: Sequence[str]) -> None:
        """
        Delete every object in paths.

        Raises ObjectStoreError listing the paths that could not be deleted;
        the others are deleted regardless.
        """


class BoardRecordStore(ABC):
    """Board and image records"""

    @abstractmethod
    def get_boards(self, board_ids: Sequence[str]) -> List[BoardRecord]:
        """Fetch the boards with the given ids in one lookup; unknown ids are skipped"""

    @abstractmethod
    def get_images(
        self, board_id: str, image_ids: Sequence[str]
    ) -> List[ImageRecord]:
        """Fetch images with the given ids that belong to board_id"""

    @abstractmethod
    def get_max_position(self, board_id: str) -> Optional[int]:
        """Highest image position in the board, or None if it has no images"""

    @abstractmethod
    def insert_images(self, images: Sequence[ImageRecord]) -> List[ImageRecord]:
        """Insert all images as one all-or-nothing write"""

    @abstractmethod
    def delete_images(self, board_id: str, image_ids: Sequence[str]) -> None:
        """Delete the images with the given ids from board_id"""
