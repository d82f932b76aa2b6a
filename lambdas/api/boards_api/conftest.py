"""
Shared fixtures for Boards API tests.

The fake stores implement the store interfaces in memory and let tests inject
failures at every collaborator call.
"""

import os

os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "medialake")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("BOARDS_TABLE_NAME", "boards_table_test")

import threading  # noqa: E402
import time  # noqa: E402

import pytest  # noqa: E402
from models import BoardRecord, ImageRecord  # noqa: E402
from stores import (  # noqa: E402
    BoardRecordStore,
    ImageObjectStore,
    ObjectStoreError,
    RecordStoreError,
)
from transfer import ImageTransferService  # noqa: E402

USER_ID = "user-123"
OTHER_USER_ID = "other-user"
SOURCE_BOARD_ID = "11111111-1111-1111-1111-111111111111"
DEST_BOARD_ID = "22222222-2222-2222-2222-222222222222"
IMAGE_IDS = [
    "33333333-3333-3333-3333-333333333333",
    "44444444-4444-4444-4444-444444444444",
    "55555555-5555-5555-5555-555555555555",
    "66666666-6666-6666-6666-666666666666",
    "77777777-7777-7777-7777-777777777777",
]


class InMemoryObjectStore(ImageObjectStore):
    """Dict-backed object store with failure injection."""

    def __init__(self, delay: float = 0.0):
        self.objects = {}
        self.delay = delay
        self.fail_download_paths = set()
        self.fail_upload_payloads = set()
        self.fail_delete_paths = set()
        self.download_calls = []
        self.upload_calls = []
        self.delete_calls = []
        self.max_in_flight = 0
        self._in_flight = 0
        self._lock = threading.Lock()

    def _enter(self):
        with self._lock:
            self._in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self._in_flight)

    def _exit(self):
        with self._lock:
            self._in_flight -= 1

    def download(self, path):
        self._enter()
        try:
            with self._lock:
                self.download_calls.append(path)
            if self.delay:
                time.sleep(self.delay)
            if path in self.fail_download_paths or path not in self.objects:
                raise ObjectStoreError(f"Object not found: {path}", paths=[path])
            return self.objects[path][0]
        finally:
            self._exit()

    def upload(self, path, payload, content_type):
        with self._lock:
            self.upload_calls.append(path)
            if payload in self.fail_upload_payloads:
                raise ObjectStoreError(f"Upload rejected: {path}", paths=[path])
            if path in self.objects:
                raise ObjectStoreError(f"Object already exists: {path}", paths=[path])
            self.objects[path] = (payload, content_type)

    def delete(self, paths):
        with self._lock:
            self.delete_calls.append(list(paths))
            failed = [p for p in paths if p in self.fail_delete_paths]
            for path in paths:
                if path not in self.fail_delete_paths:
                    self.objects.pop(path, None)
        if failed:
            raise ObjectStoreError("Delete failed", paths=failed)


class InMemoryRecordStore(BoardRecordStore):
    """Dict-backed board and image store with failure injection."""

    def __init__(self):
        self.boards = {}
        self.images = {}
        self.fail_get_boards = False
        self.fail_get_images = False
        self.fail_max_position = False
        self.fail_insert = False
        self.fail_delete = False
        self.get_images_calls = 0
        self.insert_calls = 0

    def add_board(self, board_id, owner_id):
        self.boards[board_id] = BoardRecord(id=board_id, owner_id=owner_id)

    def add_image(self, image):
        self.images[image.id] = image

    def images_in(self, board_id):
        return sorted(
            (i for i in self.images.values() if i.board_id == board_id),
            key=lambda i: i.position,
        )

    def get_boards(self, board_ids):
        if self.fail_get_boards:
            raise RecordStoreError("boards table unavailable")
        return [self.boards[b] for b in dict.fromkeys(board_ids) if b in self.boards]

    def get_images(self, board_id, image_ids):
        self.get_images_calls += 1
        if self.fail_get_images:
            raise RecordStoreError("images table unavailable")
        # Deliberately reversed to check that callers restore request order
        return [
            self.images[i]
            for i in reversed(list(dict.fromkeys(image_ids)))
            if i in self.images and self.images[i].board_id == board_id
        ]

    def get_max_position(self, board_id):
        if self.fail_max_position:
            raise RecordStoreError("position index unavailable")
        positions = [i.position for i in self.images_in(board_id)]
        return max(positions) if positions else None

    def insert_images(self, images):
        self.insert_calls += 1
        if self.fail_insert:
            raise RecordStoreError("TransactionCanceledException")
        for image in images:
            self.images[image.id] = image
        return list(images)

    def delete_images(self, board_id, image_ids):
        if self.fail_delete:
            raise RecordStoreError("delete failed")
        for image_id in image_ids:
            if image_id in self.images and self.images[image_id].board_id == board_id:
                del self.images[image_id]


def make_image(image_id, board_id, position, extension=".jpg", **metadata):
    return ImageRecord(
        id=image_id,
        board_id=board_id,
        storage_path=f"boards/{board_id}/{image_id}{extension}",
        position=position,
        **metadata,
    )


@pytest.fixture
def record_store():
    store = InMemoryRecordStore()
    store.add_board(SOURCE_BOARD_ID, USER_ID)
    store.add_board(DEST_BOARD_ID, USER_ID)
    return store


@pytest.fixture
def object_store():
    return InMemoryObjectStore()


@pytest.fixture
def seed_images(record_store, object_store):
    """Put images into the source board: payload b"payload-<n>" at position n."""

    def _seed(count, board_id=SOURCE_BOARD_ID, start=1):
        images = []
        for offset, image_id in enumerate(IMAGE_IDS[:count]):
            image = make_image(
                image_id,
                board_id,
                start + offset,
                mime_type="image/jpeg",
                width=800,
                height=600,
                size_bytes=102400,
                original_filename=f"photo{offset}.jpg",
                caption=f"caption {offset}",
            )
            record_store.add_image(image)
            object_store.objects[image.storage_path] = (
                f"payload-{offset + 1}".encode(),
                "image/jpeg",
            )
            images.append(image)
        return images

    return _seed


@pytest.fixture
def service(record_store, object_store):
    return ImageTransferService(record_store, object_store, max_concurrency=5)


def transfer_payload(operation="copy", image_ids=None, **overrides):
    payload = {
        "operation": operation,
        "sourceCollectionId": SOURCE_BOARD_ID,
        "destCollectionId": DEST_BOARD_ID,
        "itemIds": list(IMAGE_IDS[:2] if image_ids is None else image_ids),
    }
    payload.update(overrides)
    return payload
