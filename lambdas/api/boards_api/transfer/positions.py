"""Position allocation for images added to the destination board."""

from stores import BoardRecordStore, RecordStoreError

from .errors import StoreQueryFailedError


def allocate_base_position(record_store: BoardRecordStore, dest_board_id: str) -> int:
    """
    Return the current highest position in the destination board, 0 if empty.

    The i-th transferred image (0-indexed) is placed at ``base + i + 1``.
    """
    try:
        max_position = record_store.get_max_position(dest_board_id)
    except RecordStoreError as e:
        raise StoreQueryFailedError("destination board", str(e)) from e
    return max_position or 0


def position_for(base: int, index: int) -> int:
    return base + index + 1
