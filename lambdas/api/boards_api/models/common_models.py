"""Common models, enums and constants used across the Boards API."""

import re
from enum import Enum
from typing import Any

# Canonical 36-character UUID, any case
IDENTIFIER_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)

# Upper bound on images per transfer request
MAX_BATCH_SIZE = 20


class TransferOperation(str, Enum):
    """Kinds of cross-board image transfer."""

    COPY = "copy"
    MOVE = "move"


def is_valid_identifier(value: Any) -> bool:
    """Return True if value is a canonical UUID string."""
    return isinstance(value, str) and bool(IDENTIFIER_PATTERN.match(value))
