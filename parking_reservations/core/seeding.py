"""Deterministic demo inventory layout."""

import string
from typing import List, Mapping, Optional, Tuple

from parking_reservations.core.domain import SlotStatus
from parking_reservations.core.errors import InvalidInput

ROW_LABELS = string.ascii_uppercase


def slot_label(index: int, row_width: int = 8) -> str:
    """Return the row-major label for a zero-based slot index (A1, A2, ... B1)."""
    row, column = divmod(index, row_width)
    return f"{ROW_LABELS[row]}{column + 1}"


def seed_layout(
    count: int,
    distribution: Optional[Mapping[SlotStatus, int]] = None,
    row_width: int = 8,
) -> List[Tuple[str, SlotStatus]]:
    """
    Build ``count`` (label, status) pairs.

    Args:
        count: Number of slots to lay out
        distribution: Number of slots per held status; the rest are available
        row_width: Slots per lettered row

    Held statuses are spread evenly over the layout, in the order the
    distribution lists them, so the same input always yields the same layout.
    """
    distribution = distribution or {}

    if count < 0:
        raise InvalidInput("Slot count must not be negative")
    if row_width < 1:
        raise InvalidInput("Row width must be at least 1")
    if count > len(ROW_LABELS) * row_width:
        raise InvalidInput(
            f"At most {len(ROW_LABELS) * row_width} slots fit in {len(ROW_LABELS)} rows"
        )
    if SlotStatus.AVAILABLE in distribution:
        raise InvalidInput("Distribution lists held statuses only")
    if any(n < 0 for n in distribution.values()):
        raise InvalidInput("Distribution counts must not be negative")

    held = [status for status, n in distribution.items() for _ in range(n)]
    if len(held) > count:
        raise InvalidInput(f"Cannot hold {len(held)} of {count} slots")

    statuses = [SlotStatus.AVAILABLE] * count
    if held:
        stride = count / len(held)
        for k, status in enumerate(held):
            statuses[int(k * stride)] = status

    return [(slot_label(i, row_width), statuses[i]) for i in range(count)]
