"""
Local working copy of a sibling group's order, as the admin panel keeps it
during drag-and-drop. Nothing reaches the database until save() is called.

This is a client-side helper for admin tooling and tests; no route uses it.
save() takes the bulk reorder callable so it works the same against a
service method or an HTTP client.
"""
import logging
from typing import Awaitable, Callable, Iterable, List, Sequence

logger = logging.getLogger(__name__)

BulkReorder = Callable[[Sequence[dict]], Awaitable[dict]]


class OrderDraft:
    """Ordered list of ids with an explicit commit step"""

    def __init__(self, ids: Iterable[int], base: int = 0):
        self.base = base
        self._saved: List[int] = list(ids)
        self._ids: List[int] = list(self._saved)

    @classmethod
    def from_records(cls, records: Iterable, base: int = 0) -> "OrderDraft":
        """Seed from records already sorted in display order"""
        return cls((record.id for record in records), base=base)

    @property
    def ids(self) -> List[int]:
        return list(self._ids)

    @property
    def dirty(self) -> bool:
        return self._ids != self._saved

    def move(self, item_id: int, index: int):
        """Move an id to a list position; out-of-range positions clamp to the ends"""
        if item_id not in self._ids:
            raise KeyError(item_id)
        self._ids.remove(item_id)
        index = min(max(index, 0), len(self._ids))
        self._ids.insert(index, item_id)

    def items(self) -> List[dict]:
        """Reorder payload with dense order values starting at the base"""
        return [{"id": item_id, "order": self.base + i} for i, item_id in enumerate(self._ids)]

    def discard(self):
        self._ids = list(self._saved)

    async def save(self, bulk_reorder: BulkReorder) -> dict:
        """Push the local order through a bulk reorder call and mark it clean"""
        result = await bulk_reorder(self.items())
        self._saved = list(self._ids)
        logger.debug(f"Saved order for {len(self._ids)} items")
        return result
