"""
Sibling-group ordering for categories.

A category sits either at the root or under a parent; each placement is its own
sibling group with its own dense `order` sequence starting at the configured base.
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.category import Category

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Root:
    """Top-level placement (parent_id is NULL)"""

    @property
    def parent_id(self) -> None:
        return None


@dataclass(frozen=True)
class Child:
    """Placement under an existing category"""
    parent_id: int


Placement = Union[Root, Child]


def placement_of(parent_id: Optional[int]) -> Placement:
    return Root() if parent_id is None else Child(parent_id)


def sibling_filter(placement: Placement):
    """WHERE clause selecting every category in the placement's sibling group"""
    if isinstance(placement, Root):
        return Category.parent_id.is_(None)
    return Category.parent_id == placement.parent_id


async def next_order(db: AsyncSession, placement: Placement, base: int) -> int:
    """Order value that appends at the end of the group (base when the group is empty)"""
    result = await db.execute(
        select(func.max(Category.order)).where(sibling_filter(placement))
    )
    max_order = result.scalar()
    return base if max_order is None else max_order + 1


async def load_siblings(
    db: AsyncSession,
    placement: Placement,
    exclude_id: Optional[int] = None,
) -> List[Category]:
    query = select(Category).where(sibling_filter(placement))
    if exclude_id is not None:
        query = query.where(Category.id != exclude_id)
    result = await db.execute(query.order_by(Category.order, Category.id))
    return list(result.scalars().all())


def renumber(records: Sequence, base: int) -> int:
    """Assign base, base+1, ... in sequence order. Returns how many records changed."""
    changed = 0
    for position, record in enumerate(records):
        target = base + position
        if record.order != target:
            record.order = target
            changed += 1
    return changed


async def renumber_group(db: AsyncSession, placement: Placement, base: int) -> int:
    """Close any gaps in a sibling group, keeping the current relative order"""
    siblings = await load_siblings(db, placement)
    changed = renumber(siblings, base)
    await db.flush()
    if changed:
        logger.debug(f"Renumbered {changed} categories in group parent_id={placement.parent_id}")
    return changed


async def reorder_categories(db: AsyncSession, category: Category, new_order: int, base: int) -> int:
    """
    Move a category to an absolute position inside its own sibling group.

    The category is taken out of the sequence, the gap is closed, a gap is opened
    at new_order and the category is placed there. Positions past the end land
    on the last slot, positions below base on the first.
    """
    placement = placement_of(category.parent_id)
    siblings = await load_siblings(db, placement, exclude_id=category.id)
    position = min(max(new_order - base, 0), len(siblings))
    siblings.insert(position, category)
    changed = renumber(siblings, base)
    await db.flush()
    return changed
