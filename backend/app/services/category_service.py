"""Service for managing the ordered two-level category hierarchy"""
import logging
from typing import List, Optional, Sequence
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from app.config import settings
from app.database import scoped_transaction
from app.exceptions import (
    ContentError,
    NotFoundError,
    DuplicateKeyError,
    InvalidOrderError,
    HasChildrenError,
    InvalidParentError,
)
from app.models.category import Category, CategoryCreate, CategoryUpdate, CategoryResponse, CategoryTreeNode
from app.services.cache import cache_service, CATEGORIES_ALL, CATEGORIES_TREE, SUBCATEGORIES_ALL
from app.services.ordering import (
    Child,
    placement_of,
    next_order,
    renumber_group,
    reorder_categories,
)

logger = logging.getLogger(__name__)


class CategoryService:
    """Category CRUD that keeps each sibling group's `order` dense"""

    def __init__(self, order_base: Optional[int] = None, enforce_two_level: Optional[bool] = None):
        self.order_base = settings.order_base if order_base is None else order_base
        self.enforce_two_level = (
            settings.enforce_two_level_categories if enforce_two_level is None else enforce_two_level
        )

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        """All categories, ordered by `order` then id"""
        cached_result = await cache_service.get(CATEGORIES_ALL)
        if cached_result is not None:
            logger.debug("Cache hit for categories list")
            return [CategoryResponse(**cat) for cat in cached_result]

        result = await db.execute(
            select(Category)
            .order_by(Category.order, Category.id)
            .execution_options(populate_existing=True)
        )
        categories = [CategoryResponse.model_validate(c) for c in result.scalars().all()]

        await cache_service.set(CATEGORIES_ALL, [c.model_dump() for c in categories])
        return categories

    async def get_category_tree(self, db: AsyncSession) -> List[CategoryTreeNode]:
        """Root categories in order, each carrying its children in order"""
        cached_result = await cache_service.get(CATEGORIES_TREE)
        if cached_result is not None:
            logger.debug("Cache hit for category tree")
            return [CategoryTreeNode(**node) for node in cached_result]

        categories = await self.list_categories(db)
        roots = [CategoryTreeNode(**c.model_dump()) for c in categories if c.parent_id is None]
        by_id = {root.id: root for root in roots}
        for category in categories:
            if category.parent_id is not None and category.parent_id in by_id:
                by_id[category.parent_id].children.append(category)

        await cache_service.set(CATEGORIES_TREE, [root.model_dump() for root in roots])
        return roots

    async def get_category(self, db: AsyncSession, category_id: int) -> Optional[CategoryResponse]:
        category = await self._get(db, category_id)
        if not category:
            return None
        return CategoryResponse.model_validate(category)

    async def create_category(self, db: AsyncSession, category_data: CategoryCreate) -> int:
        """Insert a category at the end of its sibling group. Returns the new id."""
        try:
            async with scoped_transaction(db):
                await self._ensure_slug_available(db, category_data.slug)

                placement = placement_of(category_data.parent_id)
                if isinstance(placement, Child):
                    await self._validate_parent(db, placement.parent_id)

                category = Category(
                    name=category_data.name,
                    slug=category_data.slug,
                    parent_id=category_data.parent_id,
                    order=await next_order(db, placement, self.order_base),
                )
                db.add(category)
                await db.flush()  # Get the ID
                category_id = category.id
                order = category.order

        except IntegrityError as e:
            raise self._translate_integrity_error(e, category_data.slug)
        except ContentError:
            raise
        except Exception as e:
            logger.error(f"Error creating category: {e}")
            raise

        logger.info(f"Created category {category_id} ({category_data.slug}) at order {order}")
        await self._invalidate_category_cache()
        return category_id

    async def update_category(self, db: AsyncSession, category_id: int, category_data: CategoryUpdate) -> int:
        """
        Update name, slug and parent of a category. Returns the affected row count.

        Changing the parent appends the category to the destination group and
        closes the gap it leaves behind in the source group.
        """
        try:
            async with scoped_transaction(db):
                category = await self._get(db, category_id)
                if not category:
                    raise NotFoundError(f"Category {category_id} not found")

                if category_data.slug != category.slug:
                    await self._ensure_slug_available(db, category_data.slug, exclude_id=category_id)

                category.name = category_data.name
                category.slug = category_data.slug

                if category_data.parent_id != category.parent_id:
                    await self._move_to_group(db, category, category_data.parent_id)

        except IntegrityError as e:
            raise self._translate_integrity_error(e, category_data.slug)
        except ContentError:
            raise
        except Exception as e:
            logger.error(f"Error updating category {category_id}: {e}")
            raise

        await self._invalidate_category_cache()
        return 1

    async def delete_category(self, db: AsyncSession, category_id: int) -> int:
        """Delete a childless category and renumber its former siblings"""
        try:
            async with scoped_transaction(db):
                category = await self._get(db, category_id)
                if not category:
                    raise NotFoundError(f"Category {category_id} not found")

                child_count = await self._child_count(db, category_id)
                if child_count:
                    raise HasChildrenError(
                        f"Cannot delete category with subcategories ({child_count} found)"
                    )

                placement = placement_of(category.parent_id)
                await db.delete(category)
                await db.flush()
                await renumber_group(db, placement, self.order_base)

        except ContentError:
            raise
        except Exception as e:
            logger.error(f"Error deleting category {category_id}: {e}")
            raise

        logger.info(f"Deleted category {category_id}")
        await self._invalidate_category_cache(include_subcategories=True)
        return 1

    async def reorder_category(self, db: AsyncSession, category_id: int, new_order: int) -> bool:
        """Move one category to an absolute position within its sibling group"""
        try:
            async with scoped_transaction(db):
                category = await self._get(db, category_id)
                if not category:
                    raise NotFoundError(f"Category {category_id} not found")
                if new_order < 0:
                    raise InvalidOrderError("Order must be non-negative")

                changed = await reorder_categories(db, category, new_order, self.order_base)

        except ContentError:
            raise
        except Exception as e:
            logger.error(f"Error reordering category {category_id}: {e}")
            raise

        logger.info(f"Moved category {category_id} to order {new_order} ({changed} rows renumbered)")
        await self._invalidate_category_cache()
        return True

    async def bulk_reorder_categories(self, db: AsyncSession, category_orders: Sequence) -> dict:
        """
        Write caller-supplied order values in one transaction.

        Every id must exist; the first missing id aborts the whole batch. Values
        are stored as given, with no density or uniqueness check.
        """
        try:
            async with scoped_transaction(db):
                for item in category_orders:
                    category_id = item.id if hasattr(item, 'id') else item['id']
                    order = item.order if hasattr(item, 'order') else item['order']

                    category = await self._get(db, category_id)
                    if not category:
                        raise NotFoundError(f"Category {category_id} not found")
                    category.order = order

        except ContentError:
            raise
        except Exception as e:
            logger.error(f"Error bulk reordering categories: {e}")
            raise

        await self._invalidate_category_cache()
        return {"success": True, "updated": len(category_orders)}

    async def _get(self, db: AsyncSession, category_id: int) -> Optional[Category]:
        result = await db.execute(
            select(Category)
            .where(Category.id == category_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _child_count(self, db: AsyncSession, category_id: int) -> int:
        result = await db.execute(
            select(func.count(Category.id)).where(Category.parent_id == category_id)
        )
        return result.scalar() or 0

    async def _ensure_slug_available(self, db: AsyncSession, slug: str, exclude_id: Optional[int] = None):
        query = select(Category.id).where(Category.slug == slug)
        if exclude_id is not None:
            query = query.where(Category.id != exclude_id)
        result = await db.execute(query)
        if result.first() is not None:
            raise DuplicateKeyError(f"Category with slug '{slug}' already exists")

    async def _validate_parent(self, db: AsyncSession, parent_id: int, moving_id: Optional[int] = None):
        parent = await self._get(db, parent_id)
        if not parent:
            raise NotFoundError(f"Parent category {parent_id} not found")

        if moving_id is not None:
            await self._ensure_not_descendant(db, parent, moving_id)

        if self.enforce_two_level:
            if parent.parent_id is not None:
                raise InvalidParentError("Parent category must be a root category")
            if moving_id is not None and await self._child_count(db, moving_id):
                raise InvalidParentError("A category with subcategories cannot become a subcategory")

    async def _ensure_not_descendant(self, db: AsyncSession, parent: Category, moving_id: int):
        """Walk up from the new parent; meeting the moving category would close a cycle"""
        seen = set()
        ancestor = parent
        while ancestor is not None and ancestor.id not in seen:
            if ancestor.id == moving_id:
                raise InvalidParentError("A category cannot be moved under one of its own subcategories")
            seen.add(ancestor.id)
            ancestor = await self._get(db, ancestor.parent_id) if ancestor.parent_id is not None else None

    async def _move_to_group(self, db: AsyncSession, category: Category, parent_id: Optional[int]):
        source = placement_of(category.parent_id)
        destination = placement_of(parent_id)
        if isinstance(destination, Child):
            await self._validate_parent(db, destination.parent_id, moving_id=category.id)

        old_order = category.order
        new_order = await next_order(db, destination, self.order_base)
        category.parent_id = parent_id
        category.order = new_order
        await db.flush()

        await renumber_group(db, source, self.order_base)
        logger.info(
            f"Moved category {category.id} from parent {source.parent_id} (order {old_order}) "
            f"to parent {parent_id} (order {new_order})"
        )

    @staticmethod
    def _translate_integrity_error(e: IntegrityError, slug: str) -> Exception:
        message = str(e)
        if "UNIQUE constraint failed" in message or "duplicate key" in message.lower():
            return DuplicateKeyError(f"Category with slug '{slug}' already exists")
        logger.error(f"Integrity error writing category: {e}")
        return e

    async def _invalidate_category_cache(self, include_subcategories: bool = False):
        keys = [CATEGORIES_ALL, CATEGORIES_TREE]
        # Subcategory rows cascade away with their category
        if include_subcategories:
            keys.append(SUBCATEGORIES_ALL)
        await cache_service.invalidate(*keys)

