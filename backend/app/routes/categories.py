"""API routes for category management"""
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.database import get_db
from app.exceptions import ContentError, SelfParentError
from app.models.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryReorderSingle,
    CategoryBulkReorderRequest,
)
from app.models.user import User
from app.routes.auth import get_current_admin_user
from app.services.category_service import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])
logger = logging.getLogger(__name__)

category_service = CategoryService()


@router.get("")
async def get_categories(db: AsyncSession = Depends(get_db)):
    """Get all categories ordered by their `order` value."""
    try:
        categories = await category_service.list_categories(db)
        return {"categories": categories}
    except Exception as e:
        logger.error(f"Error fetching categories: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch categories")


@router.get("/tree")
async def get_category_tree(db: AsyncSession = Depends(get_db)):
    """Get root categories with their ordered children, as shown in the navbar."""
    try:
        tree = await category_service.get_category_tree(db)
        return {"categories": tree}
    except Exception as e:
        logger.error(f"Error fetching category tree: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch categories")


@router.get("/{category_id}")
async def get_category(category_id: int, db: AsyncSession = Depends(get_db)):
    """
    Get a specific category by ID.

    - **category_id**: The category ID
    """
    try:
        category = await category_service.get_category(db, category_id)
    except Exception as e:
        logger.error(f"Error fetching category {category_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch category")

    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return {"category": category}


@router.post("", status_code=201)
async def create_category(
    category_data: CategoryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Create a new category at the end of its sibling group.

    - **name**: Category name (required)
    - **slug**: URL key, unique across all categories (required)
    - **parent_id**: Parent category ID, or null for a root category
    """
    try:
        category_id = await category_service.create_category(db, category_data)
        return {"message": "Category created successfully", "insertId": category_id}
    except ContentError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error creating category: {e}")
        raise HTTPException(status_code=500, detail="Failed to create category")


@router.put("/{category_id}")
async def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Update a category. Moving it to another parent appends it to that parent's children.

    - **category_id**: The category ID
    """
    try:
        if category_data.parent_id == category_id:
            raise SelfParentError("Category cannot be its own parent")

        affected = await category_service.update_category(db, category_id, category_data)
        return {"message": "Category updated successfully", "affectedRows": affected}
    except ContentError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error updating category {category_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update category")


@router.delete("/{category_id}")
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Delete a category without children.

    - **category_id**: The category ID
    """
    try:
        affected = await category_service.delete_category(db, category_id)
        return {"message": "Category deleted successfully", "affectedRows": affected}
    except ContentError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error deleting category {category_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete category")


@router.patch("/{category_id}/reorder")
async def reorder_category(
    category_id: int,
    reorder_data: CategoryReorderSingle,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Move one category to a new position among its siblings.

    - **order**: Target position (non-negative)
    """
    try:
        await category_service.reorder_category(db, category_id, reorder_data.order)
        return {"message": "Category reordered successfully"}
    except ContentError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error reordering category {category_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to reorder category")


@router.post("/reorder")
async def bulk_reorder_categories(
    reorder_data: CategoryBulkReorderRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Batch update the order of categories. All ids must exist or nothing is saved.

    - **items**: List of category IDs with their new order values
    """
    try:
        result = await category_service.bulk_reorder_categories(db, reorder_data.items)
        return {"message": "Categories reordered successfully", **result}
    except ContentError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error bulk reordering categories: {e}")
        raise HTTPException(status_code=500, detail="Failed to reorder categories")
