"""API routes for the homepage slider carousel"""
from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.database import get_db
from app.models.slider import SliderCreate, SliderUpdate, SliderBulkReorderRequest
from app.models.user import User
from app.routes.auth import get_current_admin_user
from app.services.slider_service import SliderService

router = APIRouter(prefix="/api/sliders", tags=["sliders"])
logger = logging.getLogger(__name__)

slider_service = SliderService()


@router.get("")
async def get_sliders(db: AsyncSession = Depends(get_db)):
    try:
        sliders = await slider_service.list_sliders(db)
        return {"message": "Sliders fetched successfully", "sliders": sliders}
    except Exception as e:
        logger.error(f"Error fetching sliders: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch sliders")


@router.post("", status_code=201)
async def create_slider(
    slider_data: SliderCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """Create a slider. It has no position until the next bulk reorder includes it."""
    try:
        slider_id = await slider_service.create_slider(db, slider_data)
        return {"message": "Slider created successfully", "insertId": slider_id}
    except Exception as e:
        logger.error(f"Error creating slider: {e}")
        raise HTTPException(status_code=500, detail="Failed to create slider")


@router.put("/{slider_id}")
async def update_slider(
    slider_id: int,
    slider_data: SliderUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    try:
        affected = await slider_service.update_slider(db, slider_id, slider_data)
    except Exception as e:
        logger.error(f"Error updating slider {slider_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update slider")

    if not affected:
        raise HTTPException(status_code=404, detail="Slider not found")
    return {"message": "Slider updated successfully", "affectedRows": affected}


@router.delete("/{slider_id}")
async def delete_slider(
    slider_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    try:
        affected = await slider_service.delete_slider(db, slider_id)
    except Exception as e:
        logger.error(f"Error deleting slider {slider_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete slider")

    if not affected:
        raise HTTPException(status_code=404, detail="Slider not found")
    return {"message": "Slider deleted successfully", "affectedRows": affected}


@router.post("/reorder")
async def bulk_reorder_sliders(
    reorder_data: SliderBulkReorderRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_admin_user)
):
    """
    Batch update the carousel order.

    - **items**: List of slider IDs with their new order values; unknown IDs are skipped
    """
    try:
        result = await slider_service.bulk_reorder_sliders(db, reorder_data.items)
        return {"message": "Sliders reordered successfully", **result}
    except Exception as e:
        logger.error(f"Error bulk reordering sliders: {e}")
        raise HTTPException(status_code=500, detail="Failed to reorder sliders")
