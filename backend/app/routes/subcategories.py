from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.database import get_db
from app.services.subcategory_service import list_subcategories

router = APIRouter(prefix="/api/sub-categories", tags=["sub-categories"])
logger = logging.getLogger(__name__)


@router.get("")
async def get_subcategories(db: AsyncSession = Depends(get_db)):
    try:
        return {"subCategories": await list_subcategories(db)}
    except Exception as e:
        logger.error(f"Error fetching sub categories: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch sub categories")
