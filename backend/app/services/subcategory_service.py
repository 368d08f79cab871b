import logging
from typing import List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.category import SubCategory, SubCategoryResponse
from app.services.cache import cache_service, SUBCATEGORIES_ALL

logger = logging.getLogger(__name__)


async def list_subcategories(db: AsyncSession) -> List[SubCategoryResponse]:
    """Flat subcategory list ordered by `order`"""
    cached_result = await cache_service.get(SUBCATEGORIES_ALL)
    if cached_result is not None:
        logger.debug("Cache hit for subcategories list")
        return [SubCategoryResponse(**s) for s in cached_result]

    result = await db.execute(select(SubCategory).order_by(SubCategory.order, SubCategory.id))
    subcategories = [SubCategoryResponse.model_validate(s) for s in result.scalars().all()]

    await cache_service.set(SUBCATEGORIES_ALL, [s.model_dump() for s in subcategories])
    return subcategories
