"""Service for the homepage slider carousel"""
import logging
from typing import List, Sequence
from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import scoped_transaction
from app.models.slider import Slider, SliderCreate, SliderUpdate, SliderResponse
from app.services.cache import cache_service, SLIDERS_ALL

logger = logging.getLogger(__name__)


class SliderService:
    """
    Slider CRUD plus bulk reordering of the single flat carousel.

    Unlike categories, new sliders get no order value and bulk reorder does not
    check that ids exist.
    """

    async def list_sliders(self, db: AsyncSession) -> List[SliderResponse]:
        """Sliders by `order`; sliders never placed by a reorder come last"""
        cached_result = await cache_service.get(SLIDERS_ALL)
        if cached_result is not None:
            logger.debug("Cache hit for sliders list")
            return [SliderResponse(**s) for s in cached_result]

        result = await db.execute(
            select(Slider)
            .order_by(Slider.order.asc().nulls_last(), Slider.id)
            .execution_options(populate_existing=True)
        )
        sliders = [SliderResponse.model_validate(s) for s in result.scalars().all()]

        await cache_service.set(SLIDERS_ALL, [s.model_dump() for s in sliders])
        return sliders

    async def create_slider(self, db: AsyncSession, slider_data: SliderCreate) -> int:
        try:
            async with scoped_transaction(db):
                slider = Slider(
                    title=slider_data.title,
                    subtitle=slider_data.subtitle,
                    image_url=slider_data.image_url,
                )
                db.add(slider)
                await db.flush()
                slider_id = slider.id
        except Exception as e:
            logger.error(f"Error creating slider: {e}")
            raise

        logger.info(f"Created slider {slider_id}")
        await cache_service.invalidate(SLIDERS_ALL)
        return slider_id

    async def update_slider(self, db: AsyncSession, slider_id: int, slider_data: SliderUpdate) -> int:
        """Returns the affected row count (0 when the slider does not exist)"""
        try:
            async with scoped_transaction(db):
                result = await db.execute(
                    update(Slider)
                    .where(Slider.id == slider_id)
                    .values(
                        title=slider_data.title,
                        subtitle=slider_data.subtitle,
                        image_url=slider_data.image_url,
                    )
                    .execution_options(synchronize_session=False)
                )
                affected = result.rowcount
        except Exception as e:
            logger.error(f"Error updating slider {slider_id}: {e}")
            raise

        if affected:
            await cache_service.invalidate(SLIDERS_ALL)
        return affected

    async def delete_slider(self, db: AsyncSession, slider_id: int) -> int:
        """Returns the affected row count. Remaining sliders keep their order values."""
        try:
            async with scoped_transaction(db):
                result = await db.execute(
                    delete(Slider)
                    .where(Slider.id == slider_id)
                    .execution_options(synchronize_session=False)
                )
                affected = result.rowcount
        except Exception as e:
            logger.error(f"Error deleting slider {slider_id}: {e}")
            raise

        if affected:
            logger.info(f"Deleted slider {slider_id}")
            await cache_service.invalidate(SLIDERS_ALL)
        return affected

    async def bulk_reorder_sliders(self, db: AsyncSession, slider_orders: Sequence) -> dict:
        """
        Write caller-supplied order values in one transaction.

        Unknown ids are silently skipped yet still counted in `updated`.
        """
        try:
            async with scoped_transaction(db):
                for item in slider_orders:
                    slider_id = item.id if hasattr(item, 'id') else item['id']
                    order = item.order if hasattr(item, 'order') else item['order']
                    await db.execute(
                        update(Slider)
                        .where(Slider.id == slider_id)
                        .values(order=order)
                        .execution_options(synchronize_session=False)
                    )
        except Exception as e:
            logger.error(f"Error bulk reordering sliders: {e}")
            raise

        await cache_service.invalidate(SLIDERS_ALL)
        return {"success": True, "updated": len(slider_orders)}
