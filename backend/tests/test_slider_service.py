"""SliderService, including the behaviors that differ from categories"""

import pytest
from sqlalchemy import select, func

from app.exceptions import NotFoundError
from app.models.category import CategoryCreate
from app.models.slider import Slider, SliderCreate, SliderUpdate
from app.services.category_service import CategoryService
from app.services.slider_service import SliderService


@pytest.fixture
def service():
    return SliderService()


@pytest.fixture
def make(service, db):
    async def create(title):
        return await service.create_slider(
            db, SliderCreate(title=title, subtitle=f"{title} subtitle", image_url=f"https://cdn.example.com/{title}.jpg")
        )
    return create


async def test_create_does_not_assign_order(make, slider_orders):
    first = await make("spring")
    second = await make("summer")

    assert await slider_orders() == {first: None, second: None}


async def test_list_places_unordered_sliders_last(service, make, db):
    s1 = await make("one")
    s2 = await make("two")
    s3 = await make("three")
    await service.bulk_reorder_sliders(db, [{"id": s3, "order": 0}, {"id": s1, "order": 1}])

    sliders = await service.list_sliders(db)

    assert [s.id for s in sliders] == [s3, s1, s2]
    assert sliders[2].order is None


async def test_bulk_reorder_writes_verbatim(service, make, db, slider_orders):
    s1 = await make("one")
    s2 = await make("two")

    result = await service.bulk_reorder_sliders(db, [{"id": s1, "order": 7}, {"id": s2, "order": 7}])

    assert result == {"success": True, "updated": 2}
    assert await slider_orders() == {s1: 7, s2: 7}


async def test_bulk_reorder_idempotent(service, make, db, slider_orders):
    s1 = await make("one")
    s2 = await make("two")
    payload = [{"id": s2, "order": 0}, {"id": s1, "order": 1}]

    await service.bulk_reorder_sliders(db, payload)
    once = await slider_orders()
    await service.bulk_reorder_sliders(db, payload)

    assert await slider_orders() == once == {s1: 1, s2: 0}


async def test_missing_id_is_counted_for_sliders_but_fails_for_categories(service, make, db, slider_orders):
    # Sliders skip existence checks while categories enforce them; both paths are pinned here
    s5 = await make("five")
    payload = [{"id": s5, "order": 0}, {"id": 999, "order": 1}]

    result = await service.bulk_reorder_sliders(db, payload)

    assert result == {"success": True, "updated": 2}
    assert await slider_orders() == {s5: 0}

    categories = CategoryService(order_base=0)
    category_id = await categories.create_category(db, CategoryCreate(name="Only", slug="only"))
    with pytest.raises(NotFoundError):
        await categories.bulk_reorder_categories(db, [{"id": category_id, "order": 0}, {"id": 999, "order": 1}])


async def test_update_returns_affected_rows(service, make, db):
    s1 = await make("one")

    assert await service.update_slider(db, s1, SliderUpdate(title="Uno", subtitle=None, image_url="https://cdn.example.com/uno.jpg")) == 1
    assert await service.update_slider(db, 404, SliderUpdate(title="X", image_url="https://cdn.example.com/x.jpg")) == 0

    sliders = await service.list_sliders(db)
    assert sliders[0].title == "Uno"
    assert sliders[0].subtitle is None


async def test_delete_keeps_remaining_orders(service, make, db, slider_orders):
    s1 = await make("one")
    s2 = await make("two")
    s3 = await make("three")
    await service.bulk_reorder_sliders(db, [{"id": s1, "order": 0}, {"id": s2, "order": 1}, {"id": s3, "order": 2}])

    assert await service.delete_slider(db, s2) == 1
    assert await service.delete_slider(db, s2) == 0

    assert await slider_orders() == {s1: 0, s3: 2}
    result = await db.execute(select(func.count(Slider.id)))
    assert result.scalar() == 2
