"""The same ordering rules hold when sibling groups start counting at 1"""

import pytest

from app.models.category import CategoryCreate, CategoryUpdate
from app.services.category_service import CategoryService


@pytest.fixture
def service():
    return CategoryService(order_base=1)


@pytest.fixture
def make(service, db):
    async def create(name, parent_id=None):
        return await service.create_category(db, CategoryCreate(name=name, slug=name.lower(), parent_id=parent_id))
    return create


async def test_first_insert_gets_one_and_second_gets_two(make, group_orders):
    first = await make("First")
    second = await make("Second")

    assert await group_orders(None) == {first: 1, second: 2}


async def test_delete_renumbers_from_one(service, make, db, group_orders):
    a = await make("A")
    b = await make("B")
    c = await make("C")

    await service.delete_category(db, a)

    assert await group_orders(None) == {b: 1, c: 2}


async def test_reparent_into_empty_group_starts_at_one(service, make, db, group_orders):
    a = await make("A")
    b = await make("B")
    c = await make("C")

    await service.update_category(db, b, CategoryUpdate(name="B", slug="b", parent_id=a))

    assert await group_orders(a) == {b: 1}
    assert await group_orders(None) == {a: 1, c: 2}


async def test_reorder_to_zero_lands_on_first_slot(service, make, db, group_orders):
    a = await make("A")
    b = await make("B")
    c = await make("C")

    await service.reorder_category(db, c, 0)

    assert await group_orders(None) == {c: 1, a: 2, b: 3}


async def test_reorder_uses_absolute_order_values(service, make, db, group_orders):
    a = await make("A")
    b = await make("B")
    c = await make("C")

    await service.reorder_category(db, a, 2)

    assert await group_orders(None) == {b: 1, a: 2, c: 3}
