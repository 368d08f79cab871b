"""Local order drafts committed through bulk reorder"""

from functools import partial

import pytest

from app.models.category import CategoryCreate
from app.services.category_service import CategoryService
from app.services.order_draft import OrderDraft
from app.services.slider_service import SliderService
from app.models.slider import SliderCreate


class TestOrderDraftLocal:

    def test_move_and_items(self):
        draft = OrderDraft([10, 20, 30])

        draft.move(30, 0)

        assert draft.ids == [30, 10, 20]
        assert draft.items() == [
            {"id": 30, "order": 0},
            {"id": 10, "order": 1},
            {"id": 20, "order": 2},
        ]
        assert draft.dirty

    def test_move_clamps_index(self):
        draft = OrderDraft([1, 2, 3])

        draft.move(1, 50)
        assert draft.ids == [2, 3, 1]

        draft.move(1, -4)
        assert draft.ids == [1, 2, 3]
        assert not draft.dirty

    def test_unknown_id(self):
        draft = OrderDraft([1, 2])

        with pytest.raises(KeyError):
            draft.move(3, 0)

    def test_discard_restores_last_saved_order(self):
        draft = OrderDraft([1, 2, 3], base=1)
        draft.move(3, 0)

        draft.discard()

        assert draft.ids == [1, 2, 3]
        assert draft.items()[0] == {"id": 1, "order": 1}


class TestOrderDraftSave:

    async def test_save_category_order(self, db, group_orders):
        service = CategoryService(order_base=0)
        ids = [
            await service.create_category(db, CategoryCreate(name=name, slug=name.lower()))
            for name in ("A", "B", "C")
        ]
        draft = OrderDraft.from_records(await service.list_categories(db))
        draft.move(ids[2], 0)

        assert await group_orders(None) == {ids[0]: 0, ids[1]: 1, ids[2]: 2}

        result = await draft.save(partial(service.bulk_reorder_categories, db))

        assert result == {"success": True, "updated": 3}
        assert not draft.dirty
        assert await group_orders(None) == {ids[2]: 0, ids[0]: 1, ids[1]: 2}

    async def test_save_places_new_sliders(self, db, slider_orders):
        service = SliderService()
        first = await service.create_slider(db, SliderCreate(title="a", image_url="https://cdn.example.com/a.jpg"))
        second = await service.create_slider(db, SliderCreate(title="b", image_url="https://cdn.example.com/b.jpg"))
        draft = OrderDraft.from_records(await service.list_sliders(db))
        draft.move(second, 0)

        await draft.save(partial(service.bulk_reorder_sliders, db))

        assert await slider_orders() == {first: 1, second: 0}
