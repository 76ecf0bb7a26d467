from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from caterhub.crud import customer as customer_crud
from caterhub.crud import menu_category as category_crud
from caterhub.crud import menu_item as item_crud
from caterhub.crud import order as order_crud
from caterhub.crud import review as review_crud
from caterhub.crud import todays_menu as todays_menu_crud
from caterhub.schemas.customer import CustomerCreate
from caterhub.schemas.menu import MenuItemCreate, MenuItemUpdate
from caterhub.schemas.order import OrderItemIn, OrderUpdate
from caterhub.schemas.review import ReviewCreate
from caterhub.schemas.todays_menu import TodaysMenuCreate, TodaysMenuUpdate
from caterhub.services.order_writer import OrderWriter

MENU_DATE = date(2024, 5, 15)


class TestMenuItems:

    async def test_create_requires_a_price(self, menu):
        with pytest.raises(ValidationError):
            MenuItemCreate(name="Chai", category_id=menu["category"].id)

    async def test_create_with_unknown_category(self, db, menu):
        with pytest.raises(ValueError, match="Invalid category"):
            await item_crud.create_menu_item(
                db, MenuItemCreate(name="Chai", category_id="nope", price_per_plate=Decimal("2"))
            )

    async def test_create_loads_category_name(self, db, menu):
        item = await item_crud.create_menu_item(
            db, MenuItemCreate(name="Chai", category_id=menu["category"].id, price_per_plate=Decimal("2"))
        )
        assert item.category_name == "Main Course"

    async def test_update_cannot_clear_last_price(self, db, menu):
        with pytest.raises(ValueError, match="At least one price"):
            await item_crud.update_menu_item(db, menu["item_b"].id, MenuItemUpdate(price_half_tray=None))

        item = await item_crud.get_menu_item(db, menu["item_b"].id)
        assert item.price_half_tray == Decimal("30.00")

    async def test_update_fields(self, db, menu):
        item = await item_crud.update_menu_item(
            db, menu["item_a"].id, MenuItemUpdate(price_half_tray=Decimal("50"), is_available=False)
        )
        assert item.price_half_tray == Decimal("50.00")
        assert item.is_available is False

    async def test_by_category_only_available(self, db, menu):
        await item_crud.update_menu_item(db, menu["roti"].id, MenuItemUpdate(is_available=False))
        items = await item_crud.get_menu_items_by_category(db, menu["category"].id)
        assert {i.name for i in items} == {"ItemA", "ItemB"}

    async def test_delete_keeps_order_snapshot(self, db, menu, order_payload):
        order = await OrderWriter(db).create(order_payload)
        await item_crud.delete_menu_item(db, menu["item_a"].id)

        assert await item_crud.get_menu_item(db, menu["item_a"].id) is None

        reloaded = await order_crud.get_order(db, order.id)
        links = {i.item_name: i.menu_item_id for i in reloaded.items}
        assert links == {"ItemA": None, "ItemB": menu["item_b"].id}

        # the stored lines can be sent back unchanged
        lines = [
            OrderItemIn(
                menu_item_id=i.menu_item_id,
                item_name=i.item_name,
                size_type=i.size_type,
                quantity=i.quantity,
                unit_price=i.unit_price,
            )
            for i in reloaded.items
        ]
        updated, diff = await OrderWriter(db).update(order.id, OrderUpdate(items=lines))
        assert diff.is_empty
        assert updated.total_amount == Decimal("50.00")

    async def test_category_delete_unlinks_order_items(self, db, menu, order_payload):
        order = await OrderWriter(db).create(order_payload)
        await category_crud.delete_category(db, menu["category"].id)

        assert await item_crud.get_menu_items(db) == []
        reloaded = await order_crud.get_order(db, order.id)
        assert [i.menu_item_id for i in reloaded.items] == [None, None]
        assert reloaded.total_amount == Decimal("50.00")


class TestCustomers:

    async def test_totals_include_customers_without_orders(self, db, order_payload):
        await OrderWriter(db).create(order_payload)
        await customer_crud.create_customer(db, CustomerCreate(name="Zoya", phone="201-555-0300"))

        rows = await customer_crud.get_customers_with_totals(db)
        totals = {customer.name: (Decimal(str(total)), count) for customer, total, count in rows}

        assert totals["Asha Patel"] == (Decimal("50.00"), 1)
        assert totals["Zoya"] == (Decimal("0"), 0)

    async def test_find_by_phone_ignores_surrounding_whitespace(self, db):
        created = await customer_crud.create_customer(db, CustomerCreate(name="Zoya", phone="201-555-0300"))
        found = await customer_crud.find_customer_by_phone(db, " 201-555-0300 ")
        assert found.id == created.id


class TestReviews:

    async def test_new_review_is_pending(self, db, menu):
        review = await review_crud.create_review(
            db,
            ReviewCreate(
                full_name="Meera",
                review_text="Loved the dal",
                rating=5,
                menu_item_ids=[menu["item_b"].id],
            ),
        )
        assert review.status == "pending"
        assert [m.name for m in review.menu_items] == ["ItemB"]
        assert await review_crud.get_approved_reviews(db) == []

    def test_schema_limits_menu_items(self):
        with pytest.raises(ValidationError):
            ReviewCreate(full_name="Meera", review_text="Great", menu_item_ids=[f"m-{i}" for i in range(6)])

    def test_schema_limits_rating(self):
        with pytest.raises(ValidationError):
            ReviewCreate(full_name="Meera", review_text="Great", rating=6)

    async def test_crud_limits_menu_items(self, db):
        review = ReviewCreate.model_construct(
            full_name="Meera",
            review_text="Great",
            rating=None,
            menu_item_ids=[f"m-{i}" for i in range(6)],
        )
        with pytest.raises(ValueError, match="at most 5"):
            await review_crud.create_review(db, review)

    async def test_unknown_menu_item_rejected(self, db, menu):
        with pytest.raises(ValueError, match="Unknown menu item"):
            await review_crud.create_review(
                db, ReviewCreate(full_name="Meera", review_text="Great", menu_item_ids=["missing"])
            )

    async def test_approve_then_reset(self, db, menu):
        review = await review_crud.create_review(db, ReviewCreate(full_name="Meera", review_text="Great"))

        approved = await review_crud.update_review_status(db, review.id, "approved", "admin")
        assert approved.reviewed_by == "admin"
        assert approved.reviewed_at is not None
        assert [r.id for r in await review_crud.get_approved_reviews(db)] == [review.id]

        reset = await review_crud.update_review_status(db, review.id, "pending")
        assert reset.reviewed_at is None
        assert reset.reviewed_by is None


class TestTodaysMenu:

    async def test_add_and_reject_duplicate(self, db, menu):
        entry = await todays_menu_crud.add_to_todays_menu(
            db, TodaysMenuCreate(menu_item_id=menu["item_a"].id, date=MENU_DATE, special_note="Fresh today")
        )
        assert entry.menu_item.name == "ItemA"

        with pytest.raises(ValueError, match="already on the menu"):
            await todays_menu_crud.add_to_todays_menu(
                db, TodaysMenuCreate(menu_item_id=menu["item_a"].id, date=MENU_DATE)
            )

    async def test_public_view_hides_unavailable(self, db, menu):
        a = await todays_menu_crud.add_to_todays_menu(db, TodaysMenuCreate(menu_item_id=menu["item_a"].id, date=MENU_DATE))
        await todays_menu_crud.add_to_todays_menu(db, TodaysMenuCreate(menu_item_id=menu["item_b"].id, date=MENU_DATE))
        await todays_menu_crud.add_to_todays_menu(db, TodaysMenuCreate(menu_item_id=menu["roti"].id, date=MENU_DATE))

        await todays_menu_crud.toggle_availability(db, a.id)
        await item_crud.update_menu_item(db, menu["roti"].id, MenuItemUpdate(is_available=False))

        public = await todays_menu_crud.get_todays_menu(db, MENU_DATE)
        admin = await todays_menu_crud.get_todays_menu(db, MENU_DATE, include_unavailable=True)

        assert [e.menu_item.name for e in public] == ["ItemB"]
        assert len(admin) == 3

    async def test_note_update_and_remove(self, db, menu):
        entry = await todays_menu_crud.add_to_todays_menu(db, TodaysMenuCreate(menu_item_id=menu["item_a"].id, date=MENU_DATE))

        updated = await todays_menu_crud.update_entry(db, entry.id, TodaysMenuUpdate(special_note="Only 5 left"))
        assert updated.special_note == "Only 5 left"

        assert await todays_menu_crud.remove_entry(db, entry.id) is not None
        assert await todays_menu_crud.get_entry(db, entry.id) is None

    async def test_clear_only_touches_one_date(self, db, menu):
        await todays_menu_crud.add_to_todays_menu(db, TodaysMenuCreate(menu_item_id=menu["item_a"].id, date=MENU_DATE))
        await todays_menu_crud.add_to_todays_menu(db, TodaysMenuCreate(menu_item_id=menu["item_b"].id, date=MENU_DATE))
        await todays_menu_crud.add_to_todays_menu(db, TodaysMenuCreate(menu_item_id=menu["item_a"].id, date=date(2024, 5, 16)))

        assert await todays_menu_crud.clear_todays_menu(db, MENU_DATE) == 2
        assert await todays_menu_crud.get_todays_menu(db, MENU_DATE, include_unavailable=True) == []
        assert len(await todays_menu_crud.get_todays_menu(db, date(2024, 5, 16))) == 1

    async def test_items_available_to_add(self, db, menu):
        await todays_menu_crud.add_to_todays_menu(db, TodaysMenuCreate(menu_item_id=menu["item_a"].id, date=MENU_DATE))

        items = await todays_menu_crud.get_items_available_to_add(db, MENU_DATE)
        assert {i.name for i in items} == {"ItemB", "Roti"}

        searched = await todays_menu_crud.get_items_available_to_add(db, MENU_DATE, search="rot")
        assert [i.name for i in searched] == ["Roti"]

        other_category = await todays_menu_crud.get_items_available_to_add(db, MENU_DATE, category_name="Dessert")
        assert other_category == []
