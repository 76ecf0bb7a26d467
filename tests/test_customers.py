from datetime import datetime
from decimal import Decimal

import pytest

from caterhub.schemas.customer import CustomerSortField, CustomerWithTotals, SortOrder
from caterhub.services.customers import filter_customers


def customer(name, phone, total, count, created_day, email=None):
    created = datetime(2024, 5, created_day, 12, 0)
    return CustomerWithTotals(
        id=f"c-{name.lower()}",
        name=name,
        phone=phone,
        email=email,
        created_at=created,
        updated_at=created,
        total_order_value=Decimal(total),
        order_count=count,
    )


@pytest.fixture
def customers():
    return [
        customer("asha", "201-555-0101", "120.00", 3, 2, email="asha@example.com"),
        customer("Ravi", "201-555-0202", "45.00", 1, 5),
        customer("Zoya", "973-555-0303", "0", 0, 1),
        customer("Meera", "201-555-0404", "300.00", 2, 9),
    ]


def names(result):
    return [c.name for c in result]


class TestCustomerFilters:

    def test_defaults_sort_by_name_case_insensitive(self, customers):
        assert names(filter_customers(customers)) == ["asha", "Meera", "Ravi", "Zoya"]

    def test_search_name_phone_and_email(self, customers):
        assert names(filter_customers(customers, search="  MEE ")) == ["Meera"]
        assert names(filter_customers(customers, search="973")) == ["Zoya"]
        assert names(filter_customers(customers, search="example.com")) == ["asha"]
        assert len(filter_customers(customers, search="   ")) == 4

    def test_min_order_value_is_inclusive(self, customers):
        result = filter_customers(customers, min_order_value=Decimal("120"))
        assert names(result) == ["asha", "Meera"]

    def test_min_order_count(self, customers):
        assert names(filter_customers(customers, min_order_count=2)) == ["asha", "Meera"]
        assert len(filter_customers(customers, min_order_count=0)) == 4

    def test_filters_combine(self, customers):
        result = filter_customers(
            customers, search="201", min_order_value=Decimal("40"), min_order_count=2
        )
        assert names(result) == ["asha", "Meera"]


class TestCustomerSorting:

    @pytest.mark.parametrize(
        "sort_by, sort_order, expected",
        [
            (CustomerSortField.name, SortOrder.desc, ["Zoya", "Ravi", "Meera", "asha"]),
            (CustomerSortField.total_order_value, SortOrder.asc, ["Zoya", "Ravi", "asha", "Meera"]),
            (CustomerSortField.total_order_value, SortOrder.desc, ["Meera", "asha", "Ravi", "Zoya"]),
            (CustomerSortField.order_count, SortOrder.asc, ["Zoya", "Ravi", "Meera", "asha"]),
            (CustomerSortField.order_count, SortOrder.desc, ["asha", "Meera", "Ravi", "Zoya"]),
            (CustomerSortField.created_at, SortOrder.asc, ["Zoya", "asha", "Ravi", "Meera"]),
            (CustomerSortField.created_at, SortOrder.desc, ["Meera", "Ravi", "asha", "Zoya"]),
        ],
    )
    def test_sort(self, customers, sort_by, sort_order, expected):
        assert names(filter_customers(customers, sort_by=sort_by, sort_order=sort_order)) == expected

    def test_sort_accepts_plain_strings(self, customers):
        result = filter_customers(customers, sort_by="order_count", sort_order="desc")
        assert names(result)[0] == "asha"


async def test_customer_list_route_filters_and_sorts(client, order_payload):
    first = order_payload.model_dump(mode="json")
    await client.post("/admin/orders/", json=first)
    await client.post("/admin/orders/", json=first)

    second = dict(first, customer_name="Ravi Kumar", customer_phone="201-555-0202")
    await client.post("/admin/orders/", json=second)
    await client.post("/admin/customers/", json={"name": "Zoya", "phone": "973-555-0303"})

    resp = await client.get(
        "/admin/customers/", params={"sort_by": "total_order_value", "sort_order": "desc"}
    )
    assert names_from(resp.json()) == ["Asha Patel", "Ravi Kumar", "Zoya"]

    resp = await client.get("/admin/customers/", params={"min_order_count": 1, "min_order_value": "60"})
    assert names_from(resp.json()) == ["Asha Patel"]


def names_from(rows):
    return [r["name"] for r in rows]
