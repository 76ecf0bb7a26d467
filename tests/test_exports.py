from datetime import date, datetime
from decimal import Decimal

from caterhub.models import Order, OrderItem
from caterhub.schemas.reports import ReportFilter
from caterhub.services import exports, reporting
from caterhub.utils.date_ranges import ReportPeriod, resolve_date_range

TODAY = date(2024, 5, 15)


def receipt_order(**kwargs):
    items = [
        OrderItem(item_name="ItemA", size_type="plate", quantity=2, unit_price=Decimal("10.00"), total_price=Decimal("20.00")),
        OrderItem(item_name="ItemB", size_type="half_tray", quantity=1, unit_price=Decimal("30.00"), total_price=Decimal("30.00")),
        OrderItem(item_name="ItemA", size_type="full_tray", quantity=1, unit_price=Decimal("90.00"), total_price=Decimal("90.00")),
    ]
    fields = dict(
        order_number="ORD-0007",
        customer_name="Asha Patel",
        customer_phone="201-555-0101",
        delivery_date=TODAY,
        delivery_time="18:30",
        status="received",
        subtotal_amount=Decimal("140.00"),
        discount_type=None,
        discount_value=Decimal("0"),
        discount_amount=Decimal("0.00"),
        tip_amount=Decimal("0.00"),
        total_amount=Decimal("140.00"),
        created_at=datetime(2024, 5, 14, 9, 30),
        items=items,
    )
    fields.update(kwargs)
    return Order(**fields)


class TestReceipt:

    def test_items_grouped_by_name(self):
        groups = exports.group_receipt_items(receipt_order().items)

        assert [g["item_name"] for g in groups] == ["ItemA", "ItemB"]
        assert [s["size_label"] for s in groups[0]["sizes"]] == ["Plate", "Full Tray"]
        assert groups[0]["total_amount"] == Decimal("110.00")

    def test_render(self):
        html = exports.render_receipt(receipt_order(), generated_at=datetime(2024, 5, 14, 10, 0))

        assert "ORD-0007" in html
        assert "2x Plate" in html
        assert "$140.00" in html
        assert "Discount" not in html

    def test_render_with_discount_and_tip(self):
        order = receipt_order(
            discount_type="percentage",
            discount_value=Decimal("10.00"),
            discount_amount=Decimal("14.00"),
            tip_amount=Decimal("6.00"),
            total_amount=Decimal("132.00"),
        )
        html = exports.render_receipt(order)

        assert "Discount (10%)" in html
        assert "-$14.00" in html
        assert "+$6.00" in html
        assert "$132.00" in html


class TestFinancialExports:

    def _report(self):
        week = resolve_date_range(ReportPeriod.LAST_7_DAYS, today=TODAY)
        orders = [
            Order(delivery_date=date(2024, 5, 14), status="paid", total_amount=Decimal("40.00"),
                  tip_amount=Decimal("0"), customer_id="c-1", customer_name="Asha", items=[]),
        ]
        return reporting.compile_report(orders, ReportFilter(period=ReportPeriod.LAST_7_DAYS), week)

    def test_csv(self):
        lines = exports.financial_report_csv(self._report()).splitlines()

        assert lines[0] == "Date,Revenue ($),Order Count,Average Order Value ($),7-Day Moving Average ($)"
        assert len(lines) == 8
        assert lines[1] == "May 09,0.00,0,0.00,0.00"
        assert lines[6] == "May 14,40.00,1,40.00,6.67"

    def test_html(self):
        html = exports.render_financial_report(self._report(), generated_at=datetime(2024, 5, 15, 8, 0))
        assert "Last 7 days" in html
        assert "$40.00" in html
        assert html.count("<tr>") == 8

    def test_filename(self):
        assert exports.report_filename(self._report(), "csv") == "financial-report-2024-05-09-to-2024-05-15.csv"
