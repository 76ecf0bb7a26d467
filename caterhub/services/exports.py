"""Printable receipts and financial report exports (HTML and CSV)."""
import csv
import io
import os
from collections import OrderedDict
from datetime import datetime

from fastapi.templating import Jinja2Templates

from caterhub.core.config import settings
from caterhub.core.constants import DiscountType, SIZE_LABELS
from caterhub.schemas.reports import FinancialReport
from caterhub.services.pricing import money

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
templates = Jinja2Templates(directory=TEMPLATES_DIR)

CSV_HEADERS = [
    "Date",
    "Revenue ($)",
    "Order Count",
    "Average Order Value ($)",
    "7-Day Moving Average ($)",
]


def group_receipt_items(items):
    """
    One entry per item name with its size lines, in first-seen order:
    [{"item_name": ..., "sizes": [{size_type, size_label, quantity, unit_price, total_price}], "total_amount": ...}]
    """
    grouped = OrderedDict()
    for item in items:
        group = grouped.setdefault(
            item.item_name, {"item_name": item.item_name, "sizes": [], "total_amount": 0}
        )
        group["sizes"].append(
            {
                "size_type": item.size_type,
                "size_label": SIZE_LABELS.get(item.size_type, item.size_type),
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total_price": item.total_price,
            }
        )
        group["total_amount"] += item.total_price
    return list(grouped.values())


def discount_label(order) -> str:
    if order.discount_type == DiscountType.PERCENTAGE.value:
        return f"{money(order.discount_value).normalize():f}%"
    return f"${money(order.discount_value)}"


def render_receipt(order, generated_at: datetime = None) -> str:
    return templates.get_template("receipt.html").render(
        order=order,
        groups=group_receipt_items(order.items),
        discount_label=discount_label(order) if order.discount_amount else None,
        business=settings,
        generated_at=generated_at or datetime.now(),
    )


def render_financial_report(report: FinancialReport, generated_at: datetime = None) -> str:
    return templates.get_template("financial_report.html").render(
        report=report,
        business=settings,
        generated_at=generated_at or datetime.now(),
    )


def financial_report_csv(report: FinancialReport) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in report.daily:
        writer.writerow(
            [
                row.label,
                f"{row.total:.2f}",
                row.order_count,
                f"{row.average_order_value:.2f}",
                f"{row.moving_avg:.2f}",
            ]
        )
    return buffer.getvalue()


def report_filename(report: FinancialReport, ext: str) -> str:
    return f"financial-report-{report.start_date.isoformat()}-to-{report.end_date.isoformat()}.{ext}"
