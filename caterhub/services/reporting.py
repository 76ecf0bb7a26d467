"""
Financial reporting over orders.

All aggregation here is pure: functions take already-loaded Order rows
(with items) and return report schemas. Only paid orders count as
revenue. Everything else in the same date range is pending.
"""
import logging
from collections import OrderedDict, defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from caterhub.core.constants import (
    OrderStatus,
    MOVING_AVERAGE_WINDOW,
    TIP_TRANSACTIONS_LIMIT,
    TOP_N,
)
from caterhub.crud.order import get_orders_between, get_items_to_prepare
from caterhub.schemas.reports import (
    DailyStat,
    DailyStatWithAverage,
    DayOfWeekStat,
    FinancialReport,
    FinancialSummary,
    PreparationItem,
    ReportFilter,
    StatusShare,
    TipTransaction,
    TopCustomer,
    TopItem,
)
from caterhub.services.pricing import ZERO, money
from caterhub.utils.date_ranges import (
    DateRange,
    PERIOD_LABELS,
    ReportPeriod,
    resolve_date_range,
)

log = logging.getLogger(__name__)

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
PERCENT = Decimal("0.1")


def _is_paid(order) -> bool:
    return order.status == OrderStatus.PAID.value


def _avg(total, count) -> Decimal:
    return money(Decimal(total) / count) if count else ZERO


def day_label(d: date) -> str:
    return d.strftime("%b %d")


# ---------- Filtering ----------
def filter_orders(orders: Iterable, date_range: DateRange, customer_id: str = None, menu_item_id: str = None):
    """Orders delivered inside the range, optionally narrowed to a customer or to orders containing an item."""
    selected = []
    for order in orders:
        if order.delivery_date not in date_range:
            continue
        if customer_id and order.customer_id != customer_id:
            continue
        if menu_item_id and not any(i.menu_item_id == menu_item_id for i in order.items):
            continue
        selected.append(order)
    return selected


def paid_orders(orders) -> list:
    return [o for o in orders if _is_paid(o)]


def pending_orders(orders) -> list:
    return [o for o in orders if not _is_paid(o)]


# ---------- Daily series ----------
def daily_stats(orders, date_range: DateRange, zero_fill: bool = False) -> List[DailyStat]:
    """
    Paid revenue per delivery date.

    With zero_fill every date of the range gets a bucket; otherwise only
    dates with at least one paid order appear. Buckets are sorted by date.
    """
    buckets = defaultdict(lambda: [ZERO, 0])
    for order in paid_orders(orders):
        if order.delivery_date not in date_range:
            continue
        bucket = buckets[order.delivery_date]
        bucket[0] += money(order.total_amount)
        bucket[1] += 1

    dates = list(date_range.days()) if zero_fill else sorted(buckets)

    stats = []
    for d in dates:
        total, count = buckets.get(d, (ZERO, 0))
        stats.append(
            DailyStat(
                date=d,
                label=day_label(d),
                total=money(total),
                order_count=count,
                average_order_value=_avg(total, count),
            )
        )
    return stats


def moving_average(values: List, window: int = MOVING_AVERAGE_WINDOW) -> List[Decimal]:
    """Trailing mean; the window shrinks at the start of the series."""
    if window < 1:
        raise ValueError("window must be at least 1")

    averages = []
    for i in range(len(values)):
        chunk = values[max(0, i - window + 1): i + 1]
        averages.append(_avg(sum((Decimal(v) for v in chunk), ZERO), len(chunk)))
    return averages


def with_moving_average(stats: List[DailyStat], window: int = MOVING_AVERAGE_WINDOW) -> List[DailyStatWithAverage]:
    averages = moving_average([s.total for s in stats], window)
    return [
        DailyStatWithAverage(**s.model_dump(), moving_avg=avg)
        for s, avg in zip(stats, averages)
    ]


# ---------- Summary ----------
def financial_summary(orders) -> FinancialSummary:
    """orders must already be filtered to the report range."""
    paid = paid_orders(orders)
    pending = pending_orders(orders)

    revenue = sum((money(o.total_amount) for o in paid), ZERO)
    tipped = [o for o in paid if money(o.tip_amount) > 0]
    tips = sum((money(o.tip_amount) for o in tipped), ZERO)

    return FinancialSummary(
        total_revenue=money(revenue),
        total_orders=len(paid),
        average_order_value=_avg(revenue, len(paid)),
        pending_revenue=money(sum((money(o.total_amount) for o in pending), ZERO)),
        pending_orders=len(pending),
        total_tips=money(tips),
        orders_with_tips=len(tipped),
        average_tip=_avg(tips, len(tipped)),
    )


# ---------- Rankings ----------
def top_customers(orders, limit: int = TOP_N) -> List[TopCustomer]:
    """Paid orders grouped by customer (name snapshot when the customer is gone)."""
    groups = OrderedDict()
    for order in paid_orders(orders):
        key = order.customer_id or f"name:{order.customer_name}"
        if key not in groups:
            groups[key] = {
                "customer_id": order.customer_id,
                "name": order.customer_name,
                "total_spent": ZERO,
                "order_count": 0,
            }
        groups[key]["total_spent"] += money(order.total_amount)
        groups[key]["order_count"] += 1

    ranked = sorted(groups.values(), key=lambda g: g["total_spent"], reverse=True)
    return [TopCustomer(**g) for g in ranked[:limit]]


def top_items(orders, limit: int = TOP_N) -> List[TopItem]:
    groups = OrderedDict()
    for order in paid_orders(orders):
        for item in order.items:
            group = groups.setdefault(item.item_name, {"total_sales": ZERO, "quantity": 0})
            group["total_sales"] += money(item.total_price)
            group["quantity"] += item.quantity

    ranked = sorted(groups.items(), key=lambda kv: kv[1]["total_sales"], reverse=True)
    return [
        TopItem(
            name=name,
            total_sales=money(g["total_sales"]),
            quantity=g["quantity"],
            average_price=_avg(g["total_sales"], g["quantity"]),
        )
        for name, g in ranked[:limit]
    ]


# ---------- Analytics ----------
def revenue_growth(stats: List[DailyStat]) -> Decimal:
    """Percent change of the last 7 buckets over the 7 before them."""
    recent = sum((s.total for s in stats[-7:]), ZERO)
    previous = sum((s.total for s in stats[-14:-7]), ZERO)
    if previous > 0:
        return ((recent - previous) / previous * 100).quantize(PERCENT)
    return Decimal("100.0") if recent > 0 else Decimal("0.0")


def status_distribution(orders) -> List[StatusShare]:
    counts = OrderedDict((s.value, 0) for s in OrderStatus)
    for order in orders:
        counts[order.status] = counts.get(order.status, 0) + 1

    total = len(orders)
    return [
        StatusShare(
            status=status,
            count=count,
            percentage=(Decimal(count) / total * 100).quantize(PERCENT) if total else Decimal("0.0"),
        )
        for status, count in counts.items()
        if count
    ]


def day_of_week_stats(stats: List[DailyStat]) -> List[DayOfWeekStat]:
    """Revenue per weekday over the daily buckets, Monday first."""
    acc = {}
    for s in stats:
        day = WEEKDAYS[s.date.weekday()]
        total, count = acc.get(day, (ZERO, 0))
        acc[day] = (total + s.total, count + 1)

    return [
        DayOfWeekStat(day=day, total=money(acc[day][0]), count=acc[day][1], average=_avg(*acc[day]))
        for day in WEEKDAYS
        if day in acc
    ]


def active_customers(orders, stats: List[DailyStat]) -> int:
    """Distinct customers with an order on one of the last 7 bucket dates."""
    recent_dates = {s.date for s in stats[-7:]}
    return len({o.customer_id for o in orders if o.customer_id and o.delivery_date in recent_dates})


def tip_transactions(orders, limit: int = TIP_TRANSACTIONS_LIMIT) -> List[TipTransaction]:
    tipped = [o for o in paid_orders(orders) if money(o.tip_amount) > 0]
    tipped.sort(key=lambda o: (o.delivery_date, o.created_at), reverse=True)
    return [
        TipTransaction(
            order_id=o.id,
            order_number=o.order_number,
            customer_name=o.customer_name,
            delivery_date=o.delivery_date,
            delivery_time=o.delivery_time,
            tip_amount=money(o.tip_amount),
            total_amount=money(o.total_amount),
        )
        for o in tipped[:limit]
    ]


def preparation_summary(items) -> List[PreparationItem]:
    """Quantities to cook, grouped by item name and size."""
    totals = defaultdict(int)
    for item in items:
        totals[(item.item_name, item.size_type)] += item.quantity

    return [
        PreparationItem(item_name=name, size_type=size, total_quantity=qty)
        for (name, size), qty in sorted(totals.items())
    ]


# ---------- Report ----------
def compile_report(orders, report_filter: ReportFilter, date_range: DateRange) -> FinancialReport:
    selected = filter_orders(
        orders, date_range, report_filter.customer_id, report_filter.menu_item_id
    )
    zero_fill = report_filter.period == ReportPeriod.LAST_7_DAYS
    daily = daily_stats(selected, date_range, zero_fill=zero_fill)

    return FinancialReport(
        period=report_filter.period,
        period_label=PERIOD_LABELS[ReportPeriod(report_filter.period)],
        start_date=date_range.start,
        end_date=date_range.end,
        summary=financial_summary(selected),
        daily=with_moving_average(daily),
        top_customers=top_customers(selected),
        top_items=top_items(selected),
        status_distribution=status_distribution(selected),
        day_of_week=day_of_week_stats(daily),
        revenue_growth=revenue_growth(daily),
        active_customers=active_customers(selected, daily),
    )


async def build_financial_report(db: AsyncSession, report_filter: ReportFilter, today: Optional[date] = None) -> FinancialReport:
    date_range = resolve_date_range(
        report_filter.period, report_filter.custom_start, report_filter.custom_end, today=today
    )
    orders = await get_orders_between(db, date_range.start, date_range.end)
    report = compile_report(orders, report_filter, date_range)

    log.info(
        "financial report %s [%s..%s]: revenue=%s orders=%s pending=%s",
        report_filter.period.value,
        date_range.start, date_range.end,
        report.summary.total_revenue, report.summary.total_orders, report.summary.pending_orders,
    )
    return report


async def build_tip_transactions(db: AsyncSession, report_filter: ReportFilter, today: Optional[date] = None):
    date_range = resolve_date_range(
        report_filter.period, report_filter.custom_start, report_filter.custom_end, today=today
    )
    orders = await get_orders_between(db, date_range.start, date_range.end)
    selected = filter_orders(orders, date_range, report_filter.customer_id, report_filter.menu_item_id)
    return tip_transactions(selected)


async def build_preparation_summary(db: AsyncSession, delivery_date: date) -> List[PreparationItem]:
    return preparation_summary(await get_items_to_prepare(db, delivery_date))
