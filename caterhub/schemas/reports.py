from pydantic import BaseModel
from typing import Optional, List
from datetime import date
from decimal import Decimal

from caterhub.utils.date_ranges import ReportPeriod


class ReportFilter(BaseModel):
    period: ReportPeriod = ReportPeriod.LAST_7_DAYS
    custom_start: Optional[date] = None
    custom_end: Optional[date] = None
    customer_id: Optional[str] = None
    menu_item_id: Optional[str] = None


class DailyStat(BaseModel):
    date: date
    label: str  # "Mar 05"
    total: Decimal
    order_count: int
    average_order_value: Decimal


class DailyStatWithAverage(DailyStat):
    moving_avg: Decimal


class FinancialSummary(BaseModel):
    total_revenue: Decimal
    total_orders: int
    average_order_value: Decimal
    pending_revenue: Decimal
    pending_orders: int
    total_tips: Decimal
    orders_with_tips: int
    average_tip: Decimal


class TopCustomer(BaseModel):
    customer_id: Optional[str] = None
    name: str
    total_spent: Decimal
    order_count: int


class TopItem(BaseModel):
    name: str
    total_sales: Decimal
    quantity: int
    average_price: Decimal


class StatusShare(BaseModel):
    status: str
    count: int
    percentage: Decimal


class DayOfWeekStat(BaseModel):
    day: str  # "Mon"
    total: Decimal
    count: int
    average: Decimal


class TipTransaction(BaseModel):
    order_id: str
    order_number: str
    customer_name: str
    delivery_date: date
    delivery_time: Optional[str] = None
    tip_amount: Decimal
    total_amount: Decimal


class PreparationItem(BaseModel):
    item_name: str
    size_type: str
    total_quantity: int


class FinancialReport(BaseModel):
    period: ReportPeriod
    period_label: str
    start_date: date
    end_date: date
    summary: FinancialSummary
    daily: List[DailyStatWithAverage] = []
    top_customers: List[TopCustomer] = []
    top_items: List[TopItem] = []
    status_distribution: List[StatusShare] = []
    day_of_week: List[DayOfWeekStat] = []
    revenue_growth: Decimal
    active_customers: int
