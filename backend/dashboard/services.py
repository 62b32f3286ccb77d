from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Iterable

from django.utils import timezone

from orders.models import Order, OrderState
from .data import Bucket, DashboardData, DeliveryStats

SALES_YEARS = 3


def fill_buckets(length: int, pairs: Iterable[tuple[int, int]]) -> list[Bucket]:
    """
    Spread sparse (1-based index, value) pairs over ``length`` buckets.

    Buckets without a pair stay None. Pairs are applied in input order, so a
    repeated index keeps the last value. An index outside [1, length] raises
    IndexError.
    """
    buckets: list[Bucket] = [None] * length
    for index, value in pairs:
        if not 1 <= index <= length:
            raise IndexError(f"bucket index {index} outside 1..{length}")
        buckets[index - 1] = value
    return buckets


def get_delivery_stats(today: date | None = None) -> DeliveryStats:
    today = today or timezone.localdate()
    orders = Order.objects
    return DeliveryStats(
        due_today=orders.due_on(today).count(),
        due_tomorrow=orders.due_on(today + timedelta(days=1)).count(),
        delivered_today=orders.due_on(today).in_states([OrderState.DELIVERED]).count(),
        not_available_today=orders.due_on(today).in_states(OrderState.not_available()).count(),
        new_orders=orders.filter(state=OrderState.NEW).count(),
    )


def get_deliveries_per_day(month: int, year: int) -> list[Bucket]:
    # calendar raises for a month outside 1..12
    days_in_month = calendar.monthrange(year, month)[1]
    return fill_buckets(days_in_month, Order.objects.count_per_day(OrderState.DELIVERED, year, month))


def get_deliveries_per_month(year: int) -> list[Bucket]:
    return fill_buckets(12, Order.objects.count_per_month(OrderState.DELIVERED, year))


def get_sales_per_month(month: int, year: int) -> list[list[Bucket]]:
    grid: list[list[Bucket]] = [[None] * 12 for _ in range(SALES_YEARS)]
    for result_year, result_month, count in Order.objects.sum_per_month_last_three_years(OrderState.DELIVERED, year):
        years_ago = year - result_year
        if years_ago == 0 and result_month == month:
            # current month is incomplete
            continue
        grid[years_ago][result_month - 1] = count
    return grid


def get_product_deliveries(month: int, year: int) -> dict:
    deliveries = {}
    for quantity, product in Order.objects.count_per_product(OrderState.DELIVERED, year, month):
        deliveries[product] = quantity
    return deliveries


def get_dashboard_data(month: int, year: int, today: date | None = None) -> DashboardData:
    """Dashboard for ``month``/``year``; the delivery stats are always about ``today``."""
    return DashboardData(
        delivery_stats=get_delivery_stats(today),
        deliveries_this_month=get_deliveries_per_day(month, year),
        deliveries_this_year=get_deliveries_per_month(year),
        sales_per_month=get_sales_per_month(month, year),
        product_deliveries=get_product_deliveries(month, year),
    )
