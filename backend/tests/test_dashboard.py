from datetime import date

import pytest

from dashboard.services import get_dashboard_data, get_delivery_stats, get_sales_per_month
from orders.models import OrderState

DELIVERED = OrderState.DELIVERED
TODAY = date(2024, 3, 20)


@pytest.fixture
def march(make_order, products):
    bun, croissant, tart = products
    for _ in range(3):
        make_order(date(2024, 3, 5), state=DELIVERED, items=[(bun, 2)])
    make_order(date(2024, 3, 20), state=DELIVERED, items=[(tart, 1), (bun, 1)])
    make_order(date(2024, 3, 20), state=DELIVERED, items=[(croissant, 4)])
    make_order(date(2024, 3, 20), state=OrderState.NEW)
    make_order(date(2024, 3, 20), state=OrderState.READY)
    make_order(date(2024, 3, 21), state=OrderState.CONFIRMED)
    # not delivered; must not count anywhere below
    make_order(date(2024, 3, 6), state=OrderState.CANCELLED, items=[(bun, 9)])


@pytest.mark.django_db
def test_deliveries_per_day(march):
    data = get_dashboard_data(3, 2024, today=TODAY)
    per_day = data.deliveries_this_month
    assert len(per_day) == 31
    assert per_day[4] == 3
    assert per_day[19] == 2
    assert per_day[5] is None
    assert sum(v for v in per_day if v) == 5


@pytest.mark.django_db
def test_deliveries_per_month(march, make_order):
    make_order(date(2024, 1, 15), state=DELIVERED)
    per_month = get_dashboard_data(3, 2024, today=TODAY).deliveries_this_year
    assert len(per_month) == 12
    assert per_month[0] == 1
    assert per_month[2] == 5
    assert per_month[1] is None


@pytest.mark.django_db
def test_leap_february_has_29_buckets(make_order):
    make_order(date(2024, 2, 29), state=DELIVERED)
    per_day = get_dashboard_data(2, 2024, today=TODAY).deliveries_this_month
    assert len(per_day) == 29
    assert per_day[28] == 1


@pytest.mark.django_db
def test_delivery_stats(march):
    stats = get_delivery_stats(today=TODAY)
    assert stats.due_today == 4
    assert stats.due_tomorrow == 1
    assert stats.delivered_today == 2
    assert stats.not_available_today == 1
    assert stats.new_orders == 1


@pytest.mark.django_db
def test_sales_grid_skips_the_requested_month_of_this_year(march, make_order):
    make_order(date(2024, 2, 10), state=DELIVERED)
    make_order(date(2023, 3, 10), state=DELIVERED)
    make_order(date(2023, 7, 1), state=DELIVERED)
    make_order(date(2023, 7, 2), state=DELIVERED)
    make_order(date(2022, 1, 31), state=DELIVERED)
    # outside the three year window
    make_order(date(2021, 5, 5), state=DELIVERED)

    grid = get_sales_per_month(3, 2024)
    assert len(grid) == 3
    assert all(len(row) == 12 for row in grid)
    assert grid[0][2] is None
    assert grid[0][1] == 1
    assert grid[1][2] == 1
    assert grid[1][6] == 2
    assert grid[2][0] == 1
    assert sum(v for row in grid for v in row if v) == 5


@pytest.mark.django_db
def test_product_deliveries_in_product_order(march, products):
    bun, croissant, tart = products
    deliveries = get_dashboard_data(3, 2024, today=TODAY).product_deliveries
    assert list(deliveries.items()) == [(bun, 7), (croissant, 4), (tart, 1)]


@pytest.mark.django_db
def test_empty_month_is_all_missing():
    data = get_dashboard_data(6, 2020, today=TODAY)
    assert data.deliveries_this_month == [None] * 30
    assert data.deliveries_this_year == [None] * 12
    assert data.sales_per_month == [[None] * 12] * 3
    assert data.product_deliveries == {}


@pytest.mark.django_db
def test_as_dict_is_json_ready(march, products):
    out = get_dashboard_data(3, 2024, today=TODAY).as_dict()
    assert out["delivery_stats"]["due_today"] == 4
    assert out["product_deliveries"][0] == {"product": "Strawberry Bun", "quantity": 7}


@pytest.mark.django_db
def test_invalid_month_raises():
    with pytest.raises(ValueError):
        get_dashboard_data(13, 2024, today=TODAY)


@pytest.mark.django_db
def test_as_dict_exposes_every_dashboard_field():
    out = get_dashboard_data(6, 2020, today=TODAY).as_dict()
    assert set(out) == {
        "delivery_stats", "deliveries_this_month", "deliveries_this_year", "sales_per_month", "product_deliveries",
    }
