from datetime import date, time

import pytest
from django.db import IntegrityError
from django.test import override_settings

from common.exceptions import OptimisticLockError
from orders import services
from orders.models import Customer, HistoryItem, Order, OrderState


def _filler(location, name="Jane Doe", state=OrderState.NEW):
    def fill(user, order):
        order.due_date = date(2024, 5, 1)
        order.due_time = time(10)
        order.pickup_location = location
        order.state = state
        order.customer.full_name = name
        order.customer.phone_number = "0701234567"
    return fill


def test_create_new_order_defaults(baker):
    order = services.create_new_order(baker, today=date(2024, 5, 1))
    assert order.pk is None
    assert order.state == OrderState.NEW
    assert order.due_date == date(2024, 5, 1)
    assert order.due_time == time(16)
    assert order.customer.pk is None
    assert order.created_by == baker


@override_settings(BAKERY_DEFAULT_DUE_TIME=time(9, 30))
def test_create_new_order_uses_configured_due_time():
    assert services.create_new_order(None).due_time == time(9, 30)


@pytest.mark.django_db
def test_new_order_gets_placed_history(baker, location, products):
    order = services.save_order(baker, None, _filler(location), items=[{"product": products[0], "quantity": 3}])
    assert order.pk is not None
    assert order.customer.pk is not None
    assert order.items.count() == 1
    assert order.total_price == 3 * products[0].price
    assert [h.message for h in order.history.all()] == ["Order placed"]
    assert order.history.get().created_by == baker


@pytest.mark.django_db
def test_state_change_is_recorded(baker, location):
    order = services.save_order(baker, None, _filler(location))
    services.save_order(baker, order.id, _filler(location, state=OrderState.READY))
    history = list(HistoryItem.objects.filter(order=order).values_list("message", "order_state"))
    assert history == [("Order placed", OrderState.NEW), ("Order ready", OrderState.READY)]


@pytest.mark.django_db
def test_unchanged_state_adds_no_history(baker, location):
    order = services.save_order(baker, None, _filler(location))
    services.save_order(baker, order.id, _filler(location, name="Jane Roe"))
    assert order.history.count() == 1
    assert Order.objects.get(pk=order.pk).customer.full_name == "Jane Roe"


@pytest.mark.django_db
def test_failed_save_rolls_back_everything(baker):
    def no_location(user, order):
        order.customer.full_name = "Ghost"
        order.customer.phone_number = "0701234567"

    with pytest.raises(IntegrityError):
        services.save_order(baker, None, no_location)
    assert Customer.objects.count() == 0
    assert Order.objects.count() == 0
    assert HistoryItem.objects.count() == 0


@pytest.mark.django_db
def test_filler_exception_propagates(baker, location):
    def boom(user, order):
        raise RuntimeError("filler failed")

    with pytest.raises(RuntimeError):
        services.save_order(baker, None, boom)
    assert Order.objects.count() == 0


@pytest.mark.django_db
def test_items_are_replaced(baker, location, products):
    order = services.save_order(baker, None, _filler(location), items=[{"product": products[0], "quantity": 1}])
    services.save_order(baker, order.id, _filler(location), items=[
        {"product": products[1], "quantity": 2, "comment": "extra sugar"},
        {"product": products[2], "quantity": 1},
    ])
    items = list(order.items.values_list("product__name", "quantity", "comment"))
    assert items == [("Croissant", 2, "extra sugar"), ("Apple Tart", 1, "")]


@pytest.mark.django_db
def test_add_comment(baker, location):
    order = services.save_order(baker, None, _filler(location))
    services.add_comment(baker, order, "Customer called")
    assert order.history.last().message == "Customer called"


@pytest.mark.django_db
def test_stale_version_is_rejected(baker, location):
    order = services.save_order(baker, None, _filler(location))
    first = services.load(order.id)
    second = services.load(order.id)
    first.paid = True
    services.save(first)
    second.paid = False
    with pytest.raises(OptimisticLockError):
        services.save(second)
    assert Order.objects.get(pk=order.id).paid is True


@pytest.mark.django_db
def test_load_unknown_order():
    with pytest.raises(Order.DoesNotExist):
        services.load(999)


@pytest.mark.django_db
def test_display_strings_are_plain_ascii(location, products, make_order):
    order = make_order(date(2024, 5, 1), items=[(products[0], 2)])
    assert str(order) == f"Order {order.id} - 2024-05-01 NEW"
    assert str(order.items.get()) == "2 x Strawberry Bun"
