"""Order services.

Everything that writes runs inside ``transaction.atomic``: an exception raised
anywhere in a save (the caller's filler, the line items, the history entry,
an optimistic-lock conflict) rolls back the whole save and propagates.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Iterable, Mapping, Optional

from django.conf import settings
from django.core.paginator import Page
from django.db import transaction
from django.utils import timezone

from accounts.models import User
from common.paging import paginate
from .models import Customer, Order, OrderItem, OrderState

log = logging.getLogger(__name__)

OrderFiller = Callable[[User, Order], None]


def create_new_order(current_user: User | None, today: date | None = None) -> Order:
    """Unsaved order due today at the default due time, with an empty customer."""
    return Order(
        created_by=current_user,
        state=OrderState.NEW,
        due_date=today or timezone.localdate(),
        due_time=settings.BAKERY_DEFAULT_DUE_TIME,
        customer=Customer(),
    )


def load(order_id: int) -> Order:
    return Order.objects.select_related("customer", "pickup_location").get(pk=order_id)


def _orders_matching(filter_text: Optional[str], filter_date: Optional[date]):
    # an empty text filter counts as no text filter
    qs = Order.objects.select_related("customer", "pickup_location")
    if filter_text and filter_date is not None:
        qs = qs.customer_name_contains(filter_text).due_after(filter_date)
    elif filter_text:
        qs = qs.customer_name_contains(filter_text)
    elif filter_date is not None:
        qs = qs.due_after(filter_date)
    return qs.order_by("due_date", "due_time", "id")


def find_any_matching_after_due_date(
    filter_text: Optional[str] = None,
    filter_date: Optional[date] = None,
    page=1,
    page_size: int | None = None,
) -> Page:
    return paginate(_orders_matching(filter_text, filter_date), page, page_size)


def count_any_matching_after_due_date(filter_text: Optional[str] = None, filter_date: Optional[date] = None) -> int:
    return _orders_matching(filter_text, filter_date).count()


def find_any_matching_starting_today(today: date | None = None):
    today = today or timezone.localdate()
    return (Order.objects
            .select_related("customer", "pickup_location")
            .filter(due_date__gte=today)
            .order_by("due_date", "due_time", "id"))


def _persist(order: Order) -> Order:
    customer = order.customer
    customer.save()
    order.customer = customer
    order.save()
    return order


def _replace_items(order: Order, items: Iterable[Mapping]) -> None:
    order.items.all().delete()
    OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            product=item["product"],
            quantity=item.get("quantity", 1),
            comment=item.get("comment", ""),
        )
        for item in items
    ])


@transaction.atomic
def save_order(current_user: User, order_id: int | None, order_filler: OrderFiller, items=None) -> Order:
    """
    Create (``order_id`` is None) or load an order, let ``order_filler`` set its
    fields, then store it with its history entry.

    ``items``, when given, replaces the order's line items; each entry is a
    mapping with ``product``, ``quantity`` and optional ``comment``.
    """
    if order_id is None:
        order = create_new_order(current_user)
        previous_state = None
    else:
        order = load(order_id)
        previous_state = order.state

    order_filler(current_user, order)
    _persist(order)
    if items is not None:
        _replace_items(order, items)

    if previous_state is None:
        order.add_history_item(current_user, "Order placed")
    elif order.state != previous_state:
        order.add_history_item(current_user, f"Order {OrderState(order.state).label.lower()}")

    log.info("order %s saved by %s (state=%s)", order.pk, getattr(current_user, "pk", None), order.state)
    return order


@transaction.atomic
def save(order: Order) -> Order:
    return _persist(order)


@transaction.atomic
def add_comment(current_user: User, order: Order, comment: str) -> Order:
    order.add_history_item(current_user, comment)
    order.save()
    return order
