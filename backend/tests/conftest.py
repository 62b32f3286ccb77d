from datetime import time

import pytest
from django.contrib.auth import get_user_model

from accounts.models import Role
from locations.models import PickupLocation
from orders.models import Customer, Order, OrderItem, OrderState, Product

User = get_user_model()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(email="admin@example.com", password="Admin123", role=Role.ADMIN,
                                    first_name="Ada", last_name="Admin")


@pytest.fixture
def baker(db):
    return User.objects.create_user(email="baker@example.com", password="Baker123", role=Role.BAKER,
                                    first_name="Bo", last_name="Baker")


@pytest.fixture
def barista(db):
    return User.objects.create_user(email="barista@example.com", password="Barista123", role=Role.BARISTA,
                                    first_name="Bea", last_name="Barista")


@pytest.fixture
def location(db):
    return PickupLocation.objects.create(name="Store")


@pytest.fixture
def products(db):
    return [
        Product.objects.create(name="Strawberry Bun", price=395),
        Product.objects.create(name="Croissant", price=220),
        Product.objects.create(name="Apple Tart", price=850),
    ]


@pytest.fixture
def make_order(location):
    def _make(due_date, state=OrderState.NEW, customer="Jane Doe", items=()):
        c = Customer.objects.create(full_name=customer, phone_number="+1 555 0100")
        order = Order.objects.create(
            due_date=due_date, due_time=time(16), pickup_location=location, customer=c, state=state,
        )
        for product, qty in items:
            OrderItem.objects.create(order=order, product=product, quantity=qty)
        return order
    return _make
