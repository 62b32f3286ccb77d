from __future__ import annotations

from datetime import date

from django.db import models
from django.db.models import Count, Sum
from django.db.models.functions import ExtractDay, ExtractMonth, ExtractYear
from django.utils import timezone

from accounts.models import User
from common.models import VersionedModel
from locations.models import PickupLocation


class OrderState(models.TextChoices):
    NEW = "NEW", "New"
    CONFIRMED = "CONFIRMED", "Confirmed"
    READY = "READY", "Ready"
    DELIVERED = "DELIVERED", "Delivered"
    PROBLEM = "PROBLEM", "Problem"
    CANCELLED = "CANCELLED", "Cancelled"

    @classmethod
    def not_available(cls) -> frozenset:
        """States in which the goods are not yet ready for pickup."""
        return frozenset(cls.values) - {cls.DELIVERED, cls.READY, cls.CANCELLED}


class Product(VersionedModel):
    name = models.CharField(max_length=255, unique=True)
    price = models.PositiveIntegerField(default=0, help_text="Price in cents")

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.name


class Customer(models.Model):
    full_name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=20)
    details = models.CharField(max_length=255, blank=True)

    def __str__(self):
        return self.full_name


class OrderQuerySet(models.QuerySet):
    """
    Query interface the order and dashboard services are written against.
    Grouped queries return plain tuples in a stable order.
    """

    def due_on(self, day: date):
        return self.filter(due_date=day)

    def in_states(self, states):
        return self.filter(state__in=list(states))

    def customer_name_contains(self, text: str):
        return self.filter(customer__full_name__icontains=text)

    def due_after(self, day: date):
        return self.filter(due_date__gt=day)

    def count_per_day(self, state: str, year: int, month: int) -> list[tuple[int, int]]:
        rows = (self.filter(state=state, due_date__year=year, due_date__month=month)
                .annotate(day=ExtractDay("due_date"))
                .values("day")
                .annotate(n=Count("id"))
                .order_by("day"))
        return [(r["day"], r["n"]) for r in rows]

    def count_per_month(self, state: str, year: int) -> list[tuple[int, int]]:
        rows = (self.filter(state=state, due_date__year=year)
                .annotate(month=ExtractMonth("due_date"))
                .values("month")
                .annotate(n=Count("id"))
                .order_by("month"))
        return [(r["month"], r["n"]) for r in rows]

    def sum_per_month_last_three_years(self, state: str, year: int) -> list[tuple[int, int, int]]:
        """(year, month, orders) for ``year`` and the two years before it, newest year first."""
        rows = (self.filter(state=state, due_date__year__lte=year, due_date__year__gte=year - 2)
                .annotate(y=ExtractYear("due_date"), m=ExtractMonth("due_date"))
                .values("y", "m")
                .annotate(n=Count("id"))
                .order_by("-y", "m"))
        return [(r["y"], r["m"], r["n"]) for r in rows]

    def count_per_product(self, state: str, year: int, month: int) -> list[tuple[int, Product]]:
        """(summed quantity, product) ordered by product id."""
        rows = (OrderItem.objects
                .filter(order__in=self.filter(state=state, due_date__year=year, due_date__month=month))
                .values("product")
                .annotate(qty=Sum("quantity"))
                .order_by("product_id"))
        sums = [(r["product"], r["qty"]) for r in rows]
        products = Product.objects.in_bulk([pid for pid, _ in sums])
        return [(qty, products[pid]) for pid, qty in sums]


class Order(VersionedModel):
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name="created_orders")
    due_date = models.DateField(db_index=True)
    due_time = models.TimeField()
    pickup_location = models.ForeignKey(PickupLocation, on_delete=models.PROTECT, related_name="orders")
    customer = models.OneToOneField(Customer, on_delete=models.PROTECT, related_name="order")
    state = models.CharField(max_length=16, choices=OrderState.choices, default=OrderState.NEW, db_index=True)
    paid = models.BooleanField(default=False)

    objects = OrderQuerySet.as_manager()

    class Meta:
        indexes = [models.Index(fields=["state", "due_date"], name="orders_orde_state_8a1d3c_idx")]

    def __str__(self) -> str:
        return f"Order {self.id} - {self.due_date} {self.state}"

    @property
    def total_price(self) -> int:
        if self.pk is None:
            return 0
        return sum(item.total_price for item in self.items.select_related("product"))

    def add_history_item(self, created_by: User | None, message: str) -> HistoryItem:
        return HistoryItem.objects.create(
            order=self, created_by=created_by, order_state=self.state, message=message,
        )


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="order_items")
    quantity = models.PositiveIntegerField(default=1)
    comment = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.quantity} x {self.product}"

    @property
    def total_price(self) -> int:
        return self.quantity * self.product.price


class HistoryItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="history")
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    order_state = models.CharField(max_length=16, choices=OrderState.choices)
    message = models.CharField(max_length=255)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["timestamp", "id"]

    def __str__(self):
        return f"{self.timestamp:%Y-%m-%d %H:%M} {self.message}"
