from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Optional

from orders.models import Product

Bucket = Optional[int]


@dataclass
class DeliveryStats:
    due_today: int = 0
    due_tomorrow: int = 0
    delivered_today: int = 0
    not_available_today: int = 0
    new_orders: int = 0


@dataclass
class DashboardData:
    """
    Everything the dashboard shows for one month. Missing buckets are None,
    never 0: "no deliveries recorded" renders differently from "zero".
    """
    delivery_stats: DeliveryStats
    deliveries_this_month: list[Bucket]
    deliveries_this_year: list[Bucket]
    # [years ago][month - 1]
    sales_per_month: list[list[Bucket]]
    product_deliveries: dict[Product, int] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "delivery_stats": asdict(self.delivery_stats),
            "deliveries_this_month": self.deliveries_this_month,
            "deliveries_this_year": self.deliveries_this_year,
            "sales_per_month": self.sales_per_month,
            "product_deliveries": [
                {"product": p.name, "quantity": qty} for p, qty in self.product_deliveries.items()
            ],
        }
