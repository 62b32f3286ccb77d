import random
from datetime import timedelta, time

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone
from django.utils.crypto import get_random_string

from accounts.models import Role, User
from locations.models import PickupLocation
from orders.models import Customer, HistoryItem, Order, OrderItem, OrderState, Product

PICKUP_LOCATIONS = ["Store", "Bakery"]
PRODUCTS = [
    ("Strawberry Bun", 395), ("Vanilla Cracker", 250), ("Blueberry Cheese Cake", 1295),
    ("Raspberry Pie", 995), ("Chocolate Muffin", 325), ("Cinnamon Roll", 275),
    ("Croissant", 220), ("Apple Tart", 850),
]
FIRST_NAMES = ["Ori", "Amanda", "Octavia", "Laurel", "Lael", "Delilah", "Jason", "Skyler", "Arsenio", "Haley"]
LAST_NAMES = ["Holloway", "Rivera", "Lowe", "Barlow", "Carver", "Pace", "Morse", "Mcknight", "Gentry", "Dodson"]
DUE_TIMES = [time(8), time(10), time(12), time(14), time(16), time(18)]


class Command(BaseCommand):
    help = "Create the bakery staff, pickup locations and products; optionally random demo orders."

    def add_arguments(self, parser):
        parser.add_argument("--admin-email", default="admin@bakery.local")
        parser.add_argument("--admin-password", default=None)
        parser.add_argument("--orders", type=int, default=0, help="number of random demo orders")
        parser.add_argument("--seed", type=int, default=None)

    def _user(self, email, password, role, **extra):
        u, created = User.objects.get_or_create(email=email, defaults={"role": role, **extra})
        if created:
            u.set_password(password)
            u.save()
            self.stdout.write(self.style.SUCCESS(f"Created {role} {email} / {password}"))
        else:
            self.stdout.write(self.style.WARNING(f"User {email} already exists"))
        return u

    @transaction.atomic
    def handle(self, *args, **opts):
        rnd = random.Random(opts["seed"])
        password = opts["admin_password"] or get_random_string(12)

        # the seeded admin is locked: nobody can edit or delete it from the app
        admin = self._user(opts["admin_email"], password, Role.ADMIN,
                           first_name="Göran", last_name="Rich", locked=True, is_staff=True, is_superuser=True)
        self._user("baker@bakery.local", get_random_string(12), Role.BAKER, first_name="Heidi", last_name="Carter")
        self._user("barista@bakery.local", get_random_string(12), Role.BARISTA, first_name="Malin", last_name="Castro")

        locations = [PickupLocation.objects.get_or_create(name=n)[0] for n in PICKUP_LOCATIONS]
        products = [Product.objects.get_or_create(name=n, defaults={"price": p})[0] for n, p in PRODUCTS]
        self.stdout.write(self.style.SUCCESS(f"{len(locations)} pickup locations, {len(products)} products ready."))

        n = opts["orders"]
        if n:
            self._demo_orders(rnd, n, admin, locations, products)
            self.stdout.write(self.style.SUCCESS(f"Created {n} demo orders."))

        self.stdout.write(self.style.SUCCESS("Bakery bootstrap complete."))

    def _demo_orders(self, rnd, n, user, locations, products):
        today = timezone.localdate()
        for _ in range(n):
            due = today - timedelta(days=rnd.randint(-14, 3 * 365))
            if due > today:
                state = rnd.choice([OrderState.NEW, OrderState.CONFIRMED])
            elif due == today:
                state = rnd.choice(OrderState.values)
            else:
                state = rnd.choice([OrderState.DELIVERED] * 8 + [OrderState.CANCELLED])
            customer = Customer.objects.create(
                full_name=f"{rnd.choice(FIRST_NAMES)} {rnd.choice(LAST_NAMES)}",
                phone_number=f"+1-555-{rnd.randint(1000000, 9999999)}",
            )
            order = Order.objects.create(
                created_by=user, due_date=due, due_time=rnd.choice(DUE_TIMES),
                pickup_location=rnd.choice(locations), customer=customer, state=state,
                paid=state == OrderState.DELIVERED,
            )
            OrderItem.objects.bulk_create([
                OrderItem(order=order, product=p, quantity=rnd.randint(1, 10))
                for p in rnd.sample(products, rnd.randint(1, 3))
            ])
            HistoryItem.objects.create(order=order, created_by=user, order_state=OrderState.NEW, message="Order placed")
