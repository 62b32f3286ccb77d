from django.db import models
from django.contrib.auth.models import AbstractUser
from .managers import UserManager

class Role(models.TextChoices):
    BARISTA = "barista", "Barista"
    BAKER = "baker", "Baker"
    ADMIN = "admin", "Admin"

    @classmethod
    def all_roles(cls):
        return [cls.BARISTA, cls.BAKER, cls.ADMIN]

class User(AbstractUser):
    """
    Email-first auth; username removed. Every staff member has exactly one bakery role.
    A locked user can be neither modified nor deleted through the application.
    """
    username = None
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=16, choices=Role.choices, default=Role.BARISTA)
    locked = models.BooleanField(default=False)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    def __str__(self):
        return self.email

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()
