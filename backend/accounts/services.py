"""User administration services.

Rules carried by the bakery:
  - a locked user (the seeded admin) can be neither modified nor deleted;
  - nobody can delete their own account;
  - passwords need 6+ characters mixing digits, lowercase and uppercase letters.
"""

from __future__ import annotations

import logging
import re

from django.core.paginator import Page
from django.db import transaction
from django.db.models import Q

from common.exceptions import UserFriendlyDataException
from common.paging import paginate
from .models import Role, User

log = logging.getLogger(__name__)

PASSWORD_RE = re.compile(r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z]).{6,}$")
PASSWORD_HINT = "Need 6 or more chars, mixing digits, lowercase and uppercase letters."
MODIFY_LOCKED_USER_NOT_PERMITTED = "User has been locked and cannot be modified or deleted."
DELETING_SELF_NOT_PERMITTED = "You cannot delete your own account."


def _matching(filter_text: str | None):
    qs = User.objects.all()
    if filter_text:
        qs = qs.filter(
            Q(email__icontains=filter_text)
            | Q(first_name__icontains=filter_text)
            | Q(last_name__icontains=filter_text)
        )
    return qs.order_by("email")


def find_any_matching(filter_text: str | None = None, page=1, page_size: int | None = None) -> Page:
    return paginate(_matching(filter_text), page, page_size)


def count_any_matching(filter_text: str | None = None) -> int:
    return _matching(filter_text).count()


def create_new_user() -> User:
    return User(role=Role.BARISTA)


def is_valid_password(raw: str) -> bool:
    return bool(PASSWORD_RE.match(raw or ""))


def _throw_if_locked(user: User):
    if user.pk and User.objects.filter(pk=user.pk, locked=True).exists():
        raise UserFriendlyDataException(MODIFY_LOCKED_USER_NOT_PERMITTED)


@transaction.atomic
def save_user(current_user: User, user: User, raw_password: str | None = None) -> User:
    """
    Persist ``user``. A non-empty ``raw_password`` replaces the stored hash;
    an empty one keeps it, except for new users, who must get one.
    """
    _throw_if_locked(user)
    if raw_password:
        if not is_valid_password(raw_password):
            raise UserFriendlyDataException(PASSWORD_HINT)
        user.set_password(raw_password)
    elif user.pk is None:
        raise UserFriendlyDataException("A password is required for new users.")
    user.save()
    log.info("user %s saved by %s", user.pk, getattr(current_user, "pk", None))
    return user


@transaction.atomic
def delete_user(current_user: User, user: User) -> None:
    if current_user is not None and current_user.pk == user.pk:
        raise UserFriendlyDataException(DELETING_SELF_NOT_PERMITTED)
    _throw_if_locked(user)
    pk = user.pk
    user.delete()
    log.info("user %s deleted by %s", pk, getattr(current_user, "pk", None))
