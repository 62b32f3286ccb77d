from __future__ import annotations

import logging

from django.core.paginator import Page
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from common.exceptions import UserFriendlyDataException
from common.paging import paginate
from .models import PickupLocation

log = logging.getLogger(__name__)

LOCATION_IN_USE = "The pickup location is used in orders and cannot be deleted."


def _matching(filter_text: str | None):
    qs = PickupLocation.objects.all()
    if filter_text:
        qs = qs.filter(name__icontains=filter_text)
    return qs.order_by("name", "id")


def find_any_matching(filter_text: str | None = None, page=1, page_size: int | None = None) -> Page:
    return paginate(_matching(filter_text), page, page_size)


def count_any_matching(filter_text: str | None = None) -> int:
    return _matching(filter_text).count()


def get_default() -> PickupLocation:
    """First location ever created; raises PickupLocation.DoesNotExist when there is none."""
    loc = PickupLocation.objects.order_by("id").first()
    if loc is None:
        raise PickupLocation.DoesNotExist("No pickup locations configured.")
    return loc


def create_new_pickup_location() -> PickupLocation:
    return PickupLocation()


@transaction.atomic
def save(current_user, location: PickupLocation) -> PickupLocation:
    location.save()
    log.info("pickup location %s saved by %s", location.pk, getattr(current_user, "pk", None))
    return location


def delete(current_user, location: PickupLocation) -> None:
    pk = location.pk
    try:
        with transaction.atomic():
            location.delete()
    except (ProtectedError, IntegrityError) as e:
        raise UserFriendlyDataException(LOCATION_IN_USE) from e
    log.info("pickup location %s deleted by %s", pk, getattr(current_user, "pk", None))
