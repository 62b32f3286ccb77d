from __future__ import annotations

from django.contrib import messages
from django.http import HttpResponseBadRequest
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse

from accounts.decorators import require_roles
from accounts.models import Role
from audit.models import AuditAction
from audit.utils import audit_log
from common.exceptions import CONCURRENT_UPDATE_MESSAGE, OptimisticLockError, UserFriendlyDataException

from .forms import PickupLocationForm
from .models import PickupLocation
from . import services


@require_roles(Role.ADMIN, allow_superuser=True)
def locations_list(request):
    filter_text = (request.GET.get("filter") or "").strip()
    page = services.find_any_matching(filter_text, request.GET.get("page") or 1)
    return render(request, "locations/locations_list.html", {
        "page": page,
        "filter": filter_text,
        "count": services.count_any_matching(filter_text),
    })


def _save(request, form):
    if form.is_valid():
        location = form.save(commit=False)
        try:
            services.save(request.user, location)
        except OptimisticLockError:
            form.add_error(None, CONCURRENT_UPDATE_MESSAGE)
        else:
            audit_log(request.user, AuditAction.PICKUP_LOCATION_SAVED, target=location, request=request)
            messages.success(request, f"Pickup location {location.name} saved.")
            return redirect(reverse("locations:locations_list"))
    return render(request, "locations/location_form.html", {"form": form})


@require_roles(Role.ADMIN, allow_superuser=True)
def location_create(request):
    location = services.create_new_pickup_location()
    if request.method == "POST":
        return _save(request, PickupLocationForm(request.POST, instance=location))
    return render(request, "locations/location_form.html", {"form": PickupLocationForm(instance=location)})


@require_roles(Role.ADMIN, allow_superuser=True)
def location_edit(request, location_id: int):
    location = get_object_or_404(PickupLocation, pk=location_id)
    if request.method == "POST":
        return _save(request, PickupLocationForm(request.POST, instance=location))
    return render(request, "locations/location_form.html", {"form": PickupLocationForm(instance=location)})


@require_roles(Role.ADMIN, allow_superuser=True)
def location_delete(request, location_id: int):
    if request.method != "POST":
        return HttpResponseBadRequest("POST required")
    location = get_object_or_404(PickupLocation, pk=location_id)
    name = location.name
    try:
        services.delete(request.user, location)
    except UserFriendlyDataException as e:
        messages.error(request, str(e))
    else:
        audit_log(request.user, AuditAction.PICKUP_LOCATION_DELETED, payload={"location_id": location_id, "name": name}, request=request)
        messages.success(request, "Pickup location deleted.")
    return redirect(reverse("locations:locations_list"))
