from __future__ import annotations

from datetime import date, timedelta

from django.contrib import messages
from django.http import Http404, HttpResponseBadRequest
from django.shortcuts import redirect, render
from django.urls import reverse
from django.utils import timezone

from accounts.decorators import require_roles
from accounts.models import Role
from audit.models import AuditAction
from audit.utils import audit_log
from common.exceptions import CONCURRENT_UPDATE_MESSAGE, OptimisticLockError
from common.paging import paginate
from locations import services as location_services
from locations.models import PickupLocation

from .forms import CommentForm, OrderForm, OrderItemFormSet, formset_items
from .models import Order, OrderState
from . import services

ALL_ROLES = Role.all_roles()


def _load_or_404(order_id: int) -> Order:
    try:
        return services.load(order_id)
    except Order.DoesNotExist:
        raise Http404("No such order")


def _explicit_filter_date(request):
    raw = request.GET.get("date")
    if not raw:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        messages.warning(request, f"Ignoring invalid date {raw!r}; showing upcoming orders.")
        return None


@require_roles(*ALL_ROLES, allow_superuser=True)
def storefront(request):
    filter_text = (request.GET.get("filter") or "").strip()
    filter_date = _explicit_filter_date(request)
    include_past = request.GET.get("include_past") == "1"
    page_number = request.GET.get("page") or 1

    if filter_date is None and not include_past and not filter_text:
        page = paginate(services.find_any_matching_starting_today(), page_number)
        count = page.paginator.count
    else:
        if filter_date is None and not include_past:
            # "after yesterday" = due today or later
            filter_date = timezone.localdate() - timedelta(days=1)
        page = services.find_any_matching_after_due_date(filter_text, filter_date, page_number)
        count = services.count_any_matching_after_due_date(filter_text, filter_date)

    return render(request, "orders/storefront.html", {
        "page": page,
        "filter": filter_text,
        "filter_date": filter_date,
        "include_past": include_past,
        "count": count,
    })


def _order_form_response(request, order_id, form, formset):
    if form.is_valid() and formset.is_valid():
        try:
            order = services.save_order(request.user, order_id, form.fill, items=formset_items(formset))
        except OptimisticLockError:
            form.add_error(None, CONCURRENT_UPDATE_MESSAGE)
        else:
            audit_log(request.user, AuditAction.ORDER_SAVED, target=order, payload={"state": order.state}, request=request)
            messages.success(request, f"Order #{order.id} saved.")
            return redirect(reverse("orders:order_detail", args=[order.id]))
    return render(request, "orders/order_form.html", {"form": form, "formset": formset, "order_id": order_id})


@require_roles(*ALL_ROLES, allow_superuser=True)
def order_create(request):
    if request.method == "POST":
        return _order_form_response(
            request, None, OrderForm(request.POST), OrderItemFormSet(request.POST, prefix="items"),
        )
    order = services.create_new_order(request.user)
    initial = {"due_date": order.due_date, "due_time": order.due_time, "state": order.state}
    try:
        initial["pickup_location"] = location_services.get_default().pk
    except PickupLocation.DoesNotExist:
        messages.warning(request, "No pickup locations configured yet.")
    return render(request, "orders/order_form.html", {
        "form": OrderForm(initial=initial),
        "formset": OrderItemFormSet(prefix="items"),
        "order_id": None,
    })


@require_roles(*ALL_ROLES, allow_superuser=True)
def order_edit(request, order_id: int):
    order = _load_or_404(order_id)
    if request.method == "POST":
        return _order_form_response(
            request, order.id, OrderForm(request.POST), OrderItemFormSet(request.POST, prefix="items"),
        )
    items = [{"product": i.product_id, "quantity": i.quantity, "comment": i.comment} for i in order.items.all()]
    return render(request, "orders/order_form.html", {
        "form": OrderForm(initial=OrderForm.initial_for(order)),
        "formset": OrderItemFormSet(prefix="items", initial=items),
        "order_id": order.id,
    })


@require_roles(*ALL_ROLES, allow_superuser=True)
def order_detail(request, order_id: int):
    order = _load_or_404(order_id)
    return render(request, "orders/order_detail.html", {
        "order": order,
        "items": order.items.select_related("product"),
        "history": order.history.select_related("created_by"),
        "comment_form": CommentForm(),
        "state_choices": OrderState.choices,
    })


@require_roles(*ALL_ROLES, allow_superuser=True)
def order_add_comment(request, order_id: int):
    if request.method != "POST":
        return HttpResponseBadRequest("POST required")
    order = _load_or_404(order_id)
    form = CommentForm(request.POST)
    if not form.is_valid():
        return HttpResponseBadRequest("Comment required")
    services.add_comment(request.user, order, form.cleaned_data["comment"])
    return redirect(reverse("orders:order_detail", args=[order.id]))


@require_roles(*ALL_ROLES, allow_superuser=True)
def order_change_state(request, order_id: int):
    if request.method != "POST":
        return HttpResponseBadRequest("POST required")
    new_state = request.POST.get("state")
    if new_state not in OrderState.values:
        return HttpResponseBadRequest("Invalid state")
    version = request.POST.get("version")

    def fill(user, order):
        order.state = new_state
        if version and version.isdigit():
            order.version = int(version)

    try:
        order = services.save_order(request.user, order_id, fill)
    except Order.DoesNotExist:
        return HttpResponseBadRequest("No such order")
    except OptimisticLockError:
        messages.error(request, CONCURRENT_UPDATE_MESSAGE)
        return redirect(reverse("orders:order_detail", args=[order_id]))
    audit_log(request.user, AuditAction.ORDER_STATE_CHANGED, target=order, payload={"state": new_state}, request=request)
    return redirect(reverse("orders:order_detail", args=[order.id]))
