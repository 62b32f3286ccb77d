from __future__ import annotations

from django.contrib import messages
from django.http import HttpResponseBadRequest
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse

from audit.models import AuditAction
from audit.utils import audit_log
from common.exceptions import UserFriendlyDataException

from .decorators import require_roles
from .forms import UserForm
from .models import Role, User
from . import services


@require_roles(Role.ADMIN, allow_superuser=True)
def users_list(request):
    filter_text = (request.GET.get("filter") or "").strip()
    page = services.find_any_matching(filter_text, request.GET.get("page") or 1)
    return render(request, "accounts/users_list.html", {
        "page": page,
        "filter": filter_text,
        "count": services.count_any_matching(filter_text),
    })


def _save_user_form(request, form, template):
    if form.is_valid():
        user = form.save(commit=False)
        try:
            services.save_user(request.user, user, form.cleaned_data.get("password"))
        except UserFriendlyDataException as e:
            form.add_error(None, str(e))
        else:
            audit_log(request.user, AuditAction.USER_SAVED, target=user, request=request)
            messages.success(request, f"User {user.email} saved.")
            return redirect(reverse("accounts:users_list"))
    return render(request, template, {"form": form})


@require_roles(Role.ADMIN, allow_superuser=True)
def user_create(request):
    if request.method == "POST":
        form = UserForm(request.POST, instance=services.create_new_user())
        return _save_user_form(request, form, "accounts/user_form.html")
    return render(request, "accounts/user_form.html", {"form": UserForm(instance=services.create_new_user())})


@require_roles(Role.ADMIN, allow_superuser=True)
def user_edit(request, user_id: int):
    user = get_object_or_404(User, pk=user_id)
    if request.method == "POST":
        form = UserForm(request.POST, instance=user)
        return _save_user_form(request, form, "accounts/user_form.html")
    return render(request, "accounts/user_form.html", {"form": UserForm(instance=user), "edited": user})


@require_roles(Role.ADMIN, allow_superuser=True)
def user_delete(request, user_id: int):
    if request.method != "POST":
        return HttpResponseBadRequest("POST required")
    user = get_object_or_404(User, pk=user_id)
    try:
        services.delete_user(request.user, user)
    except UserFriendlyDataException as e:
        messages.error(request, str(e))
    else:
        audit_log(request.user, AuditAction.USER_DELETED, payload={"user_id": user_id, "email": user.email}, request=request)
        messages.success(request, "User deleted.")
    return redirect(reverse("accounts:users_list"))
