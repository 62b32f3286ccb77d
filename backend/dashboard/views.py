from __future__ import annotations

from django.http import HttpResponseBadRequest, JsonResponse
from django.shortcuts import render
from django.utils import timezone

from accounts.decorators import require_roles
from accounts.models import Role

from .services import get_dashboard_data

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _month_year(request):
    today = timezone.localdate()
    month = int(request.GET.get("month") or today.month)
    year = int(request.GET.get("year") or today.year)
    return month, year


@require_roles(*Role.all_roles(), allow_superuser=True)
def dashboard(request):
    try:
        month, year = _month_year(request)
        data = get_dashboard_data(month, year)
    except ValueError:
        return HttpResponseBadRequest("Invalid month or year")
    years = [year - i for i in range(len(data.sales_per_month))]
    return render(request, "dashboard/dashboard.html", {
        "data": data,
        "month": month,
        "year": year,
        "month_names": MONTH_NAMES,
        "sales_rows": list(zip(years, data.sales_per_month)),
    })


@require_roles(*Role.all_roles(), allow_superuser=True)
def dashboard_data_json(request):
    try:
        month, year = _month_year(request)
        data = get_dashboard_data(month, year)
    except ValueError:
        return JsonResponse({"detail": "Invalid month or year"}, status=400)
    return JsonResponse({"month": month, "year": year, **data.as_dict()})
