from django.conf import settings
from django.contrib import admin
from django.http import JsonResponse
from django.urls import path, include
from django.views.generic import RedirectView

def health(_):
    return JsonResponse({"ok": True})

urlpatterns = [
    path("health/", health),
    path(f"{settings.ADMIN_URL}/", admin.site.urls),
    path("", RedirectView.as_view(pattern_name="orders:storefront", permanent=False)),
    path("", include("accounts.urls")),
    path("", include("orders.urls")),
    path("", include("locations.urls")),
    path("", include("dashboard.urls")),
    path("", include("ops.urls")),
]
