from django.urls import path

from . import views

app_name = "locations"

urlpatterns = [
    path("pickup-locations/", views.locations_list, name="locations_list"),
    path("pickup-locations/new", views.location_create, name="location_create"),
    path("pickup-locations/<int:location_id>", views.location_edit, name="location_edit"),
    path("pickup-locations/<int:location_id>/delete", views.location_delete, name="location_delete"),
]
