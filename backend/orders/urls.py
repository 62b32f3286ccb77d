from django.urls import path

from . import views

app_name = "orders"

urlpatterns = [
    path("storefront/", views.storefront, name="storefront"),
    path("orders/new", views.order_create, name="order_create"),
    path("orders/<int:order_id>", views.order_detail, name="order_detail"),
    path("orders/<int:order_id>/edit", views.order_edit, name="order_edit"),
    path("orders/<int:order_id>/comment", views.order_add_comment, name="order_add_comment"),
    path("orders/<int:order_id>/state", views.order_change_state, name="order_change_state"),
]
