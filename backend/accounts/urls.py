from django.contrib.auth import views as auth_views
from django.urls import path

from . import views

app_name = "accounts"

urlpatterns = [
    path("login/", auth_views.LoginView.as_view(template_name="accounts/login.html"), name="login"),
    path("logout/", auth_views.LogoutView.as_view(), name="logout"),

    path("users/", views.users_list, name="users_list"),
    path("users/new", views.user_create, name="user_create"),
    path("users/<int:user_id>", views.user_edit, name="user_edit"),
    path("users/<int:user_id>/delete", views.user_delete, name="user_delete"),
]
