from django.urls import path
from .views import register_view, me_view

app_name = "accounts"

urlpatterns = [
    # Authentication
    path("register/", register_view, name="register"),

    # User profile
    path("me/", me_view, name="me"),
]
