from django.urls import path
from .auth_views import (
    AddressDetailView, AddressesView, LoginView, LogoutView, MeView, MyOrdersView, SignupView,
)

urlpatterns = [
    path("signup/", SignupView.as_view(), name="account_signup"),
    path("login/", LoginView.as_view(), name="account_login"),
    path("logout/", LogoutView.as_view(), name="account_logout"),
    path("me/", MeView.as_view(), name="account_me"),
    path("orders/", MyOrdersView.as_view(), name="account_orders"),
    path("addresses/", AddressesView.as_view(), name="account_addresses"),
    path("addresses/<int:address_id>/", AddressDetailView.as_view(), name="account_address_detail"),
]
