"""
URL configuration for shop API endpoints.
"""

from django.urls import path

from api.v1.shop import views

app_name = "shop"

urlpatterns = [
    path("catalog", views.CatalogView.as_view(), name="catalog"),
    path("orders", views.CreateOrderView.as_view(), name="create-order"),
    path("orders/search", views.FindOrderView.as_view(), name="find-order"),
    path(
        "orders/<str:order_id>/confirm-payment",
        views.ConfirmPaymentView.as_view(),
        name="confirm-payment",
    ),
    path(
        "orders/<str:order_id>/cancel",
        views.CancelOrderView.as_view(),
        name="cancel-order",
    ),
]
