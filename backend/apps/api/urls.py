from django.urls import path
from apps.checkout.views import CheckoutSessionView

urlpatterns = [
    path(
        "create-checkout-session",
        CheckoutSessionView.as_view(),
        name="api-create-checkout-session",
    ),
]
