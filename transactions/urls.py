from django.urls import path
from .views import (
    DeliveryTypeListView,
    CheckoutView,
    MyOrdersView,
    OrderDetailView,
)

urlpatterns = [
    # Delivery options
    path('delivery-types/', DeliveryTypeListView.as_view(), name='delivery-type-list'),

    # Checkout endpoint
    path('checkout/', CheckoutView.as_view(), name='checkout'),

    # Order endpoints
    path('orders/', MyOrdersView.as_view(), name='order-list'),
    path('orders/<uuid:order_id>/', OrderDetailView.as_view(), name='order-detail'),
]
