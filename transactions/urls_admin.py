from django.urls import path
from .views_admin import (
    AdminOrderListView,
    AdminOrderDetailView,
    AdminOrderStatusUpdateView,
    AdminOrderStatusListView,
    AdminDeliveryTypeListCreateView,
    AdminDeliveryTypeDetailView,
)

urlpatterns = [
    # =====================================================
    # ORDER MANAGEMENT ENDPOINTS
    # =====================================================
    path('orders/', AdminOrderListView.as_view(), name='order-list'),
    path('orders/statuses/', AdminOrderStatusListView.as_view(), name='order-status-list'),
    path('orders/<uuid:order_id>/', AdminOrderDetailView.as_view(), name='order-detail'),
    path('orders/<uuid:order_id>/status/', AdminOrderStatusUpdateView.as_view(), name='order-status'),

    # =====================================================
    # DELIVERY TYPE MANAGEMENT ENDPOINTS
    # =====================================================
    path('delivery-types/', AdminDeliveryTypeListCreateView.as_view(), name='delivery-type-list'),
    path('delivery-types/<int:pk>/', AdminDeliveryTypeDetailView.as_view(), name='delivery-type-detail'),
]
