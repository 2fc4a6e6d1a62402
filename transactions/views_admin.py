"""
Admin panel views for orders and delivery options.
"""
import logging
import uuid

from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.core.base_view import BaseAPIView
from authentication.core.pagination import AdminPagination
from authentication.core.permissions import IsAdmin
from authentication.core.response import standardized_response
from authentication.views_admin import log_admin_action
from .models import DeliveryType, Order
from .serializers import (
    DeliveryTypeSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
    OrderSummarySerializer,
)
from .services import OrderService

logger = logging.getLogger(__name__)


def _order_ids(search):
    try:
        return [uuid.UUID(search.strip())]
    except ValueError:
        return []


# =====================================================
# ORDER MANAGEMENT VIEWS
# =====================================================

class AdminOrderListView(BaseAPIView, generics.ListAPIView):
    """
    List all orders, newest first.

    Query Parameters:
    - status: Filter by order status
    - search: Search by email, customer name or order id
    """
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = OrderSummarySerializer
    pagination_class = AdminPagination
    filter_backends = []

    def get_queryset(self):
        queryset = Order.objects.select_related('customer').annotate(item_count=Count('order_items'))

        status_param = self.request.query_params.get('status')
        if status_param:
            queryset = queryset.filter(status=status_param.upper())

        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(
                Q(email__icontains=search) |
                Q(first_name__icontains=search) |
                Q(last_name__icontains=search) |
                Q(customer__email__icontains=search) |
                Q(order_id__in=_order_ids(search))
            )

        return queryset.order_by('-created_at', '-id')

    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter('status', openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=Order.Status.values),
            openapi.Parameter('search', openapi.IN_QUERY, type=openapi.TYPE_STRING),
        ]
    )
    def get(self, request, *args, **kwargs):
        return self.list(request, *args, **kwargs)


class AdminOrderDetailView(BaseAPIView):
    """Order with its line items and delivery option"""
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(responses={200: OrderSerializer})
    def get(self, request, order_id):
        order = get_object_or_404(
            Order.objects.select_related('delivery_type', 'customer').prefetch_related('order_items__product'),
            order_id=order_id
        )
        data = OrderSerializer(order).data
        data['customer_email'] = order.customer.email if order.customer else None
        return Response(standardized_response(data=data))


class AdminOrderStatusUpdateView(BaseAPIView):
    """Move an order to any of the enumerated statuses"""
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(request_body=OrderStatusUpdateSerializer, responses={200: OrderSerializer})
    def patch(self, request, order_id):
        order = get_object_or_404(Order, order_id=order_id)
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        new_status = serializer.validated_data['status']
        previous = OrderService.update_status(order, new_status)
        log_admin_action(
            request.user, 'update_order_status', 'Order', order.order_id,
            details={'from': previous, 'to': new_status}
        )

        return Response(
            standardized_response(
                message=f"Order status updated to {order.get_status_display()}",
                data=OrderSerializer(order).data
            )
        )

    post = patch


class AdminOrderStatusListView(BaseAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    def get(self, request):
        statuses = [{'value': value, 'label': label} for value, label in Order.Status.choices]
        return Response(standardized_response(data=statuses))


# =====================================================
# DELIVERY TYPE MANAGEMENT VIEWS
# =====================================================

class AdminDeliveryTypeListCreateView(BaseAPIView, generics.ListCreateAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = DeliveryTypeSerializer
    queryset = DeliveryType.objects.all()
    filter_backends = []

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response(standardized_response(data=serializer.data))

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        delivery_type = serializer.save()
        log_admin_action(request.user, 'create_delivery_type', 'DeliveryType', delivery_type.id)
        return Response(
            standardized_response(message="Delivery type created", data=serializer.data),
            status=status.HTTP_201_CREATED
        )


class AdminDeliveryTypeDetailView(BaseAPIView, generics.RetrieveUpdateDestroyAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = DeliveryTypeSerializer
    queryset = DeliveryType.objects.all()

    def retrieve(self, request, *args, **kwargs):
        return Response(standardized_response(data=self.get_serializer(self.get_object()).data))

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        delivery_type = self.get_object()
        serializer = self.get_serializer(delivery_type, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        log_admin_action(request.user, 'update_delivery_type', 'DeliveryType', delivery_type.id)
        return Response(standardized_response(message="Delivery type updated", data=serializer.data))

    def destroy(self, request, *args, **kwargs):
        delivery_type = self.get_object()
        delivery_type_id = delivery_type.id
        OrderService.delete_delivery_type(delivery_type)
        log_admin_action(request.user, 'delete_delivery_type', 'DeliveryType', delivery_type_id)
        return Response(standardized_response(message="Delivery type deleted"))
