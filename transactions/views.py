import logging

from django.shortcuts import get_object_or_404
from drf_yasg.utils import swagger_auto_schema
from rest_framework import generics, permissions, status
from rest_framework.response import Response

from authentication.core.base_view import BaseAPIView
from authentication.core.pagination import StandardPagination
from authentication.core.response import standardized_response
from store.cart import SessionCart
from .models import DeliveryType, Order
from .serializers import CheckoutSerializer, DeliveryTypeSerializer, OrderSerializer
from .services import OrderService

logger = logging.getLogger(__name__)

PREFILLED_FIELDS = ('first_name', 'last_name', 'email')


# ----------------------
# Delivery options
# ----------------------
class DeliveryTypeListView(BaseAPIView, generics.ListAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = DeliveryTypeSerializer
    queryset = DeliveryType.objects.filter(is_active=True).order_by('price', 'name')
    filter_backends = []

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response(standardized_response(data=serializer.data))


# ----------------------
# Checkout
# ----------------------
class CheckoutView(BaseAPIView):
    """
    Turn the session cart into an order. Guests may check out; signed-in
    users get their name and email prefilled when omitted.
    """
    permission_classes = [permissions.AllowAny]

    @swagger_auto_schema(request_body=CheckoutSerializer, responses={201: OrderSerializer})
    def post(self, request):
        payload = {field: request.data.get(field) for field in CheckoutSerializer().fields}
        user = request.user
        if user.is_authenticated:
            for field in PREFILLED_FIELDS:
                if not payload.get(field):
                    payload[field] = getattr(user, field)
        payload = {key: value for key, value in payload.items() if value is not None}

        serializer = CheckoutSerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        delivery_type_id = data.pop('delivery_type_id')

        cart = SessionCart(request.session)
        order = OrderService.place_order(
            cart.as_order_lines(),
            delivery_type_id,
            data,
            user=user,
        )
        cart.clear()

        return Response(
            standardized_response(
                message="Order placed successfully",
                data=OrderSerializer(order).data,
            ),
            status=status.HTTP_201_CREATED
        )


# ----------------------
# Customer orders
# ----------------------
class MyOrdersView(BaseAPIView, generics.ListAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = OrderSerializer
    pagination_class = StandardPagination
    filter_backends = []

    def get_queryset(self):
        return (
            Order.objects.filter(customer=self.request.user)
            .select_related('delivery_type')
            .prefetch_related('order_items__product')
            .order_by('-created_at', '-id')
        )


class OrderDetailView(BaseAPIView):
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(responses={200: OrderSerializer, 404: "Order not found"})
    def get(self, request, order_id):
        order = get_object_or_404(
            Order.objects.select_related('delivery_type').prefetch_related('order_items__product'),
            order_id=order_id,
            customer=request.user,
        )
        return Response(standardized_response(data=OrderSerializer(order).data))
