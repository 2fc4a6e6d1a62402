import logging

from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import generics, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from authentication.core.base_view import BaseAPIView
from authentication.core.pagination import StandardPagination
from authentication.core.response import standardized_response
from .cart import SessionCart
from .filters import ProductFilter, parse_spec_filters, spec_filter_groups
from .models import Category, Product
from .serializers import (
    CartAddSerializer,
    CartSerializer,
    CategorySerializer,
    ProductDetailSerializer,
    ProductListSerializer,
)

logger = logging.getLogger(__name__)


# ---------------------------
# Products List & Filtering
# ---------------------------
class ProductListView(BaseAPIView, generics.ListAPIView):
    permission_classes = [AllowAny]
    queryset = Product.objects.prefetch_related('categories')
    serializer_class = ProductListSerializer
    pagination_class = StandardPagination
    filter_backends = [DjangoFilterBackend]
    filterset_class = ProductFilter

    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter('category', openapi.IN_QUERY, description='Category slug', type=openapi.TYPE_STRING),
            openapi.Parameter(
                'spec', openapi.IN_QUERY, description='Spec filter as key:value, repeatable',
                type=openapi.TYPE_ARRAY, items=openapi.Items(type=openapi.TYPE_STRING),
                collection_format='multi'
            ),
            openapi.Parameter('search', openapi.IN_QUERY, description='Search by name or description', type=openapi.TYPE_STRING),
            openapi.Parameter('min_price', openapi.IN_QUERY, type=openapi.TYPE_NUMBER),
            openapi.Parameter('max_price', openapi.IN_QUERY, type=openapi.TYPE_NUMBER),
            openapi.Parameter('ordering', openapi.IN_QUERY, description='price, -price, name, -name', type=openapi.TYPE_STRING),
        ],
        responses={200: ProductListSerializer(many=True)},
        operation_description="Retrieve a page of products. Supports category, spec, price and text filtering."
    )
    def get(self, request, *args, **kwargs):
        return self.list(request, *args, **kwargs)

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())

        category_slug = request.query_params.get('category')
        scope = Product.objects.all()
        if category_slug:
            scope = scope.filter(categories__slug=category_slug)

        extra = {
            'spec_filters': spec_filter_groups(scope),
            'selected_filters': parse_spec_filters(request.query_params.getlist('spec')),
            'category': category_slug,
        }

        page = self.paginate_queryset(queryset)
        serializer = self.get_serializer(page, many=True)
        return self.paginator.get_paginated_response(serializer.data, **extra)


class ProductDetailView(BaseAPIView):
    permission_classes = [AllowAny]

    @swagger_auto_schema(responses={200: ProductDetailSerializer, 404: "Product not found"})
    def get(self, request, slug):
        try:
            product = Product.objects.prefetch_related('categories', 'specs').get(slug=slug)
        except Product.DoesNotExist:
            return Response(
                standardized_response(success=False, error="Product not found"),
                status=status.HTTP_404_NOT_FOUND
            )

        serializer = ProductDetailSerializer(product)
        return Response(standardized_response(data=serializer.data))


class CategoryListView(BaseAPIView, generics.ListAPIView):
    permission_classes = [AllowAny]
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    filter_backends = []

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response(standardized_response(data=serializer.data))


# ---------------------------
# Session Cart
# ---------------------------
class CartView(BaseAPIView):
    permission_classes = [AllowAny]

    @swagger_auto_schema(responses={200: CartSerializer})
    def get(self, request):
        cart = SessionCart(request.session)
        return Response(standardized_response(data=cart.to_dict()))


class CartAddView(BaseAPIView):
    permission_classes = [AllowAny]

    @swagger_auto_schema(request_body=CartAddSerializer, responses={200: CartSerializer, 404: "Product not found"})
    def post(self, request):
        serializer = CartAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_object_or_404(Product, pk=serializer.validated_data['product_id'])
        cart = SessionCart(request.session)
        cart.add(product)

        return Response(
            standardized_response(message=f"{product.name} added to cart", data=cart.to_dict()),
            status=status.HTTP_200_OK
        )


class CartLineView(BaseAPIView):
    """Increment, decrement or remove one cart line"""
    permission_classes = [AllowAny]
    line_action = None

    @swagger_auto_schema(responses={200: CartSerializer, 404: "Item not in cart"})
    def post(self, request, product_id):
        cart = SessionCart(request.session)

        if self.line_action == 'increment':
            found = cart.increment(product_id)
        elif self.line_action == 'decrement':
            found = cart.decrement(product_id)
        else:
            found = cart.remove(product_id)

        if not found:
            return Response(
                standardized_response(success=False, error="Item not in cart"),
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(standardized_response(data=cart.to_dict()))


class CartClearView(BaseAPIView):
    permission_classes = [AllowAny]

    @swagger_auto_schema(responses={200: CartSerializer})
    def post(self, request):
        cart = SessionCart(request.session)
        cart.clear()
        return Response(standardized_response(message="Cart cleared", data=cart.to_dict()))
