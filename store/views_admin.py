"""
Admin panel views for the catalog: products, categories and product specs.
"""
import logging

from django.db.models import Q
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
from .models import Category, Product
from .serializers import (
    CategorySerializer,
    ProductDetailSerializer,
    ProductListSerializer,
    ProductSpecInputSerializer,
    ProductSpecSerializer,
    ProductWriteSerializer,
)
from .services import CatalogService

logger = logging.getLogger(__name__)


# =====================================================
# PRODUCTS
# =====================================================

class AdminProductListCreateView(BaseAPIView, generics.ListCreateAPIView):
    """
    List products or create a new one.

    Query Parameters:
    - search: Search by product name
    - category: Filter by category slug
    """
    permission_classes = [IsAuthenticated, IsAdmin]
    pagination_class = AdminPagination
    filter_backends = []

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return ProductWriteSerializer
        return ProductListSerializer

    def get_queryset(self):
        queryset = Product.objects.prefetch_related('categories')

        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(Q(name__icontains=search) | Q(slug__icontains=search))

        category = self.request.query_params.get('category')
        if category:
            queryset = queryset.filter(categories__slug=category).distinct()

        return queryset.order_by('id')

    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter('search', openapi.IN_QUERY, type=openapi.TYPE_STRING),
            openapi.Parameter('category', openapi.IN_QUERY, type=openapi.TYPE_STRING),
        ]
    )
    def get(self, request, *args, **kwargs):
        return self.list(request, *args, **kwargs)

    @swagger_auto_schema(request_body=ProductWriteSerializer, responses={201: ProductDetailSerializer})
    def post(self, request, *args, **kwargs):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = CatalogService.save_product(serializer.validated_data)
        log_admin_action(request.user, 'create_product', 'Product', product.id, details={'name': product.name})

        return Response(
            standardized_response(message="Product created", data=ProductDetailSerializer(product).data),
            status=status.HTTP_201_CREATED
        )


class AdminProductDetailView(BaseAPIView):
    """Retrieve, update or delete a product"""
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(responses={200: ProductDetailSerializer})
    def get(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        return Response(standardized_response(data=ProductDetailSerializer(product).data))

    @swagger_auto_schema(request_body=ProductWriteSerializer, responses={200: ProductDetailSerializer})
    def patch(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        serializer = ProductWriteSerializer(product, data=request.data, partial=request.method == 'PATCH')
        serializer.is_valid(raise_exception=True)

        product = CatalogService.save_product(serializer.validated_data, instance=product)
        log_admin_action(
            request.user, 'update_product', 'Product', product.id,
            details={'fields': sorted(serializer.validated_data.keys())}
        )

        return Response(
            standardized_response(message="Product updated", data=ProductDetailSerializer(product).data)
        )

    put = patch

    def delete(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        product_id, name = product.id, product.name
        product.delete()
        log_admin_action(request.user, 'delete_product', 'Product', product_id, details={'name': name})
        return Response(standardized_response(message="Product deleted"))


class AdminProductSpecsView(BaseAPIView):
    """List or replace the spec rows of a product"""
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(responses={200: ProductSpecSerializer(many=True)})
    def get(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        return Response(standardized_response(data=ProductSpecSerializer(product.specs.all(), many=True).data))

    @swagger_auto_schema(
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                'specs': openapi.Schema(
                    type=openapi.TYPE_ARRAY,
                    items=openapi.Schema(
                        type=openapi.TYPE_OBJECT,
                        properties={
                            'key': openapi.Schema(type=openapi.TYPE_STRING),
                            'value': openapi.Schema(type=openapi.TYPE_STRING),
                            'unit': openapi.Schema(type=openapi.TYPE_STRING),
                        }
                    )
                )
            }
        ),
        responses={200: ProductSpecSerializer(many=True)}
    )
    def put(self, request, pk):
        product = get_object_or_404(Product, pk=pk)
        serializer = ProductSpecInputSerializer(data=request.data.get('specs', []), many=True)
        serializer.is_valid(raise_exception=True)

        CatalogService.replace_specs(product, serializer.validated_data)
        log_admin_action(request.user, 'replace_specs', 'Product', product.id)

        return Response(
            standardized_response(
                message="Specs updated",
                data=ProductSpecSerializer(product.specs.all(), many=True).data
            )
        )


# =====================================================
# CATEGORIES
# =====================================================

class AdminCategoryListCreateView(BaseAPIView, generics.ListCreateAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = CategorySerializer
    queryset = Category.objects.all()
    filter_backends = []

    def list(self, request, *args, **kwargs):
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response(standardized_response(data=serializer.data))

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = serializer.save()
        log_admin_action(request.user, 'create_category', 'Category', category.id, details={'name': category.name})
        return Response(
            standardized_response(message="Category created", data=CategorySerializer(category).data),
            status=status.HTTP_201_CREATED
        )


class AdminCategoryDetailView(BaseAPIView, generics.RetrieveUpdateDestroyAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = CategorySerializer
    queryset = Category.objects.all()

    def retrieve(self, request, *args, **kwargs):
        return Response(standardized_response(data=self.get_serializer(self.get_object()).data))

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        category = self.get_object()
        serializer = self.get_serializer(category, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        category = serializer.save()
        log_admin_action(request.user, 'update_category', 'Category', category.id)
        return Response(standardized_response(message="Category updated", data=serializer.data))

    def destroy(self, request, *args, **kwargs):
        category = self.get_object()
        category_id, name = category.id, category.name
        category.delete()
        log_admin_action(request.user, 'delete_category', 'Category', category_id, details={'name': name})
        return Response(standardized_response(message="Category deleted"))
