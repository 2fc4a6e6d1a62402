from django.urls import path
from .views_admin import (
    AdminProductListCreateView,
    AdminProductDetailView,
    AdminProductSpecsView,
    AdminCategoryListCreateView,
    AdminCategoryDetailView,
)

urlpatterns = [
    # =====================================================
    # PRODUCT MANAGEMENT ENDPOINTS
    # =====================================================
    path('products/', AdminProductListCreateView.as_view(), name='product-list'),
    path('products/<int:pk>/', AdminProductDetailView.as_view(), name='product-detail'),
    path('products/<int:pk>/specs/', AdminProductSpecsView.as_view(), name='product-specs'),

    # =====================================================
    # CATEGORY MANAGEMENT ENDPOINTS
    # =====================================================
    path('categories/', AdminCategoryListCreateView.as_view(), name='category-list'),
    path('categories/<int:pk>/', AdminCategoryDetailView.as_view(), name='category-detail'),
]
