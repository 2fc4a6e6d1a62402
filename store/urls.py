from django.urls import path
from .views import (
    ProductListView,
    ProductDetailView,
    CategoryListView,
    CartView,
    CartAddView,
    CartLineView,
    CartClearView,
)

urlpatterns = [
    # Catalog
    path('products/', ProductListView.as_view(), name='product-list'),
    path('products/<slug:slug>/', ProductDetailView.as_view(), name='product-detail'),
    path('categories/', CategoryListView.as_view(), name='category-list'),

    # Cart
    path('cart/', CartView.as_view(), name='cart'),
    path('cart/add/', CartAddView.as_view(), name='cart-add'),
    path('cart/<int:product_id>/increment/', CartLineView.as_view(line_action='increment'), name='cart-increment'),
    path('cart/<int:product_id>/decrement/', CartLineView.as_view(line_action='decrement'), name='cart-decrement'),
    path('cart/<int:product_id>/remove/', CartLineView.as_view(line_action='remove'), name='cart-remove'),
    path('cart/clear/', CartClearView.as_view(), name='cart-clear'),
]
