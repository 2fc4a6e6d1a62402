from django.contrib import admin
from .models import DeliveryType, Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('product', 'product_name', 'quantity', 'unit_price', 'line_total')
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('order_id', 'email', 'customer', 'status', 'grand_total', 'created_at')
    search_fields = ('order_id', 'email', 'first_name', 'last_name', 'customer__email')
    list_filter = ('status', 'delivery_type', 'created_at')
    readonly_fields = ('order_id', 'created_at', 'updated_at', 'items_total', 'delivery_price', 'grand_total')
    inlines = [OrderItemInline]


@admin.register(OrderItem)
class OrderItemAdmin(admin.ModelAdmin):
    list_display = ('id', 'order', 'product_name', 'quantity', 'unit_price', 'line_total')
    search_fields = ('product_name', 'order__order_id')
    list_filter = ('order__created_at',)


@admin.register(DeliveryType)
class DeliveryTypeAdmin(admin.ModelAdmin):
    list_display = ('name', 'price', 'is_active')
    list_filter = ('is_active',)
    search_fields = ('name',)
