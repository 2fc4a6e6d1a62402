from rest_framework import serializers
from .models import DeliveryType, Order, OrderItem


class DeliveryTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = DeliveryType
        fields = ['id', 'name', 'description', 'price', 'is_active']
        read_only_fields = ['id']

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return value


class OrderItemSerializer(serializers.ModelSerializer):
    product_slug = serializers.CharField(source='product.slug', read_only=True, default=None)

    class Meta:
        model = OrderItem
        fields = ['id', 'product', 'product_slug', 'product_name', 'quantity', 'unit_price', 'line_total']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Order as shown to its owner and to administrators"""
    items = OrderItemSerializer(source='order_items', many=True, read_only=True)
    delivery_type_name = serializers.CharField(source='delivery_type.name', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Order
        fields = [
            'order_id', 'created_at', 'status', 'status_display',
            'first_name', 'last_name', 'address_line', 'phone', 'email',
            'delivery_type', 'delivery_type_name',
            'items_total', 'delivery_price', 'grand_total', 'items',
        ]
        read_only_fields = fields


class OrderSummarySerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(read_only=True)
    customer_email = serializers.EmailField(source='customer.email', read_only=True, default=None)
    item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            'order_id', 'created_at', 'status', 'customer_name', 'email', 'customer_email',
            'grand_total', 'item_count',
        ]
        read_only_fields = fields


class CheckoutSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    address_line = serializers.CharField(max_length=255)
    phone = serializers.RegexField(r'^\+?[0-9 ()-]{6,30}$', max_length=30)
    email = serializers.EmailField()
    delivery_type_id = serializers.IntegerField(min_value=1)


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.Status.choices)
