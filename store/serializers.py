from rest_framework import serializers
from .models import Category, Product, ProductSpec


# ---------------------------
# Category Serializer
# ---------------------------
class CategorySerializer(serializers.ModelSerializer):
    product_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'description', 'product_count']
        read_only_fields = ['id', 'product_count']
        extra_kwargs = {'slug': {'required': False}}


# ---------------------------
# Product Spec Serializer
# ---------------------------
class ProductSpecSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductSpec
        fields = ['id', 'key', 'value', 'unit', 'display_value']
        read_only_fields = ['id', 'display_value']


class ProductSpecInputSerializer(serializers.Serializer):
    """Incoming spec row; blank rows are accepted and dropped on save"""
    key = serializers.CharField(max_length=100, allow_blank=True, required=False, default='')
    value = serializers.CharField(max_length=255, allow_blank=True, required=False, default='')
    unit = serializers.CharField(max_length=30, allow_blank=True, allow_null=True, required=False, default=None)


# ---------------------------
# Product Serializers
# ---------------------------
class ProductListSerializer(serializers.ModelSerializer):
    in_stock = serializers.BooleanField(read_only=True)
    categories = serializers.SlugRelatedField(many=True, read_only=True, slug_field='name')

    class Meta:
        model = Product
        fields = ['id', 'name', 'slug', 'price', 'stock_qty', 'in_stock', 'image_url', 'categories']
        ref_name = "StoreProductListSerializer"


class ProductDetailSerializer(serializers.ModelSerializer):
    in_stock = serializers.BooleanField(read_only=True)
    categories = CategorySerializer(many=True, read_only=True)
    specs = ProductSpecSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'price', 'stock_qty', 'in_stock',
            'image_url', 'categories', 'specs', 'created_at', 'updated_at'
        ]
        ref_name = "StoreProductDetailSerializer"


class ProductWriteSerializer(serializers.ModelSerializer):
    """
    Admin create/update of a product.

    ``category_ids`` replaces the product's categories and ``specs`` replaces
    all of its spec rows; either is left untouched when omitted.
    """
    category_ids = serializers.PrimaryKeyRelatedField(
        many=True, queryset=Category.objects.all(), required=False, write_only=True
    )
    specs = ProductSpecInputSerializer(many=True, required=False, write_only=True)

    class Meta:
        model = Product
        fields = ['id', 'name', 'slug', 'description', 'price', 'stock_qty', 'image_url', 'category_ids', 'specs']
        read_only_fields = ['id', 'slug']

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative.")
        return value


# ---------------------------
# Cart Serializers
# ---------------------------
class CartAddSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)


class CartLineSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField()
    image_url = serializers.CharField(allow_null=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2)


class CartSerializer(serializers.Serializer):
    items = CartLineSerializer(many=True)
    items_total = serializers.DecimalField(max_digits=12, decimal_places=2)
    item_count = serializers.IntegerField()
