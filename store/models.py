from django.db import models
from django.utils.text import slugify


# ==========================================
# Category Model
# ==========================================
class Category(models.Model):
    """
    A product category (CPUs, graphics cards, monitors...).
    """
    name = models.CharField(max_length=255, unique=True)
    slug = models.SlugField(unique=True, blank=True)
    description = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Categories"
        ordering = ['name']

    def save(self, *args, **kwargs):
        if not self.slug:
            base_slug = slugify(self.name) or 'category'
            slug = base_slug
            num = 1
            while Category.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                slug = f"{base_slug}-{num}"
                num += 1
            self.slug = slug
        super().save(*args, **kwargs)

    @property
    def product_count(self):
        return self.products.count()

    def __str__(self):
        return self.name


# ==========================================
# Product Model
# ==========================================
class Product(models.Model):
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=280, unique=True, blank=True)
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    # Signed: checkout decrements without a floor, so this can go below zero.
    stock_qty = models.IntegerField(default=0)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    categories = models.ManyToManyField(Category, blank=True, related_name='products')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']

    def save(self, *args, **kwargs):
        if not self.slug:
            base_slug = slugify(self.name) or 'product'
            slug = base_slug
            num = 1
            while Product.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                slug = f"{base_slug}-{num}"
                num += 1
            self.slug = slug
        super().save(*args, **kwargs)

    @property
    def in_stock(self):
        return self.stock_qty > 0

    def __str__(self):
        return self.name


# ==========================================
# Product Spec Model
# ==========================================
class ProductSpec(models.Model):
    """
    One technical characteristic of a product, e.g. ``Socket = AM5`` or
    ``VRAM = 12 GB``.
    """
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='specs')
    key = models.CharField(max_length=100)
    value = models.CharField(max_length=255)
    unit = models.CharField(max_length=30, blank=True, null=True)

    class Meta:
        ordering = ['id']
        indexes = [
            models.Index(fields=['key', 'value'], name='product_spec_key_value_idx'),
        ]

    @property
    def display_value(self):
        return f"{self.value} {self.unit}" if self.unit else self.value

    def __str__(self):
        return f"{self.product.name}: {self.key} = {self.display_value}"
