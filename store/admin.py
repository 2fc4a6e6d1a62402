from django.contrib import admin
from .models import Category, Product, ProductSpec


class ProductSpecInline(admin.TabularInline):
    model = ProductSpec
    extra = 1


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'price', 'stock_qty', 'in_stock', 'created_at')
    list_filter = ('categories', 'created_at')
    search_fields = ('name', 'description')
    readonly_fields = ('slug', 'created_at', 'updated_at')
    filter_horizontal = ('categories',)
    inlines = [ProductSpecInline]
    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'slug', 'categories')
        }),
        ('Details', {
            'fields': ('description', 'price', 'stock_qty', 'image_url')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'created_at')
    search_fields = ('name',)
    prepopulated_fields = {'slug': ('name',)}
