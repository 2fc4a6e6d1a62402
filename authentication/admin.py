from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import CustomUser, AdminAuditLog


class CustomUserAdmin(UserAdmin):
    model = CustomUser

    list_display = ('email', 'first_name', 'last_name', 'role', 'is_staff', 'is_active')
    list_filter = ('role', 'is_staff', 'is_active')
    search_fields = ('email', 'first_name', 'last_name')

    # These fields are displayed but NEVER editable (prevents admin crash)
    readonly_fields = ('last_login', 'created_at', 'updated_at')

    fieldsets = (
        (None, {'fields': ('email', 'password')}),

        ('Personal Info', {
            'fields': ('first_name', 'last_name')
        }),

        ('Permissions', {
            'fields': ('role', 'is_active', 'is_staff', 'is_superuser')
        }),

        ('Important Dates', {
            'fields': ('last_login', 'created_at', 'updated_at')
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'password1', 'password2', 'role', 'is_staff'),
        }),
    )

    ordering = ('email',)


@admin.register(AdminAuditLog)
class AdminAuditLogAdmin(admin.ModelAdmin):
    list_display = ('action', 'target_entity', 'target_id', 'admin', 'created_at')
    list_filter = ('action', 'target_entity')
    search_fields = ('target_id', 'admin__email')
    readonly_fields = ('admin', 'action', 'target_entity', 'target_id', 'reason', 'details', 'created_at')


admin.site.register(CustomUser, CustomUserAdmin)
