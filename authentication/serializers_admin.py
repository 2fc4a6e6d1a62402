"""
Admin-panel serializers for user management and the audit trail.
"""

from rest_framework import serializers
from django.contrib.auth import get_user_model
from authentication.models import AdminAuditLog

CustomUser = get_user_model()


# =====================================================
# USER MANAGEMENT SERIALIZERS
# =====================================================

class AdminDashboardUserListSerializer(serializers.ModelSerializer):
    """Lightweight user info for admin list views"""
    full_name = serializers.CharField(read_only=True)
    is_admin = serializers.BooleanField(read_only=True)

    class Meta:
        model = CustomUser
        fields = ['uuid', 'email', 'first_name', 'last_name', 'full_name', 'role', 'is_admin', 'is_active', 'created_at']
        read_only_fields = fields


class AdminDashboardUserDetailSerializer(serializers.ModelSerializer):
    """Full user details for admin inspection"""
    full_name = serializers.CharField(read_only=True)
    is_admin = serializers.BooleanField(read_only=True)
    total_orders = serializers.SerializerMethodField()
    contact_messages = serializers.SerializerMethodField()

    class Meta:
        model = CustomUser
        fields = [
            'uuid', 'email', 'first_name', 'last_name', 'full_name', 'role', 'is_admin',
            'is_active', 'last_login', 'created_at', 'updated_at', 'total_orders', 'contact_messages',
        ]
        read_only_fields = fields

    def get_total_orders(self, obj):
        return obj.orders.count()

    def get_contact_messages(self, obj):
        return obj.contact_messages.count()


class AdminDashboardUserUpdateSerializer(serializers.Serializer):
    """
    Admin edit of a user account.

    ``password`` is optional; when present it must match ``confirm_password``.
    """
    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False)
    email = serializers.EmailField(required=False)
    is_admin = serializers.BooleanField(required=False)
    is_active = serializers.BooleanField(required=False)
    password = serializers.CharField(write_only=True, required=False, allow_blank=True, min_length=8)
    confirm_password = serializers.CharField(write_only=True, required=False, allow_blank=True)

    def validate_email(self, value):
        value = value.strip().lower()
        queryset = CustomUser.objects.filter(email__iexact=value)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError("A user with this email already exists")
        return value

    def validate(self, data):
        password = data.get('password')
        if password:
            if password != data.get('confirm_password'):
                raise serializers.ValidationError({"confirm_password": "Passwords do not match."})
        else:
            data.pop('password', None)
        data.pop('confirm_password', None)
        return data


# =====================================================
# AUDIT LOG SERIALIZERS
# =====================================================

class AdminDashboardAuditLogSerializer(serializers.ModelSerializer):
    admin_email = serializers.CharField(source='admin.email', read_only=True, default=None)

    class Meta:
        model = AdminAuditLog
        fields = ['id', 'admin_email', 'action', 'target_entity', 'target_id', 'reason', 'details', 'created_at']
        read_only_fields = fields
