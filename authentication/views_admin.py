"""
Admin Dashboard API Views

User management and audit trail for the back-office panel.
All endpoints require the ADMIN role.
All admin mutations are logged for audit trail.
"""
import logging

from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from authentication.core.base_view import BaseAPIView
from authentication.core.exceptions import LastAdministratorException, UserHasOrdersException
from authentication.core.pagination import AdminPagination
from authentication.core.permissions import IsAdmin
from authentication.core.response import standardized_response
from authentication.models import AdminAuditLog
from authentication.serializers_admin import (
    AdminDashboardUserListSerializer,
    AdminDashboardUserDetailSerializer,
    AdminDashboardUserUpdateSerializer,
    AdminDashboardAuditLogSerializer,
)
from contact.models import ContactMessage
from transactions.models import Order

CustomUser = get_user_model()
logger = logging.getLogger(__name__)


# =====================================================
# HELPER FUNCTIONS
# =====================================================

def log_admin_action(admin, action, target_entity, target_id, reason=None, details=None):
    """Create audit log entry for admin action"""
    AdminAuditLog.objects.create(
        admin=admin,
        action=action,
        target_entity=target_entity,
        target_id=str(target_id),
        reason=reason,
        details=details or {}
    )
    logger.info(f"Admin {getattr(admin, 'email', None)} performed {action} on {target_entity}:{target_id}")


class AdminUserService:
    """Account mutations that must keep at least one administrator around"""

    @staticmethod
    def update_user(admin, user, data):
        make_admin = data.pop('is_admin', None)
        password = data.pop('password', None)

        with transaction.atomic():
            user = CustomUser.objects.select_for_update().get(pk=user.pk)

            if make_admin is False and user.is_last_admin():
                raise LastAdministratorException()
            if data.get('is_active') is False and user.is_last_admin():
                raise LastAdministratorException()

            for field, value in data.items():
                setattr(user, field, value)

            if make_admin is not None:
                user.role = CustomUser.Role.ADMIN if make_admin else CustomUser.Role.CUSTOMER
                user.is_staff = make_admin

            if password:
                user.set_password(password)

            user.save()

            changed = sorted(data.keys())
            if make_admin is not None:
                changed.append('role')
            if password:
                changed.append('password')
            log_admin_action(admin, 'update_user', 'User', user.uuid, details={'fields': changed})

        return user

    @staticmethod
    def delete_user(admin, user):
        with transaction.atomic():
            user = CustomUser.objects.select_for_update().get(pk=user.pk)

            if user.is_last_admin():
                logger.warning(f"Refused to delete last administrator {user.email}")
                raise LastAdministratorException()

            if Order.objects.filter(customer=user).exists():
                logger.warning(f"Refused to delete user {user.email} with existing orders")
                raise UserHasOrdersException()

            removed_messages, _ = ContactMessage.objects.filter(user=user).delete()
            email = user.email
            user_uuid = user.uuid
            user_pk = user.pk
            user.delete()

            log_admin_action(
                None if admin.pk == user_pk else admin,
                'delete_user',
                'User',
                user_uuid,
                details={'email': email, 'contact_messages_removed': removed_messages}
            )


# =====================================================
# USER MANAGEMENT VIEWS
# =====================================================

class AdminUserListView(BaseAPIView, generics.ListAPIView):
    """
    List all users.

    Query Parameters:
    - role: Filter by user role (ADMIN, CUSTOMER)
    - search: Search by email, first or last name
    """
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = AdminDashboardUserListSerializer
    pagination_class = AdminPagination
    filter_backends = []

    def get_queryset(self):
        queryset = CustomUser.objects.all()

        role_param = self.request.query_params.get('role')
        if role_param:
            queryset = queryset.filter(role=role_param.upper())

        search = self.request.query_params.get('search')
        if search:
            queryset = queryset.filter(
                Q(email__icontains=search) |
                Q(first_name__icontains=search) |
                Q(last_name__icontains=search)
            )

        return queryset.order_by('-created_at', '-id')

    @swagger_auto_schema(
        manual_parameters=[
            openapi.Parameter('role', openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=['ADMIN', 'CUSTOMER']),
            openapi.Parameter('search', openapi.IN_QUERY, type=openapi.TYPE_STRING),
        ]
    )
    def get(self, request, *args, **kwargs):
        return self.list(request, *args, **kwargs)


class AdminUserDetailView(BaseAPIView, generics.GenericAPIView):
    """Retrieve, update or delete a user"""
    permission_classes = [IsAuthenticated, IsAdmin]
    queryset = CustomUser.objects.all()
    lookup_field = 'uuid'

    def get_serializer_class(self):
        if self.request.method in ('PUT', 'PATCH'):
            return AdminDashboardUserUpdateSerializer
        return AdminDashboardUserDetailSerializer

    def get(self, request, uuid):
        user = self.get_object()
        return Response(standardized_response(data=AdminDashboardUserDetailSerializer(user).data))

    @swagger_auto_schema(request_body=AdminDashboardUserUpdateSerializer)
    def patch(self, request, uuid):
        user = self.get_object()
        serializer = AdminDashboardUserUpdateSerializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        user = AdminUserService.update_user(request.user, user, dict(serializer.validated_data))
        return Response(
            standardized_response(
                message=f"User {user.email} updated",
                data=AdminDashboardUserDetailSerializer(user).data
            )
        )

    put = patch

    def delete(self, request, uuid):
        user = self.get_object()
        AdminUserService.delete_user(request.user, user)
        return Response(
            standardized_response(message="User deleted"),
            status=status.HTTP_200_OK
        )


# =====================================================
# AUDIT LOG VIEW
# =====================================================

class AdminAuditLogView(BaseAPIView, generics.ListAPIView):
    """
    List admin audit logs (admin actions).

    Query Parameters:
    - admin_uuid: Filter by admin who performed action
    - action: Filter by action type
    - target_entity: Filter by entity type
    """
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = AdminDashboardAuditLogSerializer
    pagination_class = AdminPagination
    filter_backends = []

    def get_queryset(self):
        queryset = AdminAuditLog.objects.select_related('admin')

        admin_uuid = self.request.query_params.get('admin_uuid')
        if admin_uuid:
            queryset = queryset.filter(admin__uuid=admin_uuid)

        action = self.request.query_params.get('action')
        if action:
            queryset = queryset.filter(action=action)

        target_entity = self.request.query_params.get('target_entity')
        if target_entity:
            queryset = queryset.filter(target_entity=target_entity)

        return queryset.order_by('-created_at', '-id')
