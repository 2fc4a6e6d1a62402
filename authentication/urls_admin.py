"""
Admin panel URLs for accounts and the audit trail.

All routes require ADMIN authentication.
"""

from django.urls import path
from authentication.views_admin import (
    AdminUserListView,
    AdminUserDetailView,
    AdminAuditLogView,
)

urlpatterns = [
    # =====================================================
    # USER MANAGEMENT ENDPOINTS
    # =====================================================
    path('users/', AdminUserListView.as_view(), name='user-list'),
    path('users/<uuid:uuid>/', AdminUserDetailView.as_view(), name='user-detail'),

    # =====================================================
    # AUDIT LOG ENDPOINTS
    # =====================================================
    path('audit-logs/', AdminAuditLogView.as_view(), name='audit-logs'),
]
