from django.urls import path
from .views_admin import AdminContactMessageListView, AdminContactMessageReadView

urlpatterns = [
    # =====================================================
    # CONTACT MESSAGE ENDPOINTS
    # =====================================================
    path('messages/', AdminContactMessageListView.as_view(), name='message-list'),
    path('messages/<int:pk>/read/', AdminContactMessageReadView.as_view(), name='message-read'),
]
