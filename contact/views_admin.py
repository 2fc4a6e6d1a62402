from django.shortcuts import get_object_or_404
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import generics
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from authentication.core.base_view import BaseAPIView
from authentication.core.pagination import AdminPagination
from authentication.core.permissions import IsAdmin
from authentication.core.response import standardized_response
from authentication.views_admin import log_admin_action
from .models import ContactMessage
from .serializers import ContactMessageSerializer
from .services import MessageService


class AdminContactMessageListView(BaseAPIView, generics.ListAPIView):
    """
    Contact messages, newest first.

    Query Parameters:
    - unread: when "true", only unread messages
    """
    permission_classes = [IsAuthenticated, IsAdmin]
    serializer_class = ContactMessageSerializer
    pagination_class = AdminPagination
    filter_backends = []

    def get_queryset(self):
        queryset = ContactMessage.objects.select_related('user')
        if self.request.query_params.get('unread', '').lower() == 'true':
            queryset = queryset.filter(is_read=False)
        return queryset.order_by('-created_at', '-id')

    @swagger_auto_schema(
        manual_parameters=[openapi.Parameter('unread', openapi.IN_QUERY, type=openapi.TYPE_BOOLEAN)]
    )
    def get(self, request, *args, **kwargs):
        return self.list(request, *args, **kwargs)


class AdminContactMessageReadView(BaseAPIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(responses={200: ContactMessageSerializer})
    def post(self, request, pk):
        message = get_object_or_404(ContactMessage, pk=pk)
        MessageService.mark_read(message)
        log_admin_action(request.user, 'mark_message_read', 'ContactMessage', message.id)
        return Response(standardized_response(message="Message marked as read", data=ContactMessageSerializer(message).data))
