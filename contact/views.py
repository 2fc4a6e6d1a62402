from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from authentication.core.base_view import BaseAPIView
from authentication.core.response import standardized_response
from .serializers import ContactMessageCreateSerializer, ContactMessageSerializer
from .services import MessageService


class ContactMessageCreateView(BaseAPIView):
    """
    Send a message to the shop. Signed-in users may omit the email, guests
    must provide one.
    """
    permission_classes = [AllowAny]
    throttle_classes = [AnonRateThrottle]

    @swagger_auto_schema(request_body=ContactMessageCreateSerializer, responses={201: ContactMessageSerializer})
    def post(self, request):
        serializer = ContactMessageCreateSerializer(data=request.data, context={'user': request.user})
        serializer.is_valid(raise_exception=True)

        message = MessageService.send(
            serializer.validated_data['email'],
            serializer.validated_data['content'],
            user=request.user,
        )
        return Response(
            standardized_response(message="Message sent", data=ContactMessageSerializer(message).data),
            status=status.HTTP_201_CREATED
        )
