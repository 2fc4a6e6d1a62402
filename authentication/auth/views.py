import logging
from django.conf import settings

from rest_framework import status
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.throttling import AnonRateThrottle
from drf_yasg.utils import swagger_auto_schema

from authentication.core.base_view import BaseAPIView
from authentication.core.jwt_utils import set_refresh_cookie, delete_refresh_cookie
from authentication.core.response import standardized_response
from .services import AuthenticationService
from authentication.serializers import (
    UserBaseSerializer,
    UserRegistrationSerializer,
    UserLoginSerializer,
    TokenRefreshSerializer,
    AuthResponseSerializer
)

logger = logging.getLogger(__name__)


def _tokens_of(response_data):
    return response_data.get('data', {}).get('tokens', {})


class UserRegistrationView(BaseAPIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AnonRateThrottle]

    @swagger_auto_schema(
        request_body=UserRegistrationSerializer,
        responses={201: AuthResponseSerializer, 400: AuthResponseSerializer}
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        success, response_data, status_code = AuthenticationService.register(
            first_name=data['first_name'],
            last_name=data['last_name'],
            email=data['email'],
            password=data['password'],
            request_meta=request.META,
        )

        response = Response(standardized_response(**response_data), status=status_code)
        if success:
            set_refresh_cookie(response, _tokens_of(response_data))
        return response


class UserLoginView(BaseAPIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AnonRateThrottle]

    @swagger_auto_schema(
        request_body=UserLoginSerializer,
        responses={200: AuthResponseSerializer, 401: AuthResponseSerializer, 403: AuthResponseSerializer}
    )
    def post(self, request):
        serializer = UserLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        success, response_data, status_code = AuthenticationService.login(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
            request_meta=request.META,
        )

        response = Response(standardized_response(**response_data), status=status_code)
        if success:
            set_refresh_cookie(response, _tokens_of(response_data))
        return response


class TokenRefreshView(BaseAPIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [AnonRateThrottle]

    @swagger_auto_schema(
        request_body=TokenRefreshSerializer,
        responses={200: AuthResponseSerializer, 401: AuthResponseSerializer}
    )
    def post(self, request):
        refresh_token = request.data.get('refresh_token') or request.COOKIES.get(settings.JWT_COOKIE_NAME)

        success, response_data, status_code = AuthenticationService.refresh_token(refresh_token)

        response = Response(standardized_response(**response_data), status=status_code)
        if success:
            set_refresh_cookie(response, _tokens_of(response_data))
        else:
            delete_refresh_cookie(response)
        return response


class LogoutView(BaseAPIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        request_body=TokenRefreshSerializer,
        responses={200: AuthResponseSerializer}
    )
    def post(self, request):
        refresh_token = request.data.get('refresh_token') or request.COOKIES.get(settings.JWT_COOKIE_NAME)

        success, response_data, status_code = AuthenticationService.logout(request.user, refresh_token)

        response = Response(standardized_response(**response_data), status=status_code)
        delete_refresh_cookie(response)
        return response


class MeView(BaseAPIView):
    """Profile of the signed-in user"""
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(responses={200: UserBaseSerializer})
    def get(self, request):
        return Response(
            standardized_response(data=UserBaseSerializer(request.user).data),
            status=status.HTTP_200_OK
        )

    @swagger_auto_schema(request_body=UserBaseSerializer, responses={200: UserBaseSerializer})
    def patch(self, request):
        serializer = UserBaseSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info(f"Profile updated for user: {request.user.email}")
        return Response(
            standardized_response(message="Profile updated", data=serializer.data),
            status=status.HTTP_200_OK
        )
