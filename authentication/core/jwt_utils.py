import logging
import time
from datetime import timedelta

from django.conf import settings
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

logger = logging.getLogger(__name__)


class TokenManager:
    """JWT issuing/rotation on top of simplejwt, keyed by the user's UUID"""

    @staticmethod
    def generate_tokens(user):
        refresh = RefreshToken.for_user(user)
        refresh['email'] = user.email
        refresh['role'] = user.role

        access_token = refresh.access_token
        access_token['role'] = user.role

        access_expiry = settings.SIMPLE_JWT.get('ACCESS_TOKEN_LIFETIME', timedelta(minutes=15))
        refresh_expiry = settings.SIMPLE_JWT.get('REFRESH_TOKEN_LIFETIME', timedelta(days=14))

        return {
            'access_token': str(access_token),
            'refresh_token': str(refresh),
            'token_type': 'Bearer',
            'expires_in': int(access_expiry.total_seconds()),
            'refresh_expires_in': int(refresh_expiry.total_seconds()),
            'issued_at': int(time.time()),
        }

    @staticmethod
    def refresh_tokens(refresh_token):
        """Rotate a refresh token: blacklist the old one and issue a new pair."""
        from authentication.models import CustomUser

        token = RefreshToken(refresh_token)
        user_uuid = token.get(settings.SIMPLE_JWT.get('USER_ID_CLAIM', 'user_uuid'))

        try:
            user = CustomUser.objects.get(uuid=user_uuid)
        except CustomUser.DoesNotExist:
            logger.warning(f"Token refresh attempted for non-existent user UUID: {user_uuid}")
            raise TokenError("Invalid token")

        if not user.is_active:
            logger.warning(f"Token refresh attempted for inactive user: {user.email}")
            token.blacklist()
            raise TokenError("User is inactive")

        if settings.SIMPLE_JWT.get('ROTATE_REFRESH_TOKENS', True):
            token.blacklist()

        return TokenManager.generate_tokens(user)

    @staticmethod
    def blacklist(refresh_token):
        token = RefreshToken(refresh_token)
        token.blacklist()
        return token.get('jti')


def set_refresh_cookie(response, tokens):
    """Attach the refresh token as an http-only cookie when cookie auth is enabled."""
    if not settings.JWT_COOKIE_SECURE:
        return response

    refresh_token = tokens.get('refresh_token')
    refresh_expires_in = tokens.get('refresh_expires_in')
    if not refresh_token or not refresh_expires_in:
        return response

    response.set_cookie(
        key=settings.JWT_COOKIE_NAME,
        value=refresh_token,
        expires=timezone.now() + timedelta(seconds=float(refresh_expires_in)),
        secure=True,
        httponly=True,
        samesite='Strict',
        path='/',
        domain=settings.SESSION_COOKIE_DOMAIN,
    )
    return response


def delete_refresh_cookie(response):
    if settings.JWT_COOKIE_SECURE:
        response.delete_cookie(
            key=settings.JWT_COOKIE_NAME,
            path='/',
            domain=settings.JWT_COOKIE_DOMAIN,
        )
    return response
