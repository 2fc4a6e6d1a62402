import logging
from django.conf import settings
from django.core.cache import cache
from django.db import IntegrityError
from django.utils import timezone
from rest_framework_simplejwt.exceptions import TokenError

from authentication.serializers import UserBaseSerializer
from authentication.core.jwt_utils import TokenManager
from authentication.core.ip_utils import get_client_ip
from authentication.models import CustomUser

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def _failed_key(email):
    return f"failed_logins:{email}"


def _lockout_key(email):
    return f"account_lockout:{email}"


class AuthenticationService:
    """Service class to handle authentication-related business logic"""

    @staticmethod
    def register(first_name, last_name, email, password, request_meta=None):
        """Create a customer account and issue tokens for it"""
        if request_meta:
            ip = get_client_ip(request_meta)
            logger.info(f"Registration attempt from IP: {ip}")

        if CustomUser.objects.filter(email__iexact=email).exists():
            return False, {"success": False, "error": "A user with this email already exists"}, 400

        try:
            user = CustomUser.objects.create_user(
                email=email,
                password=password,
                first_name=first_name,
                last_name=last_name,
                role=CustomUser.Role.CUSTOMER,
            )
        except IntegrityError:
            logger.warning(f"Concurrent registration for email: {email}")
            return False, {"success": False, "error": "A user with this email already exists"}, 400

        tokens = TokenManager.generate_tokens(user)
        logger.info(f"Registration successful for user: {user.email}")

        return True, {
            "success": True,
            "message": "Registration successful",
            "data": {
                'user': UserBaseSerializer(user).data,
                'tokens': tokens,
                'is_new_user': True,
            }
        }, 201

    @staticmethod
    def login(email, password, request_meta=None):
        """
        Verify credentials and issue tokens.

        Unknown email and wrong password produce the same response.
        """
        if request_meta:
            ip = get_client_ip(request_meta)
            logger.info(f"Login attempt from IP: {ip}, User-agent: {request_meta.get('HTTP_USER_AGENT')}")

        if cache.get(_lockout_key(email)):
            logger.warning(f"Login attempt for locked account: {email}")
            return False, {
                "success": False,
                "error": "Account temporarily locked due to multiple failed attempts. Try again later.",
                "lockout": True,
            }, 403

        user = CustomUser.objects.filter(email__iexact=email).first()
        if user is None:
            # Run the hasher anyway so response time does not reveal unknown emails.
            CustomUser().set_password(password)
            logger.warning(f"Login attempt for non-existent email: {email}")
            return AuthenticationService._register_failure(email)

        if not user.check_password(password):
            logger.warning(f"Failed login attempt for email: {email}")
            return AuthenticationService._register_failure(email)

        if not user.is_active:
            logger.warning(f"Login attempt for disabled account: {email}")
            return False, {"success": False, "error": "Account is disabled. Please contact support."}, 403

        cache.delete(_failed_key(email))

        tokens = TokenManager.generate_tokens(user)
        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])

        logger.info(f"Login successful for user: {user.email}")
        return True, {
            "success": True,
            "message": "Login successful",
            "data": {
                'user': UserBaseSerializer(user).data,
                'tokens': tokens,
            }
        }, 200

    @staticmethod
    def _register_failure(email):
        failed_attempts = cache.get(_failed_key(email), 0) + 1
        cache.set(_failed_key(email), failed_attempts, timeout=settings.LOGIN_FAILURE_WINDOW_SECONDS)

        if failed_attempts >= settings.LOGIN_LOCKOUT_ATTEMPTS:
            cache.set(_lockout_key(email), True, timeout=settings.LOGIN_LOCKOUT_SECONDS)
            cache.delete(_failed_key(email))
            logger.warning(f"Account locked due to failed attempts: {email}")
            return False, {
                "success": False,
                "error": "Account temporarily locked due to multiple failed attempts. Try again later.",
                "lockout": True,
            }, 403

        return False, {"success": False, "error": INVALID_CREDENTIALS}, 401

    @staticmethod
    def refresh_token(refresh_token):
        """Refresh an authentication token"""
        if not refresh_token:
            return False, {"success": False, "error": "Refresh token is required"}, 400

        try:
            tokens = TokenManager.refresh_tokens(refresh_token)
        except TokenError as e:
            logger.warning(f"Token refresh error: {str(e)}")
            return False, {"success": False, "error": "Invalid or expired token"}, 401

        return True, {"success": True, "data": {'tokens': tokens}}, 200

    @staticmethod
    def logout(user, refresh_token=None):
        """Blacklist the refresh token, if one was presented"""
        blacklisted = 0
        if refresh_token:
            try:
                jti = TokenManager.blacklist(refresh_token)
                blacklisted = 1
                logger.info(f"Refresh token blacklisted during logout: {jti}")
            except TokenError as e:
                logger.warning(f"Error blacklisting refresh token during logout: {str(e)}")

        logger.info(f"User logged out: {user.pk} ({blacklisted} token(s) blacklisted)")
        return True, {
            "success": True,
            "message": "Successfully logged out",
            "data": {"tokens_blacklisted": blacklisted}
        }, 200
